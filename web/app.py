"""FastAPI boundary for the EVM -> Injective translation layer."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Dict, List, Optional, Tuple, Type

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from compatibility_report.estimator import MigrationEstimator
from compatibility_report.models import function_shapes_from_abi
from compatibility_report.scorer import CompatibilityScorer, patterns_from_abi
from signature_registry.registry import RegistryError, default_registry
from translation_engine.builder import MessageBuilder
from translation_engine.engine import TranslationEngine
from translation_engine.errors import (
    DecodeFailureError,
    MalformedInputError,
    MissingInputError,
    MissingRequiredFieldError,
    NoBuilderError,
    UnknownIntentError,
    UnresolvedSelectorError,
    UnsupportedPatternError,
)

from .config import Settings

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

_ERROR_STATUS: Tuple[Tuple[Type[Exception], int], ...] = (
    (MalformedInputError, 400),
    (DecodeFailureError, 400),
    (UnknownIntentError, 400),
    (MissingInputError, 400),
    (MissingRequiredFieldError, 400),
    (UnsupportedPatternError, 422),
    (UnresolvedSelectorError, 422),
    (NoBuilderError, 500),
    (RegistryError, 500),
)


class TranslateRequest(BaseModel):
    input: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None


class CompatibilityRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    patterns: List[str] = Field(default_factory=list)
    contract_abi: List[Dict[str, Any]] = Field(default_factory=list, alias="contractAbi")


class EstimateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contract_abi: List[Dict[str, Any]] = Field(default_factory=list, alias="contractAbi")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    registry = default_registry()
    engine = TranslationEngine(
        registry,
        builder=MessageBuilder(registry, allow_placeholders=settings.allow_placeholders),
    )
    scorer = CompatibilityScorer(registry)
    estimator = MigrationEstimator(registry)

    app = FastAPI(title="Injective Compatibility Layer", version=API_VERSION)
    app.state.settings = settings

    @app.middleware("http")
    async def _limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length is not None and length.isdigit():
            too_large = int(length) > settings.max_body_bytes
        else:
            # Chunked bodies carry no length; read the body so it can be measured.
            too_large = len(await request.body()) > settings.max_body_bytes
        if too_large:
            return _error_response(413, "PAYLOAD_TOO_LARGE", "Request body too large.")
        return await call_next(request)

    async def _handle_errors(request: Request, exc: Exception):
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error("Internal translation defect on %s: %s", request.url.path, exc)
        return _error_response(status_code, getattr(exc, "code", "ERROR"), str(exc))

    for exc_class, _ in _ERROR_STATUS:
        app.add_exception_handler(exc_class, _handle_errors)

    @app.exception_handler(RequestValidationError)
    async def _handle_validation(request: Request, exc: RequestValidationError):
        return _error_response(400, MalformedInputError.code, "Request body does not match schema.")

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error_response(404, "NOT_FOUND", f"{request.method} {request.url.path} not found")
        return _error_response(exc.status_code, "ERROR", str(exc.detail))

    @app.get("/api/v1/health")
    async def health():
        return {
            "status": "healthy",
            "version": API_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.post("/api/v1/translate")
    async def translate(payload: TranslateRequest):
        if payload.input is None:
            raise MissingInputError("Input required.")
        result = engine.translate_request(payload.input, payload.context)
        return {"success": True, **result.to_dict()}

    @app.post("/api/v1/compatibility")
    async def compatibility(payload: CompatibilityRequest):
        patterns = list(payload.patterns) + list(patterns_from_abi(payload.contract_abi))
        report = scorer.score(patterns)
        return {"success": True, **report.to_dict()}

    @app.post("/api/v1/migrate/estimate")
    async def migrate_estimate(payload: EstimateRequest):
        estimate = estimator.estimate(function_shapes_from_abi(payload.contract_abi))
        return {"success": True, **estimate.to_dict()}

    return app


def _status_for(exc: Exception) -> int:
    for exc_class, status_code in _ERROR_STATUS:
        if isinstance(exc, exc_class):
            return status_code
    return 500


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        {"success": False, "error": {"code": code, "message": message}},
        status_code=status_code,
    )


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


_SETTINGS = Settings.from_env()
_configure_logging(_SETTINGS)
app = create_app(_SETTINGS)
