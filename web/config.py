"""Environment-derived settings for the HTTP adapter."""

from dataclasses import dataclass
import os
from typing import Mapping, Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    max_body_bytes: int = 1024 * 1024
    allow_placeholders: bool = False

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        max_body = env.get("BRIDGE_MAX_BODY_BYTES", "")
        try:
            max_body_bytes = int(max_body) if max_body else Settings.max_body_bytes
        except ValueError as exc:
            raise ValueError("BRIDGE_MAX_BODY_BYTES must be an integer.") from exc
        if max_body_bytes <= 0:
            raise ValueError("BRIDGE_MAX_BODY_BYTES must be positive.")
        return Settings(
            log_level=env.get("BRIDGE_LOG_LEVEL", Settings.log_level).upper(),
            max_body_bytes=max_body_bytes,
            allow_placeholders=env.get("BRIDGE_ALLOW_PLACEHOLDERS", "").strip().lower() in _TRUE_VALUES,
        )
