"""Decode -> resolve -> build pipeline for both input forms."""

import logging
from typing import Mapping, Optional

from signature_registry.registry import SignatureRegistry, default_registry

from .builder import MessageBuilder
from .decoder import CalldataDecoder
from .errors import MalformedInputError, MissingInputError, UnresolvedSelectorError
from .intents import IntentNormalizer
from .models import DecodedCall, TranslationContext, TranslationResult
from .resolver import MappingResolver

logger = logging.getLogger(__name__)


class TranslationEngine:
    """Stateless translation pipeline over a shared read-only registry."""

    def __init__(
        self,
        registry: Optional[SignatureRegistry] = None,
        builder: Optional[MessageBuilder] = None,
    ) -> None:
        self.registry = registry or default_registry()
        self.decoder = CalldataDecoder(self.registry.selectors)
        self.normalizer = IntentNormalizer(self.registry.selectors)
        self.resolver = MappingResolver(self.registry.selectors)
        self.builder = builder or MessageBuilder(self.registry)

    def translate_calldata(
        self, calldata: str, context: Optional[TranslationContext] = None
    ) -> TranslationResult:
        return self.translate_call(self.decoder.decode(calldata), context)

    def translate_intent(
        self,
        action: str,
        params: Optional[Mapping[str, object]] = None,
        context: Optional[TranslationContext] = None,
    ) -> TranslationResult:
        return self.translate_call(self.normalizer.normalize(action, params), context)

    def translate_call(
        self, call: DecodedCall, context: Optional[TranslationContext] = None
    ) -> TranslationResult:
        mapping = self.resolver.resolve(call)
        if mapping is None:
            raise UnresolvedSelectorError(f"Unknown selector {call.selector}", decoded_call=call)
        result = self.builder.build(call, mapping, context)
        logger.debug(
            "Translated %s into %d message(s) (%s)",
            result.source_signature,
            len(result.messages),
            result.match_type.value,
        )
        return result

    def translate_request(
        self,
        payload: Optional[Mapping[str, object]],
        context: Optional[Mapping[str, object]] = None,
    ) -> TranslationResult:
        """Translate a wire-shaped input: exactly one of calldata or action+params."""

        if not payload:
            raise MissingInputError("Input required.")
        translation_context = TranslationContext.from_dict(context)
        kind = payload.get("type")
        if kind is None:
            kind = "calldata" if "data" in payload or "calldata" in payload else "intent"

        if kind == "calldata":
            if "action" in payload:
                raise MalformedInputError("Provide either calldata or an action, not both.")
            calldata = payload.get("data", payload.get("calldata"))
            if not calldata:
                raise MissingInputError("Calldata required.")
            return self.translate_calldata(str(calldata), translation_context)
        if kind == "intent":
            if "data" in payload or "calldata" in payload:
                raise MalformedInputError("Provide either calldata or an action, not both.")
            params = payload.get("params") or {}
            if not isinstance(params, Mapping):
                raise MalformedInputError("Intent params must be an object.")
            return self.translate_intent(str(payload.get("action") or ""), params, translation_context)
        raise MalformedInputError("Use calldata or intent.")
