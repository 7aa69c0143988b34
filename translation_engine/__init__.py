from .builder import DEFAULT_RULES, MessageBuilder
from .decoder import CalldataDecoder
from .engine import TranslationEngine
from .errors import (
    DecodeFailureError,
    MalformedInputError,
    MissingInputError,
    MissingRequiredFieldError,
    NoBuilderError,
    TranslationError,
    UnknownIntentError,
    UnresolvedSelectorError,
    UnsupportedPatternError,
)
from .intents import INTENT_SIGNATURES, IntentNormalizer
from .models import DecodedCall, TranslationContext, TranslationResult
from .resolver import MappingResolver

__all__ = [
    "CalldataDecoder",
    "DEFAULT_RULES",
    "DecodeFailureError",
    "DecodedCall",
    "INTENT_SIGNATURES",
    "IntentNormalizer",
    "MalformedInputError",
    "MappingResolver",
    "MessageBuilder",
    "MissingInputError",
    "MissingRequiredFieldError",
    "NoBuilderError",
    "TranslationContext",
    "TranslationEngine",
    "TranslationError",
    "TranslationResult",
    "UnknownIntentError",
    "UnresolvedSelectorError",
    "UnsupportedPatternError",
]
