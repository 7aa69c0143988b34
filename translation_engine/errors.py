"""Failure kinds raised by the translation and reporting operations."""

from typing import Optional


class TranslationError(ValueError):
    """Base class for caller-recoverable translation failures."""

    code = "TRANSLATION_ERROR"


class MalformedInputError(TranslationError):
    """Raised when an encoded call or request shape is structurally invalid."""

    code = "MALFORMED_INPUT"


class DecodeFailureError(TranslationError):
    """Raised when calldata does not decode against the registered shape."""

    code = "DECODE_FAILED"


class UnknownIntentError(TranslationError):
    """Raised when a named action is not in the intent table."""

    code = "UNKNOWN_INTENT"


class UnresolvedSelectorError(TranslationError):
    """Raised when a decoded call has no registry entry to translate from."""

    code = "UNRESOLVED_SELECTOR"

    def __init__(self, message: str, decoded_call: Optional[object] = None) -> None:
        super().__init__(message)
        self.decoded_call = decoded_call


class UnsupportedPatternError(TranslationError):
    """Raised when the registry marks a function as having no Cosmos equivalent."""

    code = "UNSUPPORTED_PATTERN"


class MissingInputError(TranslationError):
    """Raised when a required top-level input is absent or empty."""

    code = "MISSING_INPUT"


class MissingRequiredFieldError(TranslationError):
    """Raised when a message field cannot be resolved and placeholders are off."""

    code = "MISSING_REQUIRED_FIELD"

    def __init__(self, field: str, function_name: str) -> None:
        super().__init__(f"{function_name}: no value for required field '{field}'.")
        self.field = field
        self.function_name = function_name


class NoBuilderError(RuntimeError):
    """Raised when a supported registry entry has no construction rule."""

    code = "NO_BUILDER"
