from .models import DenomEntry, MappingDescriptor, MarketEntry, MatchType, Parameter, SignatureEntry
from .registry import (
    RegistryError,
    SelectorIndex,
    SignatureRegistry,
    StaticRegistry,
    build_registry,
    default_registry,
)
from .selectors import build_signature, derive_selector

__all__ = [
    "DenomEntry",
    "MappingDescriptor",
    "MarketEntry",
    "MatchType",
    "Parameter",
    "RegistryError",
    "SelectorIndex",
    "SignatureEntry",
    "SignatureRegistry",
    "StaticRegistry",
    "build_registry",
    "build_signature",
    "default_registry",
    "derive_selector",
]
