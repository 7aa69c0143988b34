"""Exact selector lookup of a decoded call's mapping descriptor."""

from typing import Optional

from signature_registry.models import MappingDescriptor
from signature_registry.registry import SelectorIndex

from .models import DecodedCall


class MappingResolver:
    def __init__(self, index: SelectorIndex) -> None:
        self._index = index

    def resolve(self, call: DecodedCall) -> Optional[MappingDescriptor]:
        """Return the registered mapping, or None when the call is unresolved."""

        if not call.resolved:
            return None
        entry = self._index.get(call.selector)
        if entry is None:
            return None
        return entry.mapping
