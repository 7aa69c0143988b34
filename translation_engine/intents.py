"""Normalize named actions into the decoded-call shape."""

from types import MappingProxyType
from typing import Mapping, Optional

from signature_registry.registry import SelectorIndex
from signature_registry.selectors import derive_selector

from .decoder import stringify_value
from .errors import MissingInputError, UnknownIntentError
from .models import DecodedCall

INTENT_SIGNATURES: Mapping[str, str] = MappingProxyType(
    {
        "transfer": "transfer(address,uint256)",
        "approve": "approve(address,uint256)",
        "swap": "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)",
        "stake": "stake(uint256)",
        "unstake": "withdraw(uint256)",
        "claim": "getReward()",
    }
)


class IntentNormalizer:
    def __init__(self, index: SelectorIndex) -> None:
        self._index = index
        self._selectors = {
            action: derive_selector(signature) for action, signature in INTENT_SIGNATURES.items()
        }

    def normalize(self, action: str, params: Optional[Mapping[str, object]] = None) -> DecodedCall:
        if not action:
            raise MissingInputError("Intent action is required.")
        selector = self._selectors.get(action)
        if selector is None:
            raise UnknownIntentError(f"Unknown intent action: {action}")

        entry = self._index.get(selector)
        if entry is None:
            return DecodedCall(selector=selector, resolved=False)

        parameters = tuple((str(name), stringify_value(value)) for name, value in (params or {}).items())
        return DecodedCall(
            selector=selector,
            parameters=parameters,
            resolved=True,
            function_name=entry.name,
            signature=entry.canonical_signature,
            category=entry.category,
        )
