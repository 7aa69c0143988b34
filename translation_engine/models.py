"""Domain models for calldata translation."""

from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional, Tuple

from signature_registry.models import MatchType

from .errors import MalformedInputError


@dataclass(frozen=True)
class DecodedCall:
    """Normalized call, whether it came from calldata or a named intent."""

    selector: str
    parameters: Tuple[Tuple[str, str], ...] = ()
    resolved: bool = True
    function_name: Optional[str] = None
    signature: Optional[str] = None
    category: Optional[str] = None

    def parameter(self, name: str) -> Optional[str]:
        for key, value in self.parameters:
            if key == name:
                return value
        return None

    def to_dict(self) -> Dict[str, object]:
        return {
            "selector": self.selector,
            "function_name": self.function_name,
            "signature": self.signature,
            "category": self.category,
            "parameters": [{"name": key, "value": value} for key, value in self.parameters],
            "resolved": self.resolved,
        }


_CONTEXT_ALIASES: Dict[str, str] = {
    "senderAddress": "sender_address",
    "recipientAddress": "recipient_address",
    "validator": "validator_address",
    "validatorAddress": "validator_address",
    "spenderAddress": "spender_address",
    "ownerAddress": "owner_address",
    "denom": "denom",
    "ethValue": "eth_value",
    "marketId": "market_id",
}


@dataclass(frozen=True)
class TranslationContext:
    """Caller-supplied overrides; never mutated by the builder."""

    sender_address: Optional[str] = None
    recipient_address: Optional[str] = None
    validator_address: Optional[str] = None
    spender_address: Optional[str] = None
    owner_address: Optional[str] = None
    denom: Optional[str] = None
    eth_value: Optional[str] = None
    market_id: Optional[str] = None

    @staticmethod
    def from_dict(data: Optional[Mapping[str, object]]) -> "TranslationContext":
        if not data:
            return TranslationContext()
        known = {item.name for item in fields(TranslationContext)}
        values: Dict[str, str] = {}
        for key, value in data.items():
            name = _CONTEXT_ALIASES.get(key, key)
            if name not in known:
                raise MalformedInputError(f"Unknown context field: {key}")
            if value is not None:
                values[name] = str(value)
        return TranslationContext(**values)


@dataclass(frozen=True)
class TranslationResult:
    messages: Tuple[Dict[str, object], ...]
    explanation: str
    confidence: float
    match_type: MatchType
    warnings: Tuple[str, ...]
    source_signature: str
    selector: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "translation": {
                "messages": list(self.messages),
                "explanation": self.explanation,
            },
            "metadata": {
                "confidence": self.confidence,
                "match_type": self.match_type.value,
                "warnings": list(self.warnings),
                "source_signature": self.source_signature,
                "selector": self.selector,
            },
        }
