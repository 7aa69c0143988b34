"""Domain models for the EVM signature registry."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .selectors import derive_selector


class MatchType(Enum):
    DIRECT = "DIRECT"
    SEMANTIC = "SEMANTIC"
    COMPOSITE = "COMPOSITE"
    UNSUPPORTED = "UNSUPPORTED"


@dataclass(frozen=True)
class Parameter:
    name: str
    abi_type: str


@dataclass(frozen=True)
class MappingDescriptor:
    """How one EVM function maps onto Cosmos message types."""

    match_type: MatchType
    target_message_types: Tuple[str, ...]
    confidence: float
    notes: Optional[str] = None

    @property
    def supported(self) -> bool:
        return self.match_type != MatchType.UNSUPPORTED

    @property
    def target_message_type(self) -> Union[str, Tuple[str, ...], None]:
        if not self.target_message_types:
            return None
        if self.match_type == MatchType.COMPOSITE:
            return self.target_message_types
        return self.target_message_types[0]


@dataclass(frozen=True)
class SignatureEntry:
    name: str
    canonical_signature: str
    parameters: Tuple[Parameter, ...]
    category: str  # Advisory only: token, staking, swap, liquidity, flash
    mapping: MappingDescriptor

    @property
    def selector(self) -> str:
        return derive_selector(self.canonical_signature)

    @property
    def parameter_types(self) -> Tuple[str, ...]:
        return tuple(parameter.abi_type for parameter in self.parameters)

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(parameter.name for parameter in self.parameters)


@dataclass(frozen=True)
class MarketEntry:
    ticker: str
    market_id: str
    base_denom: str
    quote_denom: str


@dataclass(frozen=True)
class DenomEntry:
    token_address: str
    symbol: str
    denom: str
