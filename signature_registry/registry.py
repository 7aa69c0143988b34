"""Read-only registries built once from the declarative tables."""

from dataclasses import dataclass
from functools import lru_cache
import logging
from types import MappingProxyType
from typing import Callable, Generic, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar

from .models import DenomEntry, MarketEntry, MatchType, SignatureEntry
from .selectors import build_signature, derive_selector
from .tables import DEFAULT_MARKET_TICKER, DENOM_ENTRIES, MARKET_ENTRIES, SIGNATURE_ENTRIES

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RegistryError(ValueError):
    """Raised when a registry table violates its authoring invariants."""


class StaticRegistry(Generic[T]):
    """Immutable key -> entry table; duplicate keys are an authoring defect."""

    def __init__(self, entries: Iterable[T], key: Callable[[T], str]) -> None:
        table = {}
        for entry in entries:
            entry_key = key(entry)
            if entry_key in table:
                raise RegistryError(f"Duplicate registry key: {entry_key}")
            table[entry_key] = entry
        self._entries: Mapping[str, T] = MappingProxyType(table)

    def get(self, key: str) -> Optional[T]:
        return self._entries.get(key)

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def values(self) -> Tuple[T, ...]:
        return tuple(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class SelectorIndex(StaticRegistry[SignatureEntry]):
    """Selector -> SignatureEntry index derived from canonical signatures."""

    def __init__(self, entries: Iterable[SignatureEntry]) -> None:
        entries = tuple(entries)
        _validate_entries(entries)
        super().__init__(entries, key=lambda entry: entry.selector)
        logger.debug("Built selector index with %d entries", len(self))

    def lookup_signature(self, signature: str) -> Optional[SignatureEntry]:
        return self.get(derive_selector(signature))

    def by_name(self, name: str) -> Optional[SignatureEntry]:
        for entry in self.values():
            if entry.name == name:
                return entry
        return None


@dataclass(frozen=True)
class SignatureRegistry:
    selectors: SelectorIndex
    markets: StaticRegistry[MarketEntry]
    denoms: StaticRegistry[DenomEntry]
    default_market_ticker: str = DEFAULT_MARKET_TICKER

    @property
    def default_market(self) -> Optional[MarketEntry]:
        return self.markets.get(self.default_market_ticker)

    def denom_for_token(self, token_address: str) -> Optional[DenomEntry]:
        return self.denoms.get(token_address.lower())

    def market_for_denoms(self, denom_a: str, denom_b: str) -> Optional[MarketEntry]:
        for market in self.markets.values():
            if {market.base_denom, market.quote_denom} == {denom_a, denom_b}:
                return market
        return None


def build_registry(
    entries: Iterable[SignatureEntry] = SIGNATURE_ENTRIES,
    markets: Iterable[MarketEntry] = MARKET_ENTRIES,
    denoms: Iterable[DenomEntry] = DENOM_ENTRIES,
    default_market_ticker: str = DEFAULT_MARKET_TICKER,
) -> SignatureRegistry:
    market_registry = StaticRegistry(markets, key=lambda market: market.ticker)
    if default_market_ticker not in market_registry:
        raise RegistryError(f"Default market {default_market_ticker} is not registered.")
    return SignatureRegistry(
        selectors=SelectorIndex(entries),
        markets=market_registry,
        denoms=StaticRegistry(denoms, key=lambda denom: denom.token_address.lower()),
        default_market_ticker=default_market_ticker,
    )


@lru_cache(maxsize=None)
def default_registry() -> SignatureRegistry:
    """Process-wide registry, constructed on first use and never mutated."""

    return build_registry()


def _validate_entries(entries: Tuple[SignatureEntry, ...]) -> None:
    seen_signatures = set()
    for entry in entries:
        if entry.canonical_signature in seen_signatures:
            raise RegistryError(f"Duplicate canonical signature: {entry.canonical_signature}")
        seen_signatures.add(entry.canonical_signature)

        expected = build_signature(entry.name, entry.parameter_types)
        if entry.canonical_signature != expected:
            raise RegistryError(
                f"Signature {entry.canonical_signature} does not match parameter shape {expected}."
            )
        _validate_mapping(entry)


def _validate_mapping(entry: SignatureEntry) -> None:
    mapping = entry.mapping
    if not 0.0 <= mapping.confidence <= 1.0:
        raise RegistryError(f"{entry.name}: confidence must be within [0, 1].")

    unsupported = mapping.match_type == MatchType.UNSUPPORTED
    if unsupported != (mapping.confidence == 0.0):
        raise RegistryError(f"{entry.name}: confidence is 0 exactly when unsupported.")
    if unsupported != (not mapping.target_message_types):
        raise RegistryError(f"{entry.name}: unsupported mappings carry no target type.")
    if mapping.match_type in (MatchType.DIRECT, MatchType.SEMANTIC):
        if len(mapping.target_message_types) != 1:
            raise RegistryError(f"{entry.name}: {mapping.match_type.value} maps to one type.")
