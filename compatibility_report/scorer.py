"""Score how well a set of EVM signatures maps onto Cosmos messages."""

import math
from typing import Iterable, Mapping, Optional, Tuple

from signature_registry.models import MatchType
from signature_registry.registry import SignatureRegistry, default_registry
from translation_engine.errors import MissingInputError

from .models import (
    CompatibilityReport,
    CompatibilityStatus,
    PatternStatus,
    PatternVerdict,
    function_shapes_from_abi,
)

# Categories that have no Cosmos counterpart even when the exact signature is uncatalogued.
UNSUPPORTED_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("flash", "Flash loans not supported"),
    ("liquidity", "AMM liquidity pools not supported"),
)

_MATCH_TO_STATUS = {
    MatchType.DIRECT: PatternStatus.SUPPORTED,
    MatchType.SEMANTIC: PatternStatus.PARTIAL,
    MatchType.COMPOSITE: PatternStatus.PARTIAL,
    MatchType.UNSUPPORTED: PatternStatus.UNSUPPORTED,
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def parity_percent(supported: int, partial: int, total: int) -> int:
    return round_half_up(100 * (supported + 0.5 * partial) / total)


def patterns_from_abi(abi: Iterable[Mapping[str, object]]) -> Tuple[str, ...]:
    return tuple(shape.signature for shape in function_shapes_from_abi(abi))


class CompatibilityScorer:
    def __init__(self, registry: Optional[SignatureRegistry] = None) -> None:
        self._registry = registry or default_registry()

    def classify(self, pattern: str) -> PatternVerdict:
        entry = self._registry.selectors.lookup_signature(pattern)
        if entry is not None:
            mapping = entry.mapping
            return PatternVerdict(
                pattern=pattern,
                status=_MATCH_TO_STATUS[mapping.match_type],
                target_message_type=mapping.target_message_type,
                confidence=mapping.confidence,
                notes=mapping.notes,
            )

        lowered = pattern.lower()
        for keyword, notes in UNSUPPORTED_KEYWORDS:
            if keyword in lowered:
                return PatternVerdict(pattern=pattern, status=PatternStatus.UNSUPPORTED, notes=notes)
        return PatternVerdict(pattern=pattern, status=PatternStatus.UNKNOWN, notes="Not in database")

    def score(self, patterns: Iterable[str]) -> CompatibilityReport:
        patterns = tuple(patterns)
        if not patterns:
            raise MissingInputError("Provide patterns or ABI.")

        verdicts = tuple(self.classify(pattern) for pattern in patterns)
        total = len(verdicts)
        supported = _count(verdicts, PatternStatus.SUPPORTED)
        partial = _count(verdicts, PatternStatus.PARTIAL)
        unsupported = _count(verdicts, PatternStatus.UNSUPPORTED)
        unknown = _count(verdicts, PatternStatus.UNKNOWN)
        score = parity_percent(supported, partial, total)

        recommendations = []
        if supported < total:
            recommendations.append("Some patterns need workarounds")
        if unsupported + unknown > 0:
            recommendations.append("Unsupported patterns require redesign")

        return CompatibilityReport(
            score=score,
            status=_status_band(score),
            summary=f"{supported}/{total} supported",
            verdicts=verdicts,
            recommendations=tuple(recommendations),
            supported=supported,
            partial=partial,
            unsupported=unsupported,
            unknown=unknown,
        )


def _count(verdicts: Tuple[PatternVerdict, ...], status: PatternStatus) -> int:
    return sum(1 for verdict in verdicts if verdict.status == status)


def _status_band(score: int) -> CompatibilityStatus:
    if score >= 80:
        return CompatibilityStatus.MOSTLY_COMPATIBLE
    if score >= 50:
        return CompatibilityStatus.PARTIALLY_COMPATIBLE
    return CompatibilityStatus.INCOMPATIBLE
