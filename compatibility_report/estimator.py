"""Estimate the effort of moving an EVM contract interface to Injective."""

import math
from typing import Iterable, Optional, Tuple

from signature_registry.models import MatchType, SignatureEntry
from signature_registry.registry import SignatureRegistry, default_registry
from translation_engine.errors import MissingInputError

from .models import (
    Blocker,
    Feasibility,
    FunctionAssessment,
    FunctionShape,
    FunctionStatus,
    MigrationEstimate,
    MigrationPhase,
)
from .scorer import parity_percent, round_half_up

_STATUS_WEIGHTS = {
    FunctionStatus.SUPPORTED: 1,
    FunctionStatus.PARTIAL: 2,
    FunctionStatus.UNSUPPORTED: 4,
}

# (upper complexity bound, band, base min hours, base max hours)
_EFFORT_BANDS: Tuple[Tuple[float, Feasibility, int, int], ...] = (
    (1.5, Feasibility.STRAIGHTFORWARD, 8, 24),
    (2.5, Feasibility.MODERATE, 24, 80),
    (3.5, Feasibility.COMPLEX, 80, 200),
    (math.inf, Feasibility.REQUIRES_REDESIGN, 200, 500),
)

_PHASES: Tuple[Tuple[str, Tuple[str, ...], float], ...] = (
    ("Core Logic", ("Setup CosmWasm", "Migrate state", "Basic handlers"), 0.40),
    ("Integration", ("Exchange module", "Queries", "Access control"), 0.35),
    ("Testing", ("Unit tests", "Testnet deploy", "Mainnet"), 0.25),
)


class MigrationEstimator:
    def __init__(self, registry: Optional[SignatureRegistry] = None) -> None:
        self._registry = registry or default_registry()

    def assess(self, shape: FunctionShape) -> FunctionAssessment:
        signature = shape.signature
        entry = self._registry.selectors.lookup_signature(signature)
        status, path = _classify(entry)
        return FunctionAssessment(
            name=shape.name,
            signature=signature,
            status=status,
            migration_path=path,
        )

    def estimate(self, shapes: Iterable[FunctionShape]) -> MigrationEstimate:
        shapes = tuple(shapes)
        if not shapes:
            raise MissingInputError("Provide contractAbi.")

        functions = tuple(self.assess(shape) for shape in shapes)
        total = len(functions)
        supported = _count(functions, FunctionStatus.SUPPORTED)
        partial = _count(functions, FunctionStatus.PARTIAL)
        unsupported = _count(functions, FunctionStatus.UNSUPPORTED)

        complexity = sum(_STATUS_WEIGHTS[item.status] for item in functions) / total
        feasibility, base_min, base_max = _effort_band(complexity)
        scale = max(1.0, math.log2(total + 1))
        hours_min = round_half_up(base_min * scale)
        hours_max = round_half_up(base_max * scale)

        phases = tuple(
            MigrationPhase(
                phase=index,
                name=name,
                tasks=tasks,
                hours=round_half_up(hours_min * share),
            )
            for index, (name, tasks, share) in enumerate(_PHASES, start=1)
        )

        blockers: Tuple[Blocker, ...] = ()
        if unsupported > 0:
            blockers = (
                Blocker(
                    issue="Unsupported patterns",
                    severity="HIGH",
                    resolution="Redesign or remove",
                    functions=tuple(
                        item.signature
                        for item in functions
                        if item.status == FunctionStatus.UNSUPPORTED
                    ),
                ),
            )

        return MigrationEstimate(
            feasibility=feasibility,
            complexity=complexity,
            hours_min=hours_min,
            hours_max=hours_max,
            feature_parity=parity_percent(supported, partial, total),
            total=total,
            supported=supported,
            partial=partial,
            unsupported=unsupported,
            functions=functions,
            phases=phases,
            blockers=blockers,
        )


def _classify(entry: Optional[SignatureEntry]) -> Tuple[FunctionStatus, str]:
    if entry is None or entry.mapping.match_type == MatchType.UNSUPPORTED:
        return FunctionStatus.UNSUPPORTED, "Requires redesign"
    path = " -> ".join(entry.mapping.target_message_types)
    if entry.mapping.match_type == MatchType.DIRECT:
        return FunctionStatus.SUPPORTED, path
    return FunctionStatus.PARTIAL, path


def _effort_band(complexity: float) -> Tuple[Feasibility, int, int]:
    for upper, feasibility, base_min, base_max in _EFFORT_BANDS:
        if complexity < upper:
            return feasibility, base_min, base_max
    raise ValueError("Complexity must be finite.")


def _count(functions: Tuple[FunctionAssessment, ...], status: FunctionStatus) -> int:
    return sum(1 for item in functions if item.status == status)
