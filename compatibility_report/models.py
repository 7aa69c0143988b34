"""Report schemas for compatibility scoring and migration estimates."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from signature_registry.selectors import build_signature
from translation_engine.errors import MalformedInputError


class PatternStatus(Enum):
    SUPPORTED = "SUPPORTED"
    PARTIAL = "PARTIAL"
    UNSUPPORTED = "UNSUPPORTED"
    UNKNOWN = "UNKNOWN"


class CompatibilityStatus(Enum):
    MOSTLY_COMPATIBLE = "MOSTLY_COMPATIBLE"
    PARTIALLY_COMPATIBLE = "PARTIALLY_COMPATIBLE"
    INCOMPATIBLE = "INCOMPATIBLE"


class FunctionStatus(Enum):
    SUPPORTED = "supported"
    PARTIAL = "partial"
    UNSUPPORTED = "unsupported"


class Feasibility(Enum):
    STRAIGHTFORWARD = "STRAIGHTFORWARD"
    MODERATE = "MODERATE"
    COMPLEX = "COMPLEX"
    REQUIRES_REDESIGN = "REQUIRES_REDESIGN"


@dataclass(frozen=True)
class PatternVerdict:
    pattern: str
    status: PatternStatus
    target_message_type: Union[str, Tuple[str, ...], None] = None
    confidence: Optional[float] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        target = self.target_message_type
        return {
            "pattern": self.pattern,
            "status": self.status.value,
            "target_message_type": list(target) if isinstance(target, tuple) else target,
            "confidence": self.confidence,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class CompatibilityReport:
    score: int
    status: CompatibilityStatus
    summary: str
    verdicts: Tuple[PatternVerdict, ...]
    recommendations: Tuple[str, ...]
    supported: int
    partial: int
    unsupported: int
    unknown: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "overall_compatibility": {
                "score": self.score,
                "status": self.status.value,
                "summary": self.summary,
            },
            "counts": {
                "supported": self.supported,
                "partial": self.partial,
                "unsupported": self.unsupported,
                "unknown": self.unknown,
            },
            "patterns": [verdict.to_dict() for verdict in self.verdicts],
            "recommendations": list(self.recommendations),
        }


@dataclass(frozen=True)
class FunctionShape:
    """One function of a described contract interface."""

    name: str
    input_types: Tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return build_signature(self.name, self.input_types)


def function_shapes_from_abi(abi: Iterable[Mapping[str, object]]) -> Tuple[FunctionShape, ...]:
    """Keep ``function`` entries of a JSON ABI; other kinds are ignored.

    Raises ``MalformedInputError`` when an entry or one of its inputs is not
    a JSON object, or when ``inputs`` is not a list.
    """

    shapes = []
    for position, item in enumerate(abi):
        if not isinstance(item, Mapping):
            raise MalformedInputError(f"ABI entry {position} must be an object.")
        if item.get("type", "function") != "function":
            continue
        inputs = item.get("inputs") or []
        if not isinstance(inputs, (list, tuple)):
            raise MalformedInputError(f"ABI entry {position} inputs must be a list.")
        input_types = []
        for entry in inputs:
            if not isinstance(entry, Mapping):
                raise MalformedInputError(f"ABI entry {position} inputs must be objects.")
            input_types.append(str(entry.get("type", "")))
        shapes.append(FunctionShape(name=str(item.get("name", "")), input_types=tuple(input_types)))
    return tuple(shapes)


@dataclass(frozen=True)
class FunctionAssessment:
    name: str
    signature: str
    status: FunctionStatus
    migration_path: str


@dataclass(frozen=True)
class MigrationPhase:
    phase: int
    name: str
    tasks: Tuple[str, ...]
    hours: int


@dataclass(frozen=True)
class Blocker:
    issue: str
    severity: str
    resolution: str
    functions: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MigrationEstimate:
    feasibility: Feasibility
    complexity: float
    hours_min: int
    hours_max: int
    feature_parity: int
    total: int
    supported: int
    partial: int
    unsupported: int
    functions: Tuple[FunctionAssessment, ...]
    phases: Tuple[MigrationPhase, ...]
    blockers: Tuple[Blocker, ...]

    def to_dict(self) -> Dict[str, object]:
        return {
            "summary": {
                "feasibility": self.feasibility.value,
                "complexity": self.complexity,
                "estimated_effort": {"hours": {"min": self.hours_min, "max": self.hours_max}},
                "feature_parity": self.feature_parity,
            },
            "analysis": {
                "functions": {
                    "total": self.total,
                    "supported": self.supported,
                    "partial": self.partial,
                    "unsupported": self.unsupported,
                    "details": [
                        {
                            "name": item.name,
                            "signature": item.signature,
                            "status": item.status.value,
                            "migration_path": item.migration_path,
                        }
                        for item in self.functions
                    ],
                }
            },
            "migration_plan": [
                {
                    "phase": phase.phase,
                    "name": phase.name,
                    "tasks": list(phase.tasks),
                    "hours": phase.hours,
                }
                for phase in self.phases
            ],
            "blockers": [
                {
                    "issue": blocker.issue,
                    "severity": blocker.severity,
                    "resolution": blocker.resolution,
                    "functions": list(blocker.functions),
                }
                for blocker in self.blockers
            ],
        }
