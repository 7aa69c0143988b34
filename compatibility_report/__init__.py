from .estimator import MigrationEstimator
from .models import (
    Blocker,
    CompatibilityReport,
    CompatibilityStatus,
    Feasibility,
    FunctionAssessment,
    FunctionShape,
    FunctionStatus,
    MigrationEstimate,
    MigrationPhase,
    PatternStatus,
    PatternVerdict,
    function_shapes_from_abi,
)
from .scorer import CompatibilityScorer, patterns_from_abi

__all__ = [
    "Blocker",
    "CompatibilityReport",
    "CompatibilityScorer",
    "CompatibilityStatus",
    "Feasibility",
    "FunctionAssessment",
    "FunctionShape",
    "FunctionStatus",
    "MigrationEstimate",
    "MigrationEstimator",
    "MigrationPhase",
    "PatternStatus",
    "PatternVerdict",
    "function_shapes_from_abi",
    "patterns_from_abi",
]
