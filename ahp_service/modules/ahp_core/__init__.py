"""
AHP Core - Analytic Hierarchy Process engine

Derives weights from pairwise comparisons and ranks alternatives.

This module provides:
- Comparison matrix construction and resizing (Matrix Builder)
- Weights, λmax and Consistency Ratio (Priority Engine)
- CR <= 0.10 acceptability check (Consistency Gate)
- Weighted-sum synthesis of the final ranking (Synthesizer)
"""

from .consistency_gate import ConsistencyCheck, check_consistency
from .decision_model import DecisionModel
from .exceptions import (
    AHPError,
    EmptyInputError,
    InconsistentJudgmentsError,
    InvalidComparisonError,
    InvalidItemError,
    InvalidMatrixError,
    MissingComparisonsError,
)
from .matrix_builder import (
    matrix_from_comparisons,
    remove_item,
    resize,
    set_comparison,
)
from .orchestrator import EvaluationResult, Orchestrator, get_orchestrator
from .priority_engine import PriorityEngine, PriorityResult, compute_priority
from .schemas import (
    EvaluationRequestSchema,
    EvaluationResponseSchema,
    PriorityRequestSchema,
    PriorityResponseSchema,
)
from .synthesizer import RankedAlternative, synthesize

__all__ = [
    "AHPError",
    "ConsistencyCheck",
    "DecisionModel",
    "EmptyInputError",
    "EvaluationRequestSchema",
    "EvaluationResponseSchema",
    "EvaluationResult",
    "InconsistentJudgmentsError",
    "InvalidComparisonError",
    "InvalidItemError",
    "InvalidMatrixError",
    "MissingComparisonsError",
    "Orchestrator",
    "PriorityEngine",
    "PriorityRequestSchema",
    "PriorityResponseSchema",
    "PriorityResult",
    "RankedAlternative",
    "check_consistency",
    "compute_priority",
    "get_orchestrator",
    "matrix_from_comparisons",
    "remove_item",
    "resize",
    "set_comparison",
    "synthesize",
]
