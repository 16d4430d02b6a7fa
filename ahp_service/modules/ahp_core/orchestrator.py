"""
Orchestrator - Main coordinator for a full AHP evaluation

Coordinates the evaluation run:
1. Criteria weights + consistency gate
2. Alternative weights per criterion + consistency gate
3. Synthesis of the final ranking

The run stops at the first failure and exposes no partial result.
"""

import logging
import math
import time
from typing import Dict, List, Mapping, NamedTuple, Optional, Sequence

import numpy as np

from .consistency_gate import check_consistency, ensure_consistent
from .constants import CRITERIA_LABEL, PipelineStage, alternatives_label
from .exceptions import (
    AHPError,
    EmptyInputError,
    InvalidItemError,
    InvalidMatrixError,
    MissingComparisonsError,
)
from .matrix_builder import matrix_from_comparisons, matrix_size
from .priority_engine import PriorityEngine, PriorityResult
from .schemas import (
    EvaluationRequestSchema,
    EvaluationResponseSchema,
    PriorityRequestSchema,
    PriorityResponseSchema,
    RankedAlternativeSchema,
)
from .synthesizer import RankedAlternative, synthesize

logger = logging.getLogger(__name__)


class EvaluationResult(NamedTuple):
    """Everything computed by a successful evaluation run."""
    criteria_weights: Dict[str, float]
    criteria_consistency_ratio: float
    alternative_weights: Dict[str, Dict[str, float]]
    alternative_consistency_ratios: Dict[str, float]
    ranking: List[RankedAlternative]
    stage: PipelineStage = PipelineStage.SYNTHESIZED


class Orchestrator:
    """
    Orchestrates the complete AHP workflow.

    Workflow:
    1. Validate item sets (criteria and alternatives must not be empty)
    2. Compute criteria weights and gate their consistency
    3. Compute alternative weights for each criterion, in criteria order,
       and gate each one
    4. Synthesize and rank the alternatives
    """

    def __init__(self, consistency_threshold: Optional[float] = None):
        """Initialize orchestrator with its components."""
        if consistency_threshold is None:
            from ahp_service.config import settings
            consistency_threshold = settings.ahp_consistency_threshold

        self.consistency_threshold = consistency_threshold
        self.priority_engine = PriorityEngine()

    def evaluate(
        self,
        criteria: Sequence[str],
        alternatives: Sequence[str],
        criteria_matrix,
        alternative_matrices: Mapping[str, object],
    ) -> EvaluationResult:
        """
        Run the full AHP evaluation.

        Args:
            criteria: Ordered criterion names
            alternatives: Ordered alternative names
            criteria_matrix: Criteria pairwise comparison matrix
            alternative_matrices: Alternatives comparison matrix per criterion

        Returns:
            EvaluationResult with the ranked alternatives

        Raises:
            AHPError: First validation failure met; its `stage` is the last
                stage the run completed
        """
        stage = PipelineStage.IDLE

        logger.info(
            f"Starting AHP evaluation with {len(criteria)} criteria "
            f"and {len(alternatives)} alternatives"
        )

        try:
            self._require_items(criteria, alternatives)

            # ============================================================
            # CRITERIA LEVEL
            # ============================================================
            criteria_result = self._gated_priority(
                criteria_matrix, len(criteria), CRITERIA_LABEL
            )
            stage = PipelineStage.CRITERIA_VALIDATED
            logger.info(f"Criteria weights: {criteria_result.weights}")

            # ============================================================
            # ALTERNATIVES LEVEL (one matrix per criterion)
            # ============================================================
            alternative_results: Dict[str, PriorityResult] = {}
            for criterion in criteria:
                matrix = alternative_matrices.get(criterion)
                if matrix_size(matrix) == 0:
                    raise MissingComparisonsError(
                        f'Please make comparisons for alternatives under criterion: "{criterion}".',
                        details={"criterion": criterion},
                    )
                alternative_results[criterion] = self._gated_priority(
                    matrix, len(alternatives), alternatives_label(criterion)
                )
                stage = PipelineStage.PER_CRITERION_VALIDATED

            # ============================================================
            # SYNTHESIS
            # ============================================================
            ranking = synthesize(
                criteria_weights=criteria_result.weights,
                alternative_weights_by_criterion={
                    criterion: result.weights
                    for criterion, result in alternative_results.items()
                },
                alternatives=alternatives,
                criteria=criteria,
            )

        except AHPError as e:
            e.stage = stage
            logger.warning(f"AHP evaluation stopped at stage {stage.value}: {e.message}")
            raise

        logger.info(f"AHP evaluation complete: {len(ranking)} alternatives ranked")

        return EvaluationResult(
            criteria_weights=_by_name(criteria, criteria_result.weights),
            criteria_consistency_ratio=criteria_result.consistency_ratio,
            alternative_weights={
                criterion: _by_name(alternatives, result.weights)
                for criterion, result in alternative_results.items()
            },
            alternative_consistency_ratios={
                criterion: result.consistency_ratio
                for criterion, result in alternative_results.items()
            },
            ranking=ranking,
        )

    def rank_alternatives(self, request: EvaluationRequestSchema) -> EvaluationResponseSchema:
        """
        Evaluate a request expressed with named judgments.

        Args:
            request: Item sets, criteria judgments and per-criterion judgments

        Returns:
            EvaluationResponseSchema with the ranked alternatives
        """
        start_time = time.perf_counter()

        self._require_items(request.criteria, request.alternatives)

        unknown = [c for c in request.alternative_comparisons if c not in request.criteria]
        if unknown:
            raise InvalidItemError(
                f'Criterion "{unknown[0]}" does not exist.',
                details={"unknown_criteria": unknown},
            )

        criteria_matrix = matrix_from_comparisons(
            request.criteria,
            [comparison.as_tuple() for comparison in request.criteria_comparisons],
        )
        alternative_matrices = {
            criterion: matrix_from_comparisons(
                request.alternatives,
                [comparison.as_tuple() for comparison in comparisons],
            )
            for criterion, comparisons in request.alternative_comparisons.items()
        }

        result = self.evaluate(
            criteria=request.criteria,
            alternatives=request.alternatives,
            criteria_matrix=criteria_matrix,
            alternative_matrices=alternative_matrices,
        )

        processing_time_ms = (time.perf_counter() - start_time) * 1000

        return EvaluationResponseSchema(
            ranking=[
                RankedAlternativeSchema(rank=rank, name=item.name, score=item.score)
                for rank, item in enumerate(result.ranking, start=1)
            ],
            criteria_weights=result.criteria_weights,
            criteria_consistency_ratio=result.criteria_consistency_ratio,
            alternative_weights=result.alternative_weights,
            alternative_consistency_ratios=result.alternative_consistency_ratios,
            threshold=self.consistency_threshold,
            processing_time_ms=round(processing_time_ms, 3),
        )

    def priority(self, request: PriorityRequestSchema) -> PriorityResponseSchema:
        """
        Weights and consistency of a single matrix.

        Values that cannot be computed are reported as None.
        """
        n = len(request.matrix) if request.size is None else request.size
        result = self.priority_engine.compute_priority(request.matrix, n)

        cr = _finite_or_none(result.consistency_ratio)

        return PriorityResponseSchema(
            weights=[_finite_or_none(w) for w in result.weights],
            lambda_max=_finite_or_none(result.lambda_max),
            consistency_ratio=cr,
            is_consistent=None if cr is None else cr <= self.consistency_threshold,
            threshold=self.consistency_threshold,
        )

    @staticmethod
    def _require_items(criteria: Sequence[str], alternatives: Sequence[str]) -> None:
        if not criteria:
            raise EmptyInputError("Please add at least one criterion.")
        if not alternatives:
            raise EmptyInputError("Please add at least one alternative.")

    def _gated_priority(self, matrix, n: int, label: str) -> PriorityResult:
        """Compute a priority result and reject it if malformed or inconsistent."""
        result = self.priority_engine.compute_priority(matrix, n)

        if not result.is_valid:
            raise InvalidMatrixError(
                f"Comparison matrix for {label} must be {n}x{n}.",
                details={"comparison_set": label, "expected_size": n},
            )

        check = check_consistency(result, label, self.consistency_threshold)
        ensure_consistent(check)

        return result


def _by_name(names: Sequence[str], weights: np.ndarray) -> Dict[str, float]:
    return {name: float(weight) for name, weight in zip(names, weights)}


def _finite_or_none(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


# ============================================================
# DEPENDENCY INJECTION / FACTORY
# ============================================================

_orchestrator_instance: Optional[Orchestrator] = None


def get_orchestrator() -> Orchestrator:
    """
    Get singleton instance of Orchestrator.

    Used for dependency injection in FastAPI routes and the CLI.

    Returns:
        Orchestrator instance
    """
    global _orchestrator_instance

    if _orchestrator_instance is None:
        _orchestrator_instance = Orchestrator()
        logger.info("Orchestrator instance created")

    return _orchestrator_instance
