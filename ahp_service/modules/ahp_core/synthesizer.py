"""
Synthesizer - final AHP scores for the alternatives.

score(a_k) = Σ_c alternative_weights[c][k] × criteria_weights[c]
"""

import logging
from typing import List, Mapping, NamedTuple, Sequence

import numpy as np

from .exceptions import EmptyInputError, InvalidMatrixError, MissingComparisonsError

logger = logging.getLogger(__name__)


class RankedAlternative(NamedTuple):
    """An alternative with its synthesized score."""
    name: str
    score: float


def build_priority_matrix(
    alternative_weights_by_criterion: Mapping[str, Sequence[float]],
    alternatives: Sequence[str],
    criteria: Sequence[str],
) -> np.ndarray:
    """
    Stack per-criterion alternative weights into an (alternatives x criteria) matrix.

    Raises:
        MissingComparisonsError: If a criterion has no weight vector
        InvalidMatrixError: If a weight vector has the wrong length
    """
    n_alternatives = len(alternatives)
    priority_matrix = np.zeros((n_alternatives, len(criteria)))

    for column, criterion in enumerate(criteria):
        weights = alternative_weights_by_criterion.get(criterion)
        if weights is None or len(weights) == 0:
            raise MissingComparisonsError(
                f'Please make comparisons for alternatives under criterion: "{criterion}".',
                details={"criterion": criterion},
            )
        if len(weights) != n_alternatives:
            raise InvalidMatrixError(
                f'Alternative weights under "{criterion}" have {len(weights)} '
                f"entries, expected {n_alternatives}.",
                details={"criterion": criterion, "expected_size": n_alternatives},
            )
        priority_matrix[:, column] = weights

    return priority_matrix


def synthesize(
    criteria_weights: Sequence[float],
    alternative_weights_by_criterion: Mapping[str, Sequence[float]],
    alternatives: Sequence[str],
    criteria: Sequence[str],
) -> List[RankedAlternative]:
    """
    Combine criteria weights and per-criterion alternative weights.

    Args:
        criteria_weights: Weight of each criterion (criteria order)
        alternative_weights_by_criterion: Alternative weights keyed by criterion
        alternatives: Ordered alternative names
        criteria: Ordered criterion names

    Returns:
        Alternatives sorted by descending score (ties keep input order)
    """
    if not criteria:
        raise EmptyInputError("Please add at least one criterion.")
    if not alternatives:
        raise EmptyInputError("Please add at least one alternative.")
    if len(criteria_weights) != len(criteria):
        raise InvalidMatrixError(
            f"Criteria weights have {len(criteria_weights)} entries, "
            f"expected {len(criteria)}.",
            details={"expected_size": len(criteria)},
        )

    priority_matrix = build_priority_matrix(
        alternative_weights_by_criterion, alternatives, criteria
    )

    # Simple weighted sum
    scores = priority_matrix @ np.asarray(criteria_weights, dtype=float)

    results = [
        RankedAlternative(name=name, score=float(score))
        for name, score in zip(alternatives, scores)
    ]
    # sorted() is stable with reverse=True: equal scores keep their order
    ranked = sorted(results, key=lambda result: result.score, reverse=True)

    logger.info(f"Synthesized scores: {[(r.name, round(r.score, 4)) for r in ranked]}")

    return ranked
