"""
Consistency Gate - acceptability check on the Consistency Ratio.
"""

import logging
import math
from typing import NamedTuple, Optional

from .constants import AHP_CONSISTENCY_THRESHOLD
from .exceptions import InconsistentJudgmentsError
from .priority_engine import PriorityResult

logger = logging.getLogger(__name__)


class ConsistencyCheck(NamedTuple):
    """Outcome of the consistency gate for one comparison set."""
    accepted: bool
    consistency_ratio: float
    label: str
    message: Optional[str] = None


def check_consistency(
    result: PriorityResult,
    label: str,
    threshold: float = AHP_CONSISTENCY_THRESHOLD,
) -> ConsistencyCheck:
    """
    Accept or reject a priority result.

    A matrix is rejected when CR > threshold or when CR is not a number.

    Args:
        result: Output of the Priority Engine
        label: Name of the comparison set (e.g. 'Criteria')
        threshold: Maximum acceptable Consistency Ratio

    Returns:
        ConsistencyCheck with a human-readable message when rejected
    """
    cr = result.consistency_ratio

    if not math.isfinite(cr):
        logger.warning(f"{label} matrix has no computable Consistency Ratio")
        return ConsistencyCheck(
            False, cr, label,
            f"Consistency Ratio for {label} cannot be computed. Please check the comparisons.",
        )

    if cr > threshold:
        message = (
            f"Consistency Ratio for {label} is {cr:.2f}. This is considered "
            f"inconsistent. Please revise your comparisons."
        )
        logger.warning(
            f"{label} matrix is NOT consistent (CR={cr:.4f} > {threshold})"
        )
        return ConsistencyCheck(False, cr, label, message)

    logger.info(f"{label} matrix accepted (CR={cr:.4f}, threshold={threshold})")
    return ConsistencyCheck(True, cr, label)


def ensure_consistent(check: ConsistencyCheck, **error_kwargs) -> None:
    """
    Raise if a consistency check was rejected.

    Raises:
        InconsistentJudgmentsError: With the check's message
    """
    if not check.accepted:
        raise InconsistentJudgmentsError(
            check.message,
            details={
                "comparison_set": check.label,
                "consistency_ratio": (
                    round(check.consistency_ratio, 4)
                    if math.isfinite(check.consistency_ratio)
                    else None
                ),
            },
            **error_kwargs,
        )
