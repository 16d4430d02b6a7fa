"""
Constants for the AHP core (Saaty scale, Random Index, thresholds).
"""

from enum import Enum
from typing import Dict


# Saaty Scale for AHP (1-9 scale)
SAATY_SCALE: Dict[int, str] = {
    1: "Equally Important",
    2: "Equally to Moderately Important",
    3: "Moderately Important",
    4: "Moderately to Strongly Important",
    5: "Strongly Important",
    6: "Strongly to Very Strongly Important",
    7: "Very Strongly Important",
    8: "Very Strongly to Extremely Important",
    9: "Extremely Important",
}

# Random Index (RI) for AHP consistency check (Saaty, 1980)
# n: number of compared items
RANDOM_INDEX: Dict[int, float] = {
    1: 0.00,
    2: 0.00,
    3: 0.58,
    4: 0.90,
    5: 1.12,
    6: 1.24,
    7: 1.32,
    8: 1.41,
    9: 1.45,
    10: 1.49,
}

MAX_RANDOM_INDEX_SIZE = max(RANDOM_INDEX)

# AHP Consistency Ratio threshold
AHP_CONSISTENCY_THRESHOLD = 0.10  # CR <= 0.10 is acceptable

# Default judgment for every new comparison ("Equally Important")
DEFAULT_JUDGMENT = 1.0

# Tolerance used when matching a judgment value to a scale point
SCALE_TOLERANCE = 1e-9

CRITERIA_LABEL = "Criteria"


def alternatives_label(criterion: str) -> str:
    """Label of the alternatives comparison set owned by a criterion."""
    return f'Alternatives under "{criterion}"'


class PipelineStage(str, Enum):
    """Stages reached by a full AHP evaluation run."""
    IDLE = "idle"
    CRITERIA_VALIDATED = "criteria_validated"
    PER_CRITERION_VALIDATED = "per_criterion_validated"
    SYNTHESIZED = "synthesized"


class ErrorCode(str, Enum):
    """Machine-readable codes for AHP validation failures."""
    INVALID_MATRIX = "invalid_matrix"
    INCONSISTENT_JUDGMENTS = "inconsistent_judgments"
    MISSING_COMPARISONS = "missing_comparisons"
    EMPTY_INPUT = "empty_input"
    INVALID_COMPARISON = "invalid_comparison"
    INVALID_ITEM = "invalid_item"
