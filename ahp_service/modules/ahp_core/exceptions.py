"""
Validation errors raised by the AHP core.

Every error is recoverable: it carries a human-readable message for the
caller to surface and the engine stays usable afterwards.
"""

from typing import Any, Dict, Optional

from .constants import ErrorCode, PipelineStage


class AHPError(ValueError):
    """Base class for AHP validation failures."""

    error_code: ErrorCode = ErrorCode.INVALID_MATRIX

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        stage: PipelineStage = PipelineStage.IDLE,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.stage = stage

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code.value,
            "error_message": self.message,
            "details": self.details or None,
        }


class InvalidMatrixError(AHPError):
    """Matrix shape does not match the declared item count."""
    error_code = ErrorCode.INVALID_MATRIX


class InconsistentJudgmentsError(AHPError):
    """Consistency Ratio of a comparison set is above the threshold."""
    error_code = ErrorCode.INCONSISTENT_JUDGMENTS


class MissingComparisonsError(AHPError):
    """A criterion has no alternatives comparisons recorded."""
    error_code = ErrorCode.MISSING_COMPARISONS


class EmptyInputError(AHPError):
    """No criteria or no alternatives to evaluate."""
    error_code = ErrorCode.EMPTY_INPUT


class InvalidComparisonError(AHPError):
    """Judgment targets a derived position or is off the Saaty scale."""
    error_code = ErrorCode.INVALID_COMPARISON


class InvalidItemError(AHPError):
    """Item name is empty, duplicated or unknown."""
    error_code = ErrorCode.INVALID_ITEM
