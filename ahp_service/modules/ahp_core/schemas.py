"""
Pydantic schemas for the AHP module (requests, responses, errors).
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .matrix_builder import is_scale_value


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ComparisonSchema(BaseModel):
    """One pairwise judgment: `first` is `value` times as important as `second`."""
    first: str = Field(..., min_length=1, description="Item placed in the row")
    second: str = Field(..., min_length=1, description="Item placed in the column")
    value: float = Field(..., gt=0, description="Saaty scale value (1-9) or its reciprocal")

    @field_validator("value")
    @classmethod
    def validate_scale(cls, v):
        """Only Saaty scale points and their reciprocals are accepted."""
        if not is_scale_value(v):
            raise ValueError("value must be on the Saaty 1-9 scale or its reciprocal")
        return v

    def as_tuple(self):
        return self.first, self.second, self.value


class PriorityRequestSchema(BaseModel):
    """Weights request for a single comparison matrix."""
    matrix: List[List[float]] = Field(..., description="Square pairwise comparison matrix")
    size: Optional[int] = Field(
        None,
        ge=0,
        description="Number of compared items (must equal the number of rows)"
    )

    @model_validator(mode="after")
    def validate_size(self):
        """A declared size must match the number of rows."""
        if self.size is not None and self.size != len(self.matrix):
            raise ValueError(
                f"size {self.size} does not match the {len(self.matrix)} rows of matrix"
            )
        return self

    model_config = {
        "json_schema_extra": {
            "example": {
                "matrix": [[1, 4, 2], [0.25, 1, 0.5], [0.5, 2, 1]],
            }
        }
    }


class PriorityResponseSchema(BaseModel):
    """Weights and consistency of one matrix. None means not computable."""
    weights: List[Optional[float]]
    lambda_max: Optional[float] = Field(None, description="Principal eigenvalue estimate")
    consistency_ratio: Optional[float] = Field(None, description="Consistency Ratio (CR)")
    is_consistent: Optional[bool] = Field(None, description="True if CR <= threshold")
    threshold: float


class EvaluationRequestSchema(BaseModel):
    """Full AHP problem: item sets and judgments."""
    criteria: List[str] = Field(default_factory=list)
    alternatives: List[str] = Field(default_factory=list)
    criteria_comparisons: List[ComparisonSchema] = Field(default_factory=list)
    alternative_comparisons: Dict[str, List[ComparisonSchema]] = Field(
        default_factory=dict,
        description=(
            "Judgments per criterion. A criterion missing from this mapping has "
            "no recorded comparisons; an empty list keeps every judgment at 1."
        ),
    )

    @field_validator("criteria", "alternatives")
    @classmethod
    def validate_item_names(cls, v):
        """Names are stripped and must be non-empty and unique."""
        names = [name.strip() for name in v]
        if any(not name for name in names):
            raise ValueError("item names cannot be empty")
        if len(set(names)) != len(names):
            raise ValueError("item names must be unique")
        return names

    model_config = {
        "json_schema_extra": {
            "example": {
                "criteria": ["Cost", "Quality"],
                "alternatives": ["A", "B"],
                "criteria_comparisons": [
                    {"first": "Cost", "second": "Quality", "value": 3}
                ],
                "alternative_comparisons": {
                    "Cost": [{"first": "A", "second": "B", "value": 2}],
                    "Quality": [{"first": "B", "second": "A", "value": 2}],
                },
            }
        }
    }


class RankedAlternativeSchema(BaseModel):
    """Ranked alternative with its score."""
    rank: int = Field(..., ge=1)
    name: str
    score: float = Field(..., ge=0)


class EvaluationResponseSchema(BaseModel):
    """Result of a successful AHP evaluation."""
    status: str = Field(default="success")
    timestamp: datetime = Field(default_factory=_utcnow)
    ranking: List[RankedAlternativeSchema]
    criteria_weights: Dict[str, float]
    criteria_consistency_ratio: float
    alternative_weights: Dict[str, Dict[str, float]]
    alternative_consistency_ratios: Dict[str, float]
    threshold: float
    processing_time_ms: float


class ScalePointSchema(BaseModel):
    """Saaty scale point."""
    value: int
    label: str


class ErrorResponseSchema(BaseModel):
    """Error response."""
    status: str = Field(default="error")
    timestamp: datetime = Field(default_factory=_utcnow)
    error_code: str
    error_message: str
    stage: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
