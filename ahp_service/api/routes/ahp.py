"""
AHP API endpoints.

Stateless evaluation service: every request carries the full decision
problem and the engine recomputes everything from it.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ahp_service.api.dependencies import get_orchestrator_dep
from ahp_service.modules.ahp_core import (
    AHPError,
    EvaluationRequestSchema,
    EvaluationResponseSchema,
    Orchestrator,
    PriorityRequestSchema,
    PriorityResponseSchema,
)
from ahp_service.modules.ahp_core.constants import SAATY_SCALE
from ahp_service.modules.ahp_core.schemas import ErrorResponseSchema, ScalePointSchema

logger = logging.getLogger(__name__)
router = APIRouter()


def _validation_error(e: AHPError) -> HTTPException:
    """Map an AHP validation failure to a 422 response."""
    error = ErrorResponseSchema(
        error_code=e.error_code.value,
        error_message=e.message,
        stage=e.stage.value,
        details=e.details or None,
    )
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=error.model_dump(mode="json"),
    )


@router.post(
    "/evaluate",
    response_model=EvaluationResponseSchema,
    responses={
        200: {"description": "Alternatives ranked"},
        422: {"model": ErrorResponseSchema, "description": "Invalid or inconsistent judgments"},
    },
    summary="Rank alternatives with AHP",
    description="""
    Runs the full Analytic Hierarchy Process on the submitted problem.

    **Process:**
    1. Criteria weights from the criteria comparisons (CR must be <= 0.10)
    2. Alternative weights under each criterion (CR must be <= 0.10)
    3. Weighted-sum synthesis, sorted by descending score

    The run stops at the first inconsistent comparison set and reports it.
    """,
)
async def evaluate(
    request: EvaluationRequestSchema,
    orchestrator: Orchestrator = Depends(get_orchestrator_dep),
) -> EvaluationResponseSchema:
    """Rank the alternatives of a decision problem."""
    logger.info(
        f"Evaluation request with {len(request.criteria)} criteria "
        f"and {len(request.alternatives)} alternatives"
    )

    try:
        return orchestrator.rank_alternatives(request)
    except AHPError as e:
        logger.warning(f"Evaluation rejected ({e.error_code.value}): {e.message}")
        raise _validation_error(e)


@router.post(
    "/priority",
    response_model=PriorityResponseSchema,
    summary="Weights and consistency of one matrix",
    description="Computes weights, λmax and the Consistency Ratio of a single comparison matrix. "
                "Values that cannot be computed (malformed matrix, no items) are null.",
)
async def priority(
    request: PriorityRequestSchema,
    orchestrator: Orchestrator = Depends(get_orchestrator_dep),
) -> PriorityResponseSchema:
    """Compute the priority vector of one matrix."""
    return orchestrator.priority(request)


@router.get(
    "/scale",
    response_model=List[ScalePointSchema],
    summary="Saaty 1-9 scale",
)
async def scale():
    """List the judgment values accepted by the service."""
    return [ScalePointSchema(value=value, label=label) for value, label in SAATY_SCALE.items()]
