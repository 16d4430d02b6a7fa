from fastapi import APIRouter

from .ahp import router as ahp_router
from .health import router as health_router

api_router = APIRouter()

api_router.include_router(
    ahp_router,
    prefix="/ahp",
    tags=["AHP"],
)

api_router.include_router(
    health_router,
    prefix="/health",
    tags=["Health"],
)
