"""
API schemas shared by the service endpoints.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response for health check."""

    status: str
    timestamp: datetime
    services: Dict[str, bool]
    version: str


class ErrorResponse(BaseModel):
    """Standard error response for unhandled failures."""

    error: str
    detail: Optional[str] = None
