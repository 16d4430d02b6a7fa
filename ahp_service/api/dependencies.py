"""
FastAPI dependencies for dependency injection.
"""

from ahp_service.modules.ahp_core import Orchestrator, get_orchestrator


def get_orchestrator_dep() -> Orchestrator:
    """Dependency for orchestrator."""
    return get_orchestrator()
