# Modules package
from .ahp_core import DecisionModel, Orchestrator

__all__ = [
    "DecisionModel",
    "Orchestrator",
]
