"""Utility modules."""

from .context import (
    get_correlation_id,
    set_correlation_id,
    generate_correlation_id,
    clear_correlation_id,
    correlation_id_var,
)

__all__ = [
    "get_correlation_id",
    "set_correlation_id",
    "generate_correlation_id",
    "clear_correlation_id",
    "correlation_id_var",
]
