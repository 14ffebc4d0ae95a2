r"""Utility functions for the request engine."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "is_blank",
    "log_structured",
    "set_correlation_id",
]

from arequest.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
from arequest.utils.text import is_blank
