r"""Parameter validation utilities.

This module provides validation functions for the retry, timeout and
task parameters to ensure they meet the required constraints before
being used by the engine.
"""

from __future__ import annotations

__all__ = ["validate_max_retries", "validate_task_timing", "validate_timeout"]


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for one attempt.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from arequest.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_max_retries(max_retries: int) -> None:
    """Validate the maximum number of retries.

    Args:
        max_retries: Maximum number of additional attempts. A value of 0
            means no retries.

    Raises:
        ValueError: If max_retries is negative.
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)


def validate_task_timing(due_time: float, repeat_times: int) -> None:
    """Validate the timing of a recurring task.

    A non-positive repeat interval is not validated here: it disables
    the recurring behavior instead.

    Args:
        due_time: Delay in seconds before the first cycle.
        repeat_times: Number of cycles, 0 for unbounded.

    Raises:
        ValueError: If any of the values is negative.
    """
    if due_time < 0:
        msg = f"due_time must be >= 0, got {due_time}"
        raise ValueError(msg)
    if repeat_times < 0:
        msg = f"repeat_times must be >= 0, got {repeat_times}"
        raise ValueError(msg)
