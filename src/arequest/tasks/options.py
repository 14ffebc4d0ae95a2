r"""Options of recurring asynchronous requests.

The rate-limiting rule of a task is one of a closed set of variants:
``RateLimitByPercent`` or ``RateLimitByPredicate``.
"""

from __future__ import annotations

__all__ = ["RateLimit", "RateLimitByPercent", "RateLimitByPredicate", "TaskOptions"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from arequest.core.validation import validate_task_timing

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class RateLimitByPercent:
    """Run only a percentage of the scheduled cycles.

    Attributes:
        percent: The percentage of cycles to run, in ``[0, 100]``.
    """

    percent: float

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            msg = f"percent must be between 0 and 100, got {self.percent}"
            raise ValueError(msg)


@dataclass(frozen=True)
class RateLimitByPredicate:
    """Skip the cycles for which a predicate holds.

    Attributes:
        predicate: Called before each cycle with the current rate limit
            status; returning ``True`` skips the cycle.
        get_rate_limit_status: Optional provider of the status passed to
            the predicate. ``None`` is passed without a provider.
    """

    predicate: Callable[[Any], bool]
    get_rate_limit_status: Callable[[], Any] | None = None


RateLimit = Union[RateLimitByPercent, RateLimitByPredicate]


@dataclass(frozen=True)
class TaskOptions:
    """Options of a recurring asynchronous request.

    Attributes:
        due_time: The delay in seconds before the first cycle.
        repeat_interval: The delay in seconds between two cycles. The
            request recurs only when it is strictly positive.
        repeat_times: The number of cycles, 0 for unbounded.
        continue_on_error: ``False`` stops the task on the first failing
            cycle.
        rate_limit: The optional rate-limiting rule.

    Example:
        ```pycon
        >>> from arequest.tasks import RateLimitByPercent, TaskOptions
        >>> options = TaskOptions(repeat_interval=60.0, rate_limit=RateLimitByPercent(50))
        >>> options.is_recurring
        True

        ```
    """

    due_time: float = 0.0
    repeat_interval: float = 0.0
    repeat_times: int = 0
    continue_on_error: bool = True
    rate_limit: RateLimit | None = None

    def __post_init__(self) -> None:
        validate_task_timing(self.due_time, self.repeat_times)

    @property
    def is_recurring(self) -> bool:
        """Indicate if the options enable a recurring request."""
        return self.repeat_interval > 0
