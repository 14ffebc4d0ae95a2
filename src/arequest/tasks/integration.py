r"""Construction of the scheduler task of a recurring request."""

from __future__ import annotations

__all__ = ["build_task_rule", "build_timed_task"]

import logging
from typing import TYPE_CHECKING, Any

from arequest.exceptions import UnsupportedConfigurationError
from arequest.tasks.options import RateLimitByPercent, RateLimitByPredicate
from arequest.tasks.timed import PercentRule, PredicateRule, TimedTask

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from arequest.tasks.options import RateLimit, TaskOptions
    from arequest.tasks.timed import TaskRule

logger: logging.Logger = logging.getLogger(__name__)


def build_task_rule(rate_limit: RateLimit | None) -> TaskRule | None:
    """Build the scheduler rule matching a rate-limiting variant.

    Args:
        rate_limit: The configured rate-limiting variant, if any.

    Returns:
        The rule, or ``None`` without rate limiting.

    Raises:
        UnsupportedConfigurationError: If the variant is unknown.
    """
    if rate_limit is None:
        return None
    if isinstance(rate_limit, RateLimitByPercent):
        return PercentRule(rate_limit.percent)
    if isinstance(rate_limit, RateLimitByPredicate):
        return PredicateRule(rate_limit.predicate, rate_limit.get_rate_limit_status)
    msg = f"Unknown rate-limiting rule: {rate_limit!r}"
    raise UnsupportedConfigurationError(msg)


def build_timed_task(options: TaskOptions, action: Callable[[], Awaitable[Any]]) -> TimedTask:
    """Build the scheduler task running an action with the task options.

    Args:
        options: The task options. Must be recurring.
        action: The coroutine function run by each cycle.

    Returns:
        The task, not started yet.

    Raises:
        UnsupportedConfigurationError: If the rate-limiting variant is
            unknown.

    Example:
        ```pycon
        >>> from arequest.tasks import RateLimitByPercent, TaskOptions, build_timed_task
        >>> async def action():
        ...     pass
        ...
        >>> task = build_timed_task(
        ...     TaskOptions(repeat_interval=1.0, rate_limit=RateLimitByPercent(25)), action
        ... )
        >>> type(task.rule).__name__
        'PercentRule'

        ```
    """
    rule = build_task_rule(options.rate_limit)
    logger.debug(
        f"Building timed task (due_time={options.due_time}, "
        f"interval={options.repeat_interval}, repeat_times={options.repeat_times}, "
        f"rule={type(rule).__name__ if rule is not None else None})"
    )
    return TimedTask(
        due_time=options.due_time,
        interval=options.repeat_interval,
        repeat_times=options.repeat_times,
        continue_on_error=options.continue_on_error,
        action=action,
        rule=rule,
    )
