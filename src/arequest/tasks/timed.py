r"""Asyncio scheduler of recurring actions.

A ``TimedTask`` waits ``due_time`` seconds, then runs its action every
``interval`` seconds until ``repeat_times`` cycles ran or it is stopped.
An optional rule is consulted before each cycle and may skip it.
"""

from __future__ import annotations

__all__ = ["PercentRule", "PredicateRule", "TaskRule", "TimedTask"]

import asyncio
import logging
import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)


class TaskRule(ABC):
    """Decides, before each cycle, whether the cycle is skipped."""

    @abstractmethod
    def should_skip(self, cycle: int) -> bool:
        """Indicate if a cycle is skipped.

        Args:
            cycle: The 1-based number of the cycle.

        Returns:
            ``True`` to skip the cycle.
        """


class PercentRule(TaskRule):
    r"""Run ``percent`` percent of the cycles, evenly spread.

    Args:
        percent: The percentage of cycles to run, in ``[0, 100]``.

    Example:
        ```pycon
        >>> from arequest.tasks.timed import PercentRule
        >>> rule = PercentRule(50)
        >>> [rule.should_skip(cycle) for cycle in range(1, 5)]
        [True, False, True, False]

        ```
    """

    def __init__(self, percent: float) -> None:
        self.percent = percent

    def should_skip(self, cycle: int) -> bool:
        allowed = math.floor(cycle * self.percent / 100)
        return allowed == math.floor((cycle - 1) * self.percent / 100)


class PredicateRule(TaskRule):
    """Skip the cycles for which a predicate over the rate limit status
    holds.

    Args:
        predicate: The predicate; ``True`` skips the cycle.
        get_rate_limit_status: Optional provider of the status passed to
            the predicate.
    """

    def __init__(
        self,
        predicate: Callable[[Any], bool],
        get_rate_limit_status: Callable[[], Any] | None = None,
    ) -> None:
        self.predicate = predicate
        self.get_rate_limit_status = get_rate_limit_status

    def should_skip(self, cycle: int) -> bool:  # noqa: ARG002
        status = self.get_rate_limit_status() if self.get_rate_limit_status is not None else None
        return bool(self.predicate(status))


class TimedTask:
    r"""Recurring action scheduled on the running event loop.

    Args:
        due_time: The delay in seconds before the first cycle.
        interval: The delay in seconds between two cycles.
        repeat_times: The number of cycles, 0 for unbounded. Skipped
            cycles count.
        continue_on_error: ``False`` stops the task on the first cycle
            whose action raises.
        action: The coroutine function run by each cycle.
        rule: The optional rule consulted before each cycle.

    Example:
        ```pycon
        >>> import asyncio
        >>> from arequest.tasks.timed import TimedTask
        >>> async def main():
        ...     calls = []
        ...     async def action():
        ...         calls.append(1)
        ...     task = TimedTask(0, 0.01, 3, True, action)
        ...     await task.start()
        ...     return len(calls)
        ...
        >>> asyncio.run(main())
        3

        ```
    """

    def __init__(
        self,
        due_time: float,
        interval: float,
        repeat_times: int,
        continue_on_error: bool,
        action: Callable[[], Awaitable[Any]],
        rule: TaskRule | None = None,
    ) -> None:
        self.due_time = due_time
        self.interval = interval
        self.repeat_times = repeat_times
        self.continue_on_error = continue_on_error
        self.action = action
        self.rule = rule
        self.cycles = 0
        self.skipped = 0
        self.last_result: Any = None
        self._runner: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        """Indicate if the task is started and not finished."""
        return self._runner is not None and not self._runner.done()

    def start(self) -> asyncio.Task:
        """Start the task on the running event loop.

        Returns:
            The asyncio task running the cycles. It completes when the
                last cycle ran, and raises the error of the failing cycle
                when ``continue_on_error`` is ``False``.

        Raises:
            RuntimeError: If the task is already running or no event
                loop is running.
        """
        if self.is_running:
            msg = "The timed task is already running"
            raise RuntimeError(msg)
        self._runner = asyncio.get_running_loop().create_task(self._run())
        return self._runner

    def stop(self) -> None:
        """Stop the task; the cycle in progress is cancelled."""
        if self._runner is not None and not self._runner.done():
            logger.debug(f"Stopping timed task after {self.cycles} cycle(s)")
            self._runner.cancel()

    async def _run(self) -> Any:
        await asyncio.sleep(self.due_time)
        while self.repeat_times == 0 or self.cycles < self.repeat_times:
            self.cycles += 1
            if self.rule is not None and self.rule.should_skip(self.cycles):
                self.skipped += 1
                logger.debug(f"Timed task cycle {self.cycles} skipped by {type(self.rule).__name__}")
            else:
                try:
                    self.last_result = await self.action()
                except Exception:
                    if not self.continue_on_error:
                        logger.debug(f"Timed task stopped by a failure in cycle {self.cycles}")
                        raise
                    logger.debug(f"Timed task cycle {self.cycles} failed", exc_info=True)
            if self.repeat_times != 0 and self.cycles >= self.repeat_times:
                break
            await asyncio.sleep(self.interval)
        return self.last_result
