r"""Recurring and rate-limited asynchronous requests."""

from __future__ import annotations

__all__ = [
    "PercentRule",
    "PredicateRule",
    "RateLimit",
    "RateLimitByPercent",
    "RateLimitByPredicate",
    "TaskOptions",
    "TaskRule",
    "TimedTask",
    "build_task_rule",
    "build_timed_task",
]

from arequest.tasks.integration import build_task_rule, build_timed_task
from arequest.tasks.options import RateLimit, RateLimitByPercent, RateLimitByPredicate, TaskOptions
from arequest.tasks.timed import PercentRule, PredicateRule, TaskRule, TimedTask
