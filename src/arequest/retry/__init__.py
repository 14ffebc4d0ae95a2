r"""Retry policies and the executors applying them.

Public API:
    - RetryPolicy: Maximum retries and the conditions that request one
    - RetryDecider: Decision applied after every attempt
    - RetryExecutor: Synchronous retry executor
    - AsyncRetryExecutor: Event-driven asynchronous retry executor
    - AsyncOperation: Handle of an asynchronous call
"""

from __future__ import annotations

__all__ = [
    "AsyncOperation",
    "AsyncRetryExecutor",
    "RetryCondition",
    "RetryDecider",
    "RetryExecutor",
    "RetryIf",
    "RetryOnConnectionError",
    "RetryOnStatus",
    "RetryOnTimeout",
    "RetryPolicy",
]

from arequest.retry.decider import RetryDecider
from arequest.retry.executor import RetryExecutor
from arequest.retry.executor_async import AsyncOperation, AsyncRetryExecutor
from arequest.retry.policy import (
    RetryCondition,
    RetryIf,
    RetryOnConnectionError,
    RetryOnStatus,
    RetryOnTimeout,
    RetryPolicy,
)
