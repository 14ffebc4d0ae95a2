r"""Core logic shared by the synchronous and asynchronous paths.

This package contains the configuration defaults, the resolution of
the effective configuration of a call, the per-call state and the
selection of the execution path of each attempt.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_METHOD",
    "DEFAULT_MOCK_CONTENT_TYPE",
    "DEFAULT_TIMEOUT",
    "MOCK_SCHEME",
    "RETRY_STATUS_CODES",
    "CallContext",
    "ClientConfig",
    "ExecutionPath",
    "RequestConfig",
    "resolve_config",
    "select_path",
    "validate_max_retries",
    "validate_task_timing",
    "validate_timeout",
]

from arequest.core.config import (
    DEFAULT_METHOD,
    DEFAULT_MOCK_CONTENT_TYPE,
    DEFAULT_TIMEOUT,
    MOCK_SCHEME,
    RETRY_STATUS_CODES,
    ClientConfig,
)
from arequest.core.context import CallContext
from arequest.core.path import ExecutionPath, select_path
from arequest.core.resolver import RequestConfig, resolve_config
from arequest.core.validation import (
    validate_max_retries,
    validate_task_timing,
    validate_timeout,
)
