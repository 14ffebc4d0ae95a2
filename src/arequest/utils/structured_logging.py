r"""Opt-in JSON logging for the request engine.

The retry controller attaches the URL, the attempt number and the
remaining budget of each decision as extra fields of its log records.
``StructuredFormatter`` renders those records as one JSON object per
line, with the correlation ID of the current context when one is set.

Example:
    ```python
    import logging
    from arequest.utils.structured_logging import StructuredFormatter

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("arequest")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "arequest_correlation_id", default=None
)

# Attributes every LogRecord carries; anything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any.

    Example:
        ```pycon
        >>> from arequest.utils.structured_logging import get_correlation_id, set_correlation_id
        >>> set_correlation_id("call-1")
        >>> get_correlation_id()
        'call-1'

        ```
    """
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID of the current context.

    The ID is stored in a context variable, so each thread and each
    asyncio task sees its own value.

    Args:
        correlation_id: The correlation ID, e.g. a trace ID.
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID of the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Formatter rendering log records as JSON objects.

    The output always contains ``timestamp``, ``level``, ``logger``,
    ``message``, ``module``, ``function`` and ``line``. The correlation ID,
    the formatted exception and the ``extra`` fields are added when
    present.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from arequest.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord(
        ...     "arequest", logging.DEBUG, __file__, 1, "retrying", None, None
        ... )
        >>> record.remaining = 2
        >>> payload = json.loads(StructuredFormatter().format(record))
        >>> payload["message"], payload["remaining"]
        ('retrying', 2)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            payload["correlation_id"] = correlation_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                payload[key] = value
        return json.dumps(payload, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        """Format the record time as an ISO 8601 UTC timestamp with
        milliseconds; ``datefmt`` is ignored."""
        seconds = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        return f"{seconds}.{int(record.msecs):03d}Z"


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log a message with structured fields.

    Args:
        logger: The logger to use.
        level: The log level, e.g. ``logging.DEBUG``.
        message: The log message.
        **extra: The structured fields attached to the record.

    Example:
        ```pycon
        >>> import logging
        >>> from arequest.utils.structured_logging import log_structured
        >>> log_structured(
        ...     logging.getLogger("arequest"), logging.DEBUG, "stop", url="https://x", attempts=1
        ... )

        ```
    """
    logger.log(level, message, extra=extra)
