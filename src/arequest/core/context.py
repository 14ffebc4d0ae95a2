r"""Per-call state threaded through the retry loop and the async
continuations.

The attempt budget and the result chain belong to one logical call,
never to the long-lived client, so concurrent calls issued from the
same client do not share them.
"""

from __future__ import annotations

__all__ = ["CallContext"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arequest.core.resolver import RequestConfig
    from arequest.query.base import BaseQuery
    from arequest.request import Request
    from arequest.result import Result


@dataclass
class CallContext:
    """State of one logical call.

    Attributes:
        request: The request being issued.
        config: The effective configuration of the call.
        query: The query performing the attempts.
        url: The resolved (and possibly mock-rewritten) target URL.
        remaining: The remaining attempt budget; 0 is terminal.
        previous: The result of the last retried attempt.
        continuation: ``True`` once the call issues internal retries.
        attempts: The number of attempts performed so far.
    """

    request: Request
    config: RequestConfig
    query: BaseQuery
    url: str
    remaining: int = 0
    previous: Result | None = None
    continuation: bool = False
    attempts: int = 0
