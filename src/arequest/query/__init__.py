r"""Single-attempt queries and the transports they are mounted on."""

from __future__ import annotations

__all__ = ["BaseQuery", "HttpxQuery", "TransportRegistry"]

from arequest.query.base import BaseQuery
from arequest.query.httpx_query import HttpxQuery
from arequest.query.registry import TransportRegistry
