r"""Cache options, expiry policies and the cache collaborator
interface.

The engine never evicts entries itself. A cache implementation decides
what to keep; ``MemoryCache`` only refuses to return expired entries.
"""

from __future__ import annotations

__all__ = [
    "AbsoluteExpiry",
    "BaseCache",
    "CacheMode",
    "CacheOptions",
    "ExpiryPolicy",
    "MemoryCache",
    "NoExpiry",
    "SlidingExpiry",
]

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from collections.abc import Callable


class CacheMode(Enum):
    """Expiration modes of cached responses."""

    NO_EXPIRATION = "no_expiration"
    ABSOLUTE_EXPIRATION = "absolute_expiration"
    SLIDING_EXPIRATION = "sliding_expiration"


@dataclass
class CacheOptions:
    """Options of the cached execution path.

    Attributes:
        mode: The expiration mode.
        duration: The expiration delay for absolute and sliding modes.
        key_function: Optional function producing the cache key prefix,
            evaluated at call time.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from arequest.caching import CacheMode, CacheOptions
        >>> options = CacheOptions(
        ...     mode=CacheMode.SLIDING_EXPIRATION, duration=timedelta(minutes=5)
        ... )
        >>> options.mode
        <CacheMode.SLIDING_EXPIRATION: 'sliding_expiration'>

        ```
    """

    mode: CacheMode = CacheMode.NO_EXPIRATION
    duration: timedelta = timedelta(0)
    key_function: Callable[[], str] | None = None


@dataclass(frozen=True)
class NoExpiry:
    """The entry never expires."""


@dataclass(frozen=True)
class AbsoluteExpiry:
    """The entry expires at a fixed point in time."""

    expires_at: datetime


@dataclass(frozen=True)
class SlidingExpiry:
    """The entry expires after a period without being fetched."""

    duration: timedelta


ExpiryPolicy = Union[NoExpiry, AbsoluteExpiry, SlidingExpiry]


class BaseCache(ABC):
    """Cache collaborator used by the cached execution path.

    Implementations must be safe for concurrent use: calls issued from
    the same client share the cache without any locking from the
    engine.
    """

    @abstractmethod
    def store(self, key: str, value: Any, expiry: ExpiryPolicy) -> None:
        """Store a value.

        Args:
            key: The cache key.
            value: The value to store.
            expiry: The expiry policy of the entry.
        """

    @abstractmethod
    def fetch(self, key: str) -> Any | None:
        """Fetch a value.

        Args:
            key: The cache key.

        Returns:
            The stored value, or ``None`` if missing or expired.
        """


class MemoryCache(BaseCache):
    r"""Thread-safe in-memory cache.

    Example:
        ```pycon
        >>> from arequest.caching import MemoryCache, NoExpiry
        >>> cache = MemoryCache()
        >>> cache.store("key", "value", NoExpiry())
        >>> cache.fetch("key")
        'value'
        >>> cache.fetch("missing") is None
        True

        ```
    """

    def __init__(self) -> None:
        self._entries: dict[str, tuple[Any, ExpiryPolicy, datetime]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def store(self, key: str, value: Any, expiry: ExpiryPolicy) -> None:
        with self._lock:
            self._entries[key] = (value, expiry, _utcnow())

    def fetch(self, key: str) -> Any | None:
        now = _utcnow()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expiry, last_access = entry
            if isinstance(expiry, AbsoluteExpiry) and now >= expiry.expires_at:
                del self._entries[key]
                return None
            if isinstance(expiry, SlidingExpiry):
                if now - last_access >= expiry.duration:
                    del self._entries[key]
                    return None
                self._entries[key] = (value, expiry, now)
            return value


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)
