r"""Scheme to transport registry injected into the queries of a
client."""

from __future__ import annotations

__all__ = ["TransportRegistry"]

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class TransportRegistry:
    r"""Registry of custom transports, keyed by URL scheme.

    Each RestClient owns one registry and injects it into the queries it
    builds, so registering a transport never mutates process-wide state.

    Example:
        ```pycon
        >>> import httpx
        >>> from arequest.query.registry import TransportRegistry
        >>> registry = TransportRegistry()
        >>> transport = httpx.MockTransport(lambda request: httpx.Response(200))
        >>> registry.register("mock", lambda: transport)
        True
        >>> registry.register("mock", lambda: transport)  # Already registered
        False
        >>> list(registry.mounts())
        ['mock://']

        ```
    """

    def __init__(self) -> None:
        self._transports: dict[str, httpx.BaseTransport | httpx.AsyncBaseTransport] = {}
        self._lock = threading.Lock()

    def __contains__(self, scheme: str) -> bool:
        with self._lock:
            return scheme in self._transports

    def register(
        self, scheme: str, factory: Callable[[], httpx.BaseTransport | httpx.AsyncBaseTransport]
    ) -> bool:
        """Register the transport of a scheme, once.

        Args:
            scheme: The URL scheme, without ``://``.
            factory: Builds the transport; only called on the first
                registration of the scheme.

        Returns:
            ``True`` if the transport was registered by this call.
        """
        with self._lock:
            if scheme in self._transports:
                return False
            self._transports[scheme] = factory()
        logger.debug(f"Registered transport for the {scheme!r} scheme")
        return True

    def mounts(self) -> dict[str, httpx.BaseTransport | httpx.AsyncBaseTransport]:
        """Return the registered transports as httpx mounts."""
        with self._lock:
            return {f"{scheme}://": transport for scheme, transport in self._transports.items()}
