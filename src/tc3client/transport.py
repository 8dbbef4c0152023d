r"""Transport interface consumed by the execution engine."""

from __future__ import annotations

__all__ = ["Transport"]

from typing import Protocol, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Anything that can send an HTTP request and return its response.

    ``httpx.AsyncClient`` satisfies this protocol. Implementations must
    be safe to use from concurrent tasks and must raise
    ``httpx.RequestError`` (or a subclass) on transport-level failures.
    """

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send ``request`` and return the response."""
        ...
