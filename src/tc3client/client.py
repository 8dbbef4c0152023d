r"""Asynchronous context manager client for signed API calls.

This module provides the TencentClient class. It owns the credential
and the underlying httpx.AsyncClient, and exposes the service method
groups built on top of the ExecutionEngine.
"""

from __future__ import annotations

__all__ = ["TencentClient"]

from typing import TYPE_CHECKING

import httpx

from tc3client.core.config import DEFAULT_TIMEOUT, TMT_CONFIG, ClientConfig
from tc3client.core.validation import validate_timeout
from tc3client.engine import ExecutionEngine
from tc3client.translate import TranslateMethods

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType
    from typing import Self

    from tc3client.credential import Credential
    from tc3client.observer import Observer
    from tc3client.transport import Transport


class TencentClient:
    r"""Asynchronous context manager for signed API calls.

    The client creates an ``httpx.AsyncClient`` when entering the context
    and closes it on exit. A caller-provided transport is used as is and
    is never closed by the client.

    Args:
        credential: The credential used to sign every request.
        config: The endpoint and header configuration. Defaults to the
            Machine Translation endpoint.
        timeout: Maximum seconds to wait for server responses. Must be
            > 0. Ignored when ``transport`` is given.
        transport: Optional transport shared with other clients.

    Example:
        ```pycon
        >>> import asyncio
        >>> from tc3client import Credential, TencentClient
        >>> async def main():  # doctest: +SKIP
        ...     credential = Credential(secret_id="AKID...", secret_key="...")
        ...     async with TencentClient(credential) as client:
        ...         return await client.translate().text_translate(
        ...             source="it",
        ...             target="zh",
        ...             source_text="Credere è destino",
        ...             project_id=0,
        ...             region="ap-guangzhou",
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        credential: Credential,
        *,
        config: ClientConfig | None = None,
        timeout: float | httpx.Timeout = DEFAULT_TIMEOUT,
        transport: Transport | None = None,
    ) -> None:
        validate_timeout(timeout)
        self.credential = credential
        self.config = config if config is not None else TMT_CONFIG
        self._timeout = timeout

        self._transport = transport
        self._owned_client: httpx.AsyncClient | None = None
        self._entered = False

    async def __aenter__(self) -> Self:
        """Enter the async context manager and create the underlying
        httpx client if no transport was given.

        Returns:
            The TencentClient instance for making requests.

        Raises:
            RuntimeError: If the client is already inside an
                ``async with`` block.
        """
        if self._entered:
            msg = "TencentClient is already open and cannot be entered again"
            raise RuntimeError(msg)
        if self._transport is None:
            self._owned_client = httpx.AsyncClient(timeout=self._timeout)
        self._entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the async context manager and close the httpx client
        created on entry."""
        if self._owned_client is not None:
            await self._owned_client.aclose()
            self._owned_client = None
        self._entered = False

    def _ensure_transport(self) -> Transport:
        """Return the transport to use for the next call.

        Raises:
            RuntimeError: If the client is used outside of a context
                manager.
        """
        if not self._entered:
            msg = "TencentClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        if self._transport is not None:
            return self._transport
        return self._owned_client

    @property
    def engine(self) -> ExecutionEngine:
        """The execution engine bound to this client's transport."""
        return ExecutionEngine(self.credential, self._ensure_transport(), config=self.config)

    async def execute(
        self,
        action: str,
        operation_id: str,
        payload: bytes | str,
        *,
        region: str | None = None,
        header_customizer: Callable[[Mapping[str, str]], Mapping[str, str]] | None = None,
        observer: Observer | None = None,
    ) -> bytes:
        """Execute one signed API call.

        Args:
            action: The API action, e.g. ``"TextTranslate"``.
            operation_id: The operation identifier passed to the observer.
            payload: The serialized request body.
            region: Optional region, sent as ``X-TC-Region``.
            header_customizer: Optional function returning extra headers.
                Cannot be combined with ``region``.
            observer: Optional observer controlling retries.

        Returns:
            The raw body of the successful response.
        """
        if region is not None:
            if header_customizer is not None:
                msg = "region and header_customizer cannot be used together"
                raise ValueError(msg)
            header_customizer = _region_header(region)
        return await self.engine.execute(
            action,
            operation_id,
            payload,
            header_customizer=header_customizer,
            observer=observer,
        )

    def translate(self) -> TranslateMethods:
        """Return the Machine Translation methods."""
        return TranslateMethods(self)


def _region_header(region: str) -> Callable[[Mapping[str, str]], Mapping[str, str]]:
    def customize(headers: Mapping[str, str]) -> Mapping[str, str]:  # noqa: ARG001
        return {"X-TC-Region": region}

    return customize
