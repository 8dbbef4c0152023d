r"""Execution engine for signed API calls.

This module provides the ExecutionEngine class that drives one logical
API call to completion: it signs and sends each attempt, classifies the
outcome and lets the observer decide whether and when to retry.
"""

from __future__ import annotations

__all__ = ["ExecutionEngine"]

import asyncio
import logging
import time
from typing import TYPE_CHECKING

import httpx

from tc3client.core.config import TMT_CONFIG, ClientConfig
from tc3client.core.validation import validate_retry_times
from tc3client.exceptions import (
    FieldClashError,
    HttpFailureError,
    RetriesExhaustedError,
    TransportFailureError,
)
from tc3client.observer import Abort, DefaultObserver, MethodInfo, RetryAfter
from tc3client.signing import sign_post

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from tc3client.credential import Credential
    from tc3client.observer import Observer, RetryDecision
    from tc3client.transport import Transport

logger: logging.Logger = logging.getLogger(__name__)


class ExecutionEngine:
    """Executes signed API calls with observer-driven retries.

    The engine is policy-free: it never retries unless the observer
    returns ``RetryAfter`` for a failed attempt. The timestamp, and so
    the signature, is recomputed for every attempt while the payload
    bytes are reused as is.

    The engine holds no per-call state, so one instance can serve
    concurrent calls as long as each call gets its own observer.

    Args:
        credential: The credential used to sign requests.
        transport: The object used to send requests, usually an
            ``httpx.AsyncClient``.
        config: The endpoint and header configuration.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from tc3client import Credential, ExecutionEngine
        >>> async def main():  # doctest: +SKIP
        ...     async with httpx.AsyncClient() as client:
        ...         engine = ExecutionEngine(Credential("AKID...", "..."), client)
        ...         return await engine.execute(
        ...             "LanguageDetect",
        ...             "tmt.LanguageDetect",
        ...             b'{"ProjectId":0,"Text":"hello"}',
        ...             header_customizer=lambda headers: {"X-TC-Region": "ap-guangzhou"},
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        credential: Credential,
        transport: Transport,
        *,
        config: ClientConfig = TMT_CONFIG,
    ) -> None:
        self.credential = credential
        self.transport = transport
        self.config = config

    def build_headers(self, action: str, timestamp: int) -> dict[str, str]:
        """Build the fixed headers of an attempt, without the
        signature."""
        return {
            "User-Agent": self.config.user_agent,
            "Content-Type": self.config.content_type,
            "Host": self.config.host,
            "X-TC-Action": action,
            "X-TC-Timestamp": str(timestamp),
            "X-TC-Language": self.config.language,
            "X-TC-RequestClient": self.config.request_client,
            "X-TC-Version": self.config.api_version,
        }

    def build_request(
        self,
        action: str,
        payload: bytes,
        header_customizer: Callable[[Mapping[str, str]], Mapping[str, str]] | None = None,
    ) -> httpx.Request:
        """Build and sign the request of one attempt.

        Args:
            action: The API action, sent as ``X-TC-Action``.
            payload: The serialized request body.
            header_customizer: Optional function that receives the fixed
                headers and returns extra, unsigned headers.

        Returns:
            The signed request.

        Raises:
            FieldClashError: If a custom header overrides a built-in one.
        """
        timestamp = int(time.time())
        headers = self.build_headers(action, timestamp)

        if header_customizer is not None:
            builtin = {name.lower() for name in headers} | {"authorization"}
            for name, value in header_customizer(dict(headers)).items():
                if name.lower() in builtin:
                    raise FieldClashError(name)
                headers[name] = value

        headers["Authorization"] = sign_post(
            self.credential,
            payload=payload,
            host=self.config.host,
            service=self.config.service,
            content_type=self.config.content_type,
            timestamp=timestamp,
        )
        return httpx.Request("POST", self.config.url, headers=headers, content=payload)

    async def execute(
        self,
        action: str,
        operation_id: str,
        payload: bytes | str,
        *,
        header_customizer: Callable[[Mapping[str, str]], Mapping[str, str]] | None = None,
        observer: Observer | None = None,
    ) -> bytes:
        """Execute one API call, retrying as long as the observer asks.

        ``observer.begin`` is called once before the first attempt and
        ``observer.finished`` once when this method returns or raises,
        whatever the number of attempts.

        Args:
            action: The API action, e.g. ``"TextTranslate"``.
            operation_id: The operation identifier passed to
                ``observer.begin``.
            payload: The serialized request body. ``str`` payloads are
                encoded as UTF-8.
            header_customizer: Optional function returning extra,
                unsigned headers such as ``X-TC-Region``.
            observer: The observer of this call. A new
                ``DefaultObserver`` is used if None.

        Returns:
            The body of the first successful (2xx) response.

        Raises:
            TransportFailureError: If an attempt failed with a transport
                error and the observer aborted.
            HttpFailureError: If an attempt got a non-success status code
                and the observer aborted.
            RetriesExhaustedError: If the last allowed attempt failed and
                the observer still asked for a retry.
            FieldClashError: If a custom header overrides a built-in one.
            ValueError: If ``observer.retry_times()`` is lower than 1.
        """
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        if observer is None:
            observer = DefaultObserver()

        retry_times = observer.retry_times()
        validate_retry_times(retry_times)

        observer.begin(MethodInfo(id=operation_id, http_method="POST"))
        is_success = False
        try:
            body = await self._run_attempts(
                action, payload, header_customizer, observer, retry_times
            )
            is_success = True
            return body
        finally:
            observer.finished(is_success)

    async def _run_attempts(
        self,
        action: str,
        payload: bytes,
        header_customizer: Callable[[Mapping[str, str]], Mapping[str, str]] | None,
        observer: Observer,
        retry_times: int,
    ) -> bytes:
        last_error: Exception | None = None

        for attempt in range(retry_times):
            request = self.build_request(action, payload, header_customizer)
            observer.pre_request(request)
            logger.debug(f"{action}: sending attempt {attempt + 1}/{retry_times}")

            response: httpx.Response | None = None
            try:
                response = await self.transport.send(request)
                body = await response.aread()
            except httpx.RequestError as exc:
                # A failure while reading the body is a transport error too
                if response is not None:
                    await response.aclose()
                logger.debug(
                    f"{action}: {type(exc).__name__} on attempt {attempt + 1}/{retry_times}: {exc}"
                )
                decision = observer.http_error(exc)
                if _is_abort(decision):
                    raise TransportFailureError(action, exc) from exc
                last_error = exc
            else:
                if response.is_success:
                    logger.debug(f"{action}: succeeded on attempt {attempt + 1}/{retry_times}")
                    return body

                logger.debug(
                    f"{action}: status {response.status_code} on attempt "
                    f"{attempt + 1}/{retry_times}"
                )
                failure = HttpFailureError(action, response.status_code, body, response)
                decision = observer.http_failure(response)
                if _is_abort(decision):
                    raise failure
                last_error = failure

            # The last attempt never sleeps
            if attempt + 1 == retry_times:
                break
            logger.debug(f"{action}: waiting {decision.delay:.2f}s before retry")
            await asyncio.sleep(decision.delay)

        logger.debug(f"{action}: giving up after {retry_times} attempts")
        raise RetriesExhaustedError(action, retry_times, last_error) from last_error


def _is_abort(decision: RetryDecision) -> bool:
    if isinstance(decision, Abort):
        return True
    if isinstance(decision, RetryAfter):
        return False
    msg = f"observer must return Abort or RetryAfter, got {decision!r}"
    raise TypeError(msg)
