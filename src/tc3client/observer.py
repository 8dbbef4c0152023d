r"""Observer types for controlling and watching API calls.

An observer receives lifecycle notifications for one call and owns every
retry decision: the engine itself never retries without the observer's
consent.

The observer lifecycle for one call is:

- begin: called once, before the first attempt
- pre_request: called before each attempt is sent
- http_error: called when an attempt failed at the transport level
- http_failure: called when an attempt got a non-success status code
- finished: called once, when the call returns or raises

Example:
    ```pycon
    >>> from tc3client.observer import Abort, Observer, RetryAfter
    >>> class RetryOnce(Observer):
    ...     def http_error(self, error):
    ...         return RetryAfter(1.0)
    ...     def retry_times(self):
    ...         return 2
    ...
    >>> RetryOnce().http_error(None)
    RetryAfter(delay=1.0)
    >>> Observer().http_error(None)
    Abort()

    ```
"""

from __future__ import annotations

__all__ = [
    "Abort",
    "DefaultObserver",
    "MethodInfo",
    "Observer",
    "RetryAfter",
    "RetryDecision",
    "RetryObserver",
]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from tc3client.backoff import BaseBackoffStrategy, ExponentialBackoff
from tc3client.core.config import DEFAULT_RETRY_TIMES, RETRY_STATUS_CODES
from tc3client.core.validation import validate_delay, validate_retry_times
from tc3client.utils.retry_after import parse_retry_after

if TYPE_CHECKING:
    from collections.abc import Collection

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MethodInfo:
    """Information about the API method being called.

    Attributes:
        id: The operation identifier, e.g. ``"tmt.TextTranslate"``.
        http_method: The HTTP method, always ``"POST"`` for this API.
    """

    id: str
    http_method: str = "POST"


@dataclass(frozen=True)
class Abort:
    """Do not retry, the call fails with the current error."""


@dataclass(frozen=True)
class RetryAfter:
    """Retry after the given delay.

    Attributes:
        delay: The delay in seconds before the next attempt.
    """

    delay: float

    def __post_init__(self) -> None:
        validate_delay(self.delay)


RetryDecision = Abort | RetryAfter


class Observer:
    """Base observer with a conservative default behavior.

    Every method can be overridden independently. By default the call is
    aborted on the first failure and no notification has any effect.

    An observer instance keeps per-call state and must not be shared
    between concurrent calls.
    """

    def begin(self, info: MethodInfo) -> None:
        """Called once at the beginning of a call.

        The matching ``finished`` call is always made, whether or not
        the call succeeds.
        """

    def pre_request(self, request: httpx.Request) -> None:
        """Called before each attempt is sent.

        This is a good place to time attempts or log progress: a request
        will definitely be made after this call.
        """

    def http_error(self, error: httpx.RequestError) -> RetryDecision:  # noqa: ARG002
        """Called when an attempt failed with a transport error, usually
        a network problem.

        Returns:
            ``Abort()`` to fail the call, or ``RetryAfter(delay)`` to try
            again. Delays should grow exponentially between attempts.
        """
        return Abort()

    def http_failure(self, response: httpx.Response) -> RetryDecision:  # noqa: ARG002
        """Called when an attempt returned a non-success status code.

        The response body has already been read when this is called.

        Returns:
            ``Abort()`` to fail the call, or ``RetryAfter(delay)`` to try
            again.
        """
        return Abort()

    def retry_times(self) -> int:
        """Return the maximum number of attempts, including the first
        one."""
        return DEFAULT_RETRY_TIMES

    def finished(self, is_success: bool) -> None:
        """Called once when the call returns or raises.

        Args:
            is_success: ``True`` if the call returned a response body.
        """


class DefaultObserver(Observer):
    """The observer used when the caller passes none."""


class RetryObserver(Observer):
    """Observer that retries transient failures with backoff.

    Transport errors and responses whose status code is in
    ``status_forcelist`` are retried. A ``Retry-After`` header on the
    response takes precedence over the backoff strategy. Every other
    failure aborts the call.

    Args:
        retry_times: The maximum number of attempts. Must be >= 1.
        backoff: The backoff strategy. Defaults to
            ``ExponentialBackoff()``.
        status_forcelist: The status codes that are retried.
        max_wait_time: Optional cap on every delay, in seconds.

    Example:
        ```pycon
        >>> from tc3client.backoff import ConstantBackoff
        >>> from tc3client.observer import RetryObserver
        >>> observer = RetryObserver(retry_times=5, backoff=ConstantBackoff(0.5))
        >>> observer.retry_times()
        5

        ```
    """

    def __init__(
        self,
        retry_times: int = DEFAULT_RETRY_TIMES,
        backoff: BaseBackoffStrategy | None = None,
        status_forcelist: Collection[int] = RETRY_STATUS_CODES,
        max_wait_time: float | None = None,
    ) -> None:
        validate_retry_times(retry_times)
        if max_wait_time is not None and max_wait_time <= 0:
            msg = f"max_wait_time must be > 0, got {max_wait_time}"
            raise ValueError(msg)

        self._retry_times = retry_times
        self.backoff = backoff if backoff is not None else ExponentialBackoff()
        self.status_forcelist = tuple(status_forcelist)
        self.max_wait_time = max_wait_time
        self.failures = 0

    def begin(self, info: MethodInfo) -> None:  # noqa: ARG002
        self.failures = 0

    def http_error(self, error: httpx.RequestError) -> RetryDecision:
        logger.debug(f"Transport error {type(error).__name__}, retrying")
        return self._next_delay(None)

    def http_failure(self, response: httpx.Response) -> RetryDecision:
        if response.status_code not in self.status_forcelist:
            logger.debug(f"Status {response.status_code} is not retryable")
            return Abort()
        return self._next_delay(parse_retry_after(response.headers.get("Retry-After")))

    def retry_times(self) -> int:
        return self._retry_times

    def _next_delay(self, retry_after: float | None) -> RetryAfter:
        delay = retry_after if retry_after is not None else self.backoff.calculate(self.failures)
        self.failures += 1
        if self.max_wait_time is not None:
            delay = min(delay, self.max_wait_time)
        return RetryAfter(delay)
