r"""Exceptions raised by the signed request client.

Transport and HTTP failures keep a reference to the original error or
response, so the underlying cause is never lost, even after retries.
"""

from __future__ import annotations

__all__ = [
    "AbortedError",
    "ApiError",
    "EncodingError",
    "FieldClashError",
    "HttpFailureError",
    "MissingFieldError",
    "RetriesExhaustedError",
    "SizeLimitExceededError",
    "TencentCloudError",
    "TransportFailureError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class TencentCloudError(Exception):
    """Base class of all the errors raised by tc3client."""


class AbortedError(TencentCloudError):
    """Raised when the observer declined to retry a failed attempt."""


class TransportFailureError(AbortedError):
    """Raised when the HTTP connection failed and the observer aborted.

    Args:
        action: The API action that was called.
        cause: The transport error raised by httpx.

    Example:
        ```pycon
        >>> import httpx
        >>> from tc3client.exceptions import TransportFailureError
        >>> err = TransportFailureError("TextTranslate", httpx.ConnectError("refused"))
        >>> str(err)
        'TextTranslate request failed: ConnectError: refused'

        ```
    """

    def __init__(self, action: str, cause: Exception) -> None:
        super().__init__(f"{action} request failed: {type(cause).__name__}: {cause}")
        self.action = action
        self.cause = cause


class HttpFailureError(AbortedError):
    """Raised when the server answered with a non-success status code
    and the observer aborted.

    Args:
        action: The API action that was called.
        status_code: The HTTP status code of the response.
        body: The response body.
        response: The httpx response, if available.
    """

    def __init__(
        self,
        action: str,
        status_code: int,
        body: bytes = b"",
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(
            f"{action} request failed with status {status_code}: "
            f"{body.decode('utf-8', errors='replace')}"
        )
        self.action = action
        self.status_code = status_code
        self.body = body
        self.response = response


class RetriesExhaustedError(TencentCloudError):
    """Raised when the last allowed attempt failed and the observer
    still asked for a retry.

    Args:
        action: The API action that was called.
        attempts: The number of attempts that were made.
        last_error: The failure of the last attempt, either a
            ``HttpFailureError`` or the transport error raised by httpx.
    """

    def __init__(self, action: str, attempts: int, last_error: Exception) -> None:
        super().__init__(f"{action} request failed after {attempts} attempts: {last_error}")
        self.action = action
        self.attempts = attempts
        self.last_error = last_error


class EncodingError(TencentCloudError):
    """Raised when a payload cannot be encoded to, or a response decoded
    from, JSON.

    Args:
        message: A description of the failure.
        document: The object or text that could not be processed.
    """

    def __init__(self, message: str, document: object = None) -> None:
        super().__init__(message)
        self.document = document


class SizeLimitExceededError(TencentCloudError):
    """Raised when an attachment is too large to be uploaded.

    Args:
        size: The size of the attachment in bytes.
        max_size: The exclusive upper bound in bytes.
    """

    def __init__(self, size: int, max_size: int) -> None:
        super().__init__(
            f"The media size {size} exceeds the maximum allowed upload size of {max_size}"
        )
        self.size = size
        self.max_size = max_size


class FieldClashError(TencentCloudError):
    """Raised when a custom header clashes with a built-in one."""

    def __init__(self, field: str) -> None:
        super().__init__(f"The custom header {field!r} is already provided natively by the client")
        self.field = field


class MissingFieldError(TencentCloudError):
    """Raised when a required call parameter is missing."""

    def __init__(self, field: str) -> None:
        super().__init__(f"The parameter {field!r} is missing")
        self.field = field


class ApiError(TencentCloudError):
    """Raised when the service reports an error inside a successful
    HTTP response.

    Args:
        code: The error code, e.g. ``"AuthFailure.SignatureFailure"``.
        message: The error message returned by the service.
        request_id: The request id returned by the service, if any.
    """

    def __init__(self, code: str, message: str, request_id: str | None = None) -> None:
        super().__init__(f"[{code}] {message} (RequestId: {request_id})")
        self.code = code
        self.message = message
        self.request_id = request_id
