r"""Parameter validation utilities for signed API calls.

This module provides validation functions for client, retry and
attachment parameters to ensure they meet the required constraints
before any request is signed or sent.
"""

from __future__ import annotations

__all__ = [
    "check_attachment_size",
    "validate_config_value",
    "validate_delay",
    "validate_retry_times",
    "validate_timeout",
]

from typing import TYPE_CHECKING

from tc3client.exceptions import SizeLimitExceededError

if TYPE_CHECKING:
    import httpx

# Kept local to avoid importing tc3client.core.config, which imports this module
_MAX_ATTACHMENT_SIZE = 4 << 20


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from tc3client.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_times(retry_times: int) -> None:
    """Validate the number of attempts requested by an observer.

    Args:
        retry_times: The maximum number of attempts, including the first
            one. Must be >= 1.

    Raises:
        ValueError: If retry_times is lower than 1.
    """
    if retry_times < 1:
        msg = f"retry_times must be >= 1, got {retry_times}"
        raise ValueError(msg)


def validate_delay(delay: float) -> None:
    """Validate a retry delay in seconds.

    Raises:
        ValueError: If delay is negative.
    """
    if delay < 0:
        msg = f"delay must be >= 0, got {delay}"
        raise ValueError(msg)


def validate_config_value(name: str, value: str) -> None:
    """Validate that a configuration string is not empty.

    Raises:
        ValueError: If the value is empty.
    """
    if not value:
        msg = f"{name} must not be empty"
        raise ValueError(msg)


def check_attachment_size(size: int, max_size: int = _MAX_ATTACHMENT_SIZE) -> None:
    """Check that an attachment is strictly smaller than the upload
    limit.

    Args:
        size: The attachment size in bytes.
        max_size: The exclusive upper bound in bytes (default: 4 MiB).

    Raises:
        SizeLimitExceededError: If ``size >= max_size``.

    Example:
        ```pycon
        >>> from tc3client.core.validation import check_attachment_size
        >>> check_attachment_size(4 * 1024 * 1024 - 1)
        >>> check_attachment_size(4 * 1024 * 1024)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        SizeLimitExceededError: The media size 4194304 exceeds the maximum allowed upload size of 4194304

        ```
    """
    if size >= max_size:
        raise SizeLimitExceededError(size=size, max_size=max_size)
