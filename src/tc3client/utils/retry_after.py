r"""Retry-After header parsing.

This module parses the Retry-After header of throttled or unavailable
responses according to RFC 7231.
"""

from __future__ import annotations

__all__ = ["parse_retry_after"]

import logging
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(retry_after_header: str | None) -> float | None:
    """Parse the Retry-After header value of an HTTP response.

    The header is either a number of seconds (e.g. ``"120"``) or an
    HTTP-date (e.g. ``"Wed, 21 Oct 2015 07:28:00 GMT"``).

    Args:
        retry_after_header: The header value, or None if absent.

    Returns:
        The number of seconds to wait, or None if the header is absent
        or cannot be parsed. Dates in the past give ``0.0``.

    Example:
        ```pycon
        >>> from tc3client.utils import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("invalid") is None
        True

        ```
    """
    if retry_after_header is None:
        return None

    with suppress(ValueError):
        return max(0.0, float(retry_after_header))

    try:
        retry_date: datetime = parsedate_to_datetime(retry_after_header)
        now = datetime.now(timezone.utc)
        return max(0.0, (retry_date - now).total_seconds())
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Failed to parse Retry-After header: {retry_after_header!r}")
        return None
