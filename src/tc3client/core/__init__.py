r"""Configuration and validation shared by the engine and the client."""

from __future__ import annotations

__all__ = [
    "DEFAULT_RETRY_TIMES",
    "DEFAULT_TIMEOUT",
    "MAX_ATTACHMENT_SIZE",
    "RETRY_STATUS_CODES",
    "TMT_CONFIG",
    "ClientConfig",
    "check_attachment_size",
    "validate_delay",
    "validate_retry_times",
    "validate_timeout",
]

from tc3client.core.config import (
    DEFAULT_RETRY_TIMES,
    DEFAULT_TIMEOUT,
    MAX_ATTACHMENT_SIZE,
    RETRY_STATUS_CODES,
    TMT_CONFIG,
    ClientConfig,
)
from tc3client.core.validation import (
    check_attachment_size,
    validate_delay,
    validate_retry_times,
    validate_timeout,
)
