r"""Configuration dataclass and defaults for signed API calls.

This module provides the configuration constants and the dataclass-based
configuration object shared by the ExecutionEngine and the
TencentClient context manager.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_REQUEST_CLIENT",
    "DEFAULT_RETRY_TIMES",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "JSON_MIME",
    "MAX_ATTACHMENT_SIZE",
    "RETRY_STATUS_CODES",
    "TMT_CONFIG",
    "ClientConfig",
]

from dataclasses import dataclass, replace
from typing import Any

from tc3client.core.validation import validate_config_value

# Default timeout in seconds for HTTP requests
DEFAULT_TIMEOUT = 10.0

# Default number of attempts when the observer does not say otherwise
DEFAULT_RETRY_TIMES = 3

JSON_MIME = "application/json"

DEFAULT_LANGUAGE = "zh-CN"

DEFAULT_REQUEST_CLIENT = "python-sdk"

DEFAULT_USER_AGENT = "Mozilla/5.0 Safari/537.36"

# Attachments (images, audio) must be strictly smaller than 4 MiB
MAX_ATTACHMENT_SIZE = 4 << 20

# HTTP status codes that RetryObserver treats as transient
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


@dataclass(frozen=True)
class ClientConfig:
    """Endpoint and header configuration for signed requests.

    The values end up in the fixed ``X-TC-*`` headers and in the
    signature credential scope, so they must match what the remote
    service expects.

    Args:
        host: The API host name, used for the URL, the ``Host`` header
            and the signed ``host`` header.
        service: The service name used in the credential scope.
        api_version: The value of the ``X-TC-Version`` header.
        content_type: The ``Content-Type`` header, also signed.
        language: The value of the ``X-TC-Language`` header.
        request_client: The value of the ``X-TC-RequestClient`` header.
        user_agent: The value of the ``User-Agent`` header.

    Example:
        ```pycon
        >>> from tc3client.core.config import ClientConfig
        >>> config = ClientConfig(
        ...     host="tmt.tencentcloudapi.com", service="tmt", api_version="2018-03-21"
        ... )
        >>> config.url
        'https://tmt.tencentcloudapi.com/'
        >>> merged = config.merge(language="en-US")
        >>> merged.language
        'en-US'
        >>> config.language  # Original unchanged
        'zh-CN'

        ```
    """

    host: str
    service: str
    api_version: str
    content_type: str = JSON_MIME
    language: str = DEFAULT_LANGUAGE
    request_client: str = DEFAULT_REQUEST_CLIENT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter is empty.
        """
        for name in ("host", "service", "api_version", "content_type", "user_agent"):
            validate_config_value(name, getattr(self, name))

    @property
    def url(self) -> str:
        """The request target, always the root path of the host."""
        return f"https://{self.host}/"

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "host": self.host,
            "service": self.service,
            "api_version": self.api_version,
            "content_type": self.content_type,
            "language": self.language,
            "request_client": self.request_client,
            "user_agent": self.user_agent,
        }


# Tencent Machine Translation
TMT_CONFIG = ClientConfig(
    host="tmt.tencentcloudapi.com",
    service="tmt",
    api_version="2018-03-21",
)
