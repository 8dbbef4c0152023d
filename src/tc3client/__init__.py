r"""tc3client - Signed, retry-resilient client for TC3-HMAC-SHA256 APIs.

This package turns a JSON request body into a TC3-HMAC-SHA256 signed
HTTP call, sends it with httpx and lets a caller-supplied observer drive
the retry policy.

Key Features:
    - Bit-exact TC3-HMAC-SHA256 request signing
    - Async execution engine with observer-driven, bounded retries
    - Lifecycle notifications (begin, pre_request, finished) for every call
    - Exponential and constant backoff through RetryObserver
    - Machine Translation methods with attachment size checks

Example:
    ```pycon
    >>> import asyncio
    >>> from tc3client import Credential, RetryObserver, TencentClient
    >>> async def main():  # doctest: +SKIP
    ...     credential = Credential(secret_id="AKID...", secret_key="...")
    ...     async with TencentClient(credential) as client:
    ...         return await client.translate().language_detect(
    ...             text="Credere è destino",
    ...             project_id=0,
    ...             region="ap-guangzhou",
    ...             observer=RetryObserver(retry_times=5),
    ...         )
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "Abort",
    "ClientConfig",
    "Credential",
    "DefaultObserver",
    "ExecutionEngine",
    "MethodInfo",
    "Observer",
    "RetryAfter",
    "RetryObserver",
    "TencentClient",
    "TencentCloudError",
    "__version__",
    "sign",
]

from importlib.metadata import PackageNotFoundError, version

from tc3client.client import TencentClient
from tc3client.core.config import ClientConfig
from tc3client.credential import Credential
from tc3client.engine import ExecutionEngine
from tc3client.exceptions import TencentCloudError
from tc3client.observer import (
    Abort,
    DefaultObserver,
    MethodInfo,
    Observer,
    RetryAfter,
    RetryObserver,
)
from tc3client.signing import sign

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
