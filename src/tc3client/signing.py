r"""TC3-HMAC-SHA256 request signing.

This module implements the version 3 signature scheme. The signature
binds a request to its exact payload bytes, to a one-day credential
scope for one service, and to a timestamp that the server checks
against its own clock.

The functions are pure: given the same credential and context they
always return the same string, except when ``timestamp`` is ``0``, which
means "now".

Example:
    ```pycon
    >>> from tc3client import Credential
    >>> from tc3client.signing import sign_post
    >>> credential = Credential(secret_id="AKIDEXAMPLE", secret_key="secret")
    >>> auth = sign_post(
    ...     credential,
    ...     payload=b"{}",
    ...     host="tmt.tencentcloudapi.com",
    ...     service="tmt",
    ...     content_type="application/json",
    ...     timestamp=1551113065,
    ... )
    >>> auth.startswith("TC3-HMAC-SHA256 Credential=AKIDEXAMPLE/2019-02-25/tmt/tc3_request")
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "ALGORITHM",
    "SIGNED_HEADERS",
    "SigningContext",
    "build_canonical_request",
    "build_string_to_sign",
    "credential_scope",
    "derive_signing_key",
    "hmac_sha256",
    "sha256_hex",
    "sign",
    "sign_post",
]

import hashlib
import hmac
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tc3client.credential import Credential

ALGORITHM = "TC3-HMAC-SHA256"

# Only these two headers take part in the signature
SIGNED_HEADERS = "content-type;host"

_TERMINATOR = "tc3_request"


@dataclass(frozen=True)
class SigningContext:
    """Request metadata consumed by the signer.

    A new context is built for every attempt since the timestamp changes
    on each retry.

    Attributes:
        method: The HTTP method, e.g. ``"POST"``.
        canonical_uri: The URI path, e.g. ``"/"``.
        canonical_query: The query string, empty for POST requests.
        content_type: The value of the ``Content-Type`` header.
        host: The value of the ``Host`` header.
        service: The service name used in the credential scope.
        payload: The request body, byte-identical to what is sent.
        timestamp: Unix time in seconds. ``0`` means the current time.
    """

    method: str
    canonical_uri: str
    canonical_query: str
    content_type: str
    host: str
    service: str
    payload: bytes
    timestamp: int = 0

    def __post_init__(self) -> None:
        if self.timestamp < 0:
            msg = f"timestamp must be >= 0, got {self.timestamp}"
            raise ValueError(msg)


def _to_bytes(data: bytes | str) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return data


def sha256_hex(data: bytes | str) -> str:
    """Return the lowercase hex SHA256 digest of ``data``.

    Example:
        ```pycon
        >>> from tc3client.signing import sha256_hex
        >>> sha256_hex("")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'

        ```
    """
    return hashlib.sha256(_to_bytes(data)).hexdigest()


def hmac_sha256(key: bytes | str, msg: bytes | str) -> bytes:
    """Return the raw HMAC-SHA256 of ``msg`` keyed with ``key``."""
    return hmac.new(_to_bytes(key), _to_bytes(msg), hashlib.sha256).digest()


def build_canonical_request(ctx: SigningContext) -> str:
    """Build the canonical request string of a signing context."""
    return (
        f"{ctx.method}\n{ctx.canonical_uri}\n{ctx.canonical_query}\n"
        f"content-type:{ctx.content_type}\nhost:{ctx.host}\n\n"
        f"{SIGNED_HEADERS}\n{sha256_hex(ctx.payload)}"
    )


def credential_scope(date: str, service: str) -> str:
    """Return the credential scope, e.g. ``2019-02-25/tmt/tc3_request``."""
    return f"{date}/{service}/{_TERMINATOR}"


def build_string_to_sign(timestamp: int, scope: str, hashed_canonical_request: str) -> str:
    """Build the string that is signed with the derived key."""
    return f"{ALGORITHM}\n{timestamp}\n{scope}\n{hashed_canonical_request}"


def derive_signing_key(secret_key: str, date: str, service: str) -> bytes:
    """Narrow the long-lived secret key into a one-day, one-service key.

    Each HMAC step uses the raw output of the previous step as key.
    """
    k_date = hmac_sha256(f"TC3{secret_key}", date)
    k_service = hmac_sha256(k_date, service)
    return hmac_sha256(k_service, _TERMINATOR)


def sign(credential: Credential, ctx: SigningContext) -> str:
    """Compute the ``Authorization`` header value of a request.

    Args:
        credential: The secret id and key.
        ctx: The request metadata.

    Returns:
        A string of the form ``TC3-HMAC-SHA256 Credential=<id>/<scope>,
        SignedHeaders=content-type;host, Signature=<hex>``.
    """
    timestamp = ctx.timestamp or int(time.time())
    date = datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d")
    scope = credential_scope(date, ctx.service)

    hashed_canonical_request = sha256_hex(build_canonical_request(ctx))
    string_to_sign = build_string_to_sign(timestamp, scope, hashed_canonical_request)

    signing_key = derive_signing_key(credential.secret_key, date, ctx.service)
    signature = hmac.new(signing_key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()

    return (
        f"{ALGORITHM} Credential={credential.secret_id}/{scope}, "
        f"SignedHeaders={SIGNED_HEADERS}, Signature={signature}"
    )


def sign_post(
    credential: Credential,
    *,
    payload: bytes | str,
    host: str,
    service: str,
    content_type: str,
    timestamp: int = 0,
) -> str:
    """Sign a ``POST /`` request with an empty query string."""
    ctx = SigningContext(
        method="POST",
        canonical_uri="/",
        canonical_query="",
        content_type=content_type,
        host=host,
        service=service,
        payload=_to_bytes(payload),
        timestamp=timestamp,
    )
    return sign(credential, ctx)
