r"""JSON payload encoding, response decoding and attachment helpers.

The engine never looks inside a payload: the helpers in this module turn
call parameters into the exact bytes that are signed and sent, and turn
the raw response body back into a dictionary.
"""

from __future__ import annotations

__all__ = ["decode_response", "encode_payload", "read_attachment", "to_base64"]

import base64
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tc3client.core.config import MAX_ATTACHMENT_SIZE
from tc3client.core.validation import check_attachment_size
from tc3client.exceptions import ApiError, EncodingError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger(__name__)


def encode_payload(payload: Mapping[str, Any]) -> bytes:
    """Serialize a request payload to compact UTF-8 JSON.

    Top-level ``None`` values are dropped so that optional parameters
    are omitted instead of sent as ``null``.

    Args:
        payload: The request parameters, keyed by their wire name.

    Returns:
        The serialized payload.

    Raises:
        EncodingError: If the payload is not JSON serializable.

    Example:
        ```pycon
        >>> from tc3client.utils import encode_payload
        >>> encode_payload({"Source": "en", "Target": "zh", "UntranslatedText": None})
        b'{"Source":"en","Target":"zh"}'

        ```
    """
    document = {key: value for key, value in payload.items() if value is not None}
    try:
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        msg = f"Failed to encode payload {document!r}: {exc}"
        raise EncodingError(msg, document) from exc


def decode_response(body: bytes) -> dict[str, Any]:
    """Parse a response body and return its ``Response`` object.

    Args:
        body: The raw response body.

    Returns:
        The content of the ``Response`` key.

    Raises:
        EncodingError: If the body is not a JSON object with a
            ``Response`` object, or if its ``Error`` is not an object.
        ApiError: If the service reported an error.

    Example:
        ```pycon
        >>> from tc3client.utils import decode_response
        >>> decode_response(b'{"Response":{"RequestId":"abc","TargetText":"ok"}}')
        {'RequestId': 'abc', 'TargetText': 'ok'}

        ```
    """
    try:
        document = json.loads(body)
    except ValueError as exc:
        msg = f"Failed to decode response: {exc}"
        raise EncodingError(msg, body.decode("utf-8", errors="replace")) from exc

    if not isinstance(document, dict) or not isinstance(document.get("Response"), dict):
        msg = "Response body has no 'Response' object"
        raise EncodingError(msg, document)

    response = document["Response"]
    error = response.get("Error")
    if error is not None:
        if not isinstance(error, dict):
            msg = f"Response 'Error' is not an object: {error!r}"
            raise EncodingError(msg, document)
        logger.debug(f"Service returned error: {error}")
        raise ApiError(
            code=error.get("Code", ""),
            message=error.get("Message", ""),
            request_id=response.get("RequestId"),
        )
    return response


def to_base64(data: bytes) -> str:
    """Encode bytes as standard base64 without ``=`` padding.

    Example:
        ```pycon
        >>> from tc3client.utils import to_base64
        >>> to_base64(b"ab")
        'YWI'

        ```
    """
    return base64.b64encode(data).decode("ascii").rstrip("=")


def read_attachment(path: str | Path, max_size: int = MAX_ATTACHMENT_SIZE) -> bytes:
    """Read an attachment after checking its size.

    The size is checked from the file metadata, so an oversized file is
    rejected before it is read.

    Args:
        path: The path of the file to upload.
        max_size: The exclusive upper bound in bytes (default: 4 MiB).

    Returns:
        The file content.

    Raises:
        SizeLimitExceededError: If the file is ``max_size`` bytes or more.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    check_attachment_size(path.stat().st_size, max_size)
    return path.read_bytes()
