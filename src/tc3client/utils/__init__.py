r"""Helper functions for payload encoding, response decoding and retry
delays."""

from __future__ import annotations

__all__ = [
    "decode_response",
    "encode_payload",
    "parse_retry_after",
    "read_attachment",
    "to_base64",
]

from tc3client.utils.encoding import decode_response, encode_payload, read_attachment, to_base64
from tc3client.utils.retry_after import parse_retry_after
