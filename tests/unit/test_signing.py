r"""Unit tests for TC3-HMAC-SHA256 request signing."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from tc3client.credential import Credential
from tc3client.signing import (
    SigningContext,
    build_canonical_request,
    build_string_to_sign,
    credential_scope,
    derive_signing_key,
    hmac_sha256,
    sha256_hex,
    sign,
    sign_post,
)

SECRET_ID = "AKIDz8krbsJ5yKBZQpn74WFkmLPx3EXAMPLE"
SECRET_KEY = "Gu5t9xGARNpq86cd98joQYCN3EXAMPLE"
TIMESTAMP = 1551113065
CONTENT_TYPE = "application/json; charset=utf-8"
PAYLOAD = r'{"Limit": 1, "Filters": [{"Values": ["\u672a\u547d\u540d"], "Name": "instance-name"}]}'

TMT_SIGNATURE = (
    "TC3-HMAC-SHA256 Credential=AKIDz8krbsJ5yKBZQpn74WFkmLPx3EXAMPLE/2019-02-25/tmt/tc3_request, "
    "SignedHeaders=content-type;host, "
    "Signature=f016163998315497ecfeb48a8efcf43e7b45a9cd2f67d7da0209282c8ac7d47c"
)


@pytest.fixture
def credential() -> Credential:
    return Credential(secret_id=SECRET_ID, secret_key=SECRET_KEY)


def make_context(**overrides: object) -> SigningContext:
    params = {
        "method": "POST",
        "canonical_uri": "/",
        "canonical_query": "",
        "content_type": CONTENT_TYPE,
        "host": "tmt.tencentcloudapi.com",
        "service": "tmt",
        "payload": PAYLOAD.encode("utf-8"),
        "timestamp": TIMESTAMP,
    }
    params.update(overrides)
    return SigningContext(**params)


################################
#     Tests for sha256_hex     #
################################


def test_sha256_hex_empty_string() -> None:
    assert sha256_hex("") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_sha256_hex_empty_bytes() -> None:
    assert sha256_hex(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_sha256_hex_documented_payload() -> None:
    assert sha256_hex(PAYLOAD) == "35e9c5b0e3ae67532d3c9f17ead6c90222632e5b1ff7f6e89887f1398934f064"


def test_sha256_hex_encodes_str_as_utf8() -> None:
    payload = '{"Limit": 1, "Filters": [{"Values": ["未命名"], "Name": "instance-name"}]}'
    assert sha256_hex(payload) == "1e07682a01ae959704b7d77a9c0dd92ad8284fc90f9bb2ab5cc941be1d7ea716"
    assert sha256_hex(payload) == sha256_hex(payload.encode("utf-8"))


def test_sha256_hex_is_lowercase() -> None:
    digest = sha256_hex(b"ok")
    assert digest == digest.lower()
    assert len(digest) == 64


#################################
#     Tests for hmac_sha256     #
#################################


def test_hmac_sha256_returns_raw_digest() -> None:
    assert len(hmac_sha256("key", "message")) == 32


def test_hmac_sha256_str_and_bytes_are_equivalent() -> None:
    assert hmac_sha256("key", "message") == hmac_sha256(b"key", b"message")


###############################################
#     Tests for canonical request & scope     #
###############################################


def test_build_canonical_request() -> None:
    assert build_canonical_request(make_context()) == (
        "POST\n/\n\n"
        "content-type:application/json; charset=utf-8\n"
        "host:tmt.tencentcloudapi.com\n\n"
        "content-type;host\n"
        "35e9c5b0e3ae67532d3c9f17ead6c90222632e5b1ff7f6e89887f1398934f064"
    )


def test_hashed_canonical_request() -> None:
    assert (
        sha256_hex(build_canonical_request(make_context()))
        == "973dc9d52badcf20eb3aebfb1dbef94819ef7b7896a9c4f21b937d06c75e2066"
    )


def test_credential_scope() -> None:
    assert credential_scope("2019-02-25", "tmt") == "2019-02-25/tmt/tc3_request"


def test_build_string_to_sign() -> None:
    assert build_string_to_sign(TIMESTAMP, "2019-02-25/tmt/tc3_request", "abc") == (
        "TC3-HMAC-SHA256\n1551113065\n2019-02-25/tmt/tc3_request\nabc"
    )


def test_derive_signing_key() -> None:
    assert (
        derive_signing_key(SECRET_KEY, "2019-02-25", "tmt").hex()
        == "d5099338ea93d408d60477a668c6af80cf4a820e5416e023c7798fb6ef2e8c80"
    )


##########################
#     Tests for sign     #
##########################


def test_sign_known_vector(credential: Credential) -> None:
    assert sign(credential, make_context()) == TMT_SIGNATURE


def test_sign_known_vector_other_service(credential: Credential) -> None:
    ctx = make_context(host="cvm.tencentcloudapi.com", service="cvm")
    assert sign(credential, ctx) == (
        "TC3-HMAC-SHA256 Credential=AKIDz8krbsJ5yKBZQpn74WFkmLPx3EXAMPLE/2019-02-25/cvm/tc3_request, "
        "SignedHeaders=content-type;host, "
        "Signature=72e494ea809ad7a8c8f7a4507b9bddcbaa8e581f516e8da2f66e2c5a96525168"
    )


def test_sign_is_deterministic(credential: Credential) -> None:
    ctx = make_context()
    assert sign(credential, ctx) == sign(credential, ctx) == sign(credential, make_context())


def test_sign_zero_timestamp_uses_current_time(credential: Credential) -> None:
    with patch("time.time", return_value=1551113065.7):
        assert sign(credential, make_context(timestamp=0)) == TMT_SIGNATURE


def test_sign_depends_on_payload(credential: Credential) -> None:
    assert sign(credential, make_context(payload=b"{}")) != TMT_SIGNATURE


def test_sign_depends_on_secret_key() -> None:
    other = Credential(secret_id=SECRET_ID, secret_key="another-key")
    assert sign(other, make_context()) != TMT_SIGNATURE


def test_sign_date_is_utc(credential: Credential) -> None:
    # 2019-02-25T23:59:59Z and 2019-02-26T00:00:00Z
    assert "/2019-02-25/tmt/" in sign(credential, make_context(timestamp=1551139199))
    assert "/2019-02-26/tmt/" in sign(credential, make_context(timestamp=1551139200))


def test_signing_context_negative_timestamp() -> None:
    with pytest.raises(ValueError, match=r"timestamp must be >= 0, got -1"):
        make_context(timestamp=-1)


###############################
#     Tests for sign_post     #
###############################


def test_sign_post_known_vector(credential: Credential) -> None:
    assert (
        sign_post(
            credential,
            payload=PAYLOAD,
            host="tmt.tencentcloudapi.com",
            service="tmt",
            content_type=CONTENT_TYPE,
            timestamp=TIMESTAMP,
        )
        == TMT_SIGNATURE
    )


def test_sign_post_accepts_bytes(credential: Credential) -> None:
    assert (
        sign_post(
            credential,
            payload=PAYLOAD.encode("utf-8"),
            host="tmt.tencentcloudapi.com",
            service="tmt",
            content_type=CONTENT_TYPE,
            timestamp=TIMESTAMP,
        )
        == TMT_SIGNATURE
    )


def test_sign_post_json_mime(credential: Credential) -> None:
    assert sign_post(
        credential,
        payload=b'{"ProjectId":0,"Text":"hello"}',
        host="tmt.tencentcloudapi.com",
        service="tmt",
        content_type="application/json",
        timestamp=TIMESTAMP,
    ).endswith("Signature=5d99ab75217c21c0d09e2dc0e8a2a280fe32f3841211a0357aef29efc378b160")
