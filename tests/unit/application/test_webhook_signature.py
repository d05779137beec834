"""Unit tests for the webhook signature codec."""
from __future__ import annotations

import hashlib
import hmac
import re

import pytest
from hypothesis import given
from hypothesis import strategies as st

from verigate.application.webhooks import (
    MAX_SIGNATURE_LENGTH,
    SignedHeader,
    build_signature_header,
    normalize_body,
    parse_signature_header,
    sign_payload,
)
from verigate.kernel.errors import ValidationError
from verigate.kernel.time import FrozenClock

SECRET = "whsec_test_secret_key_1234567890"
PAYLOAD = '{"id":"evt_123","type":"identity.verification_session.verified"}'
TIMESTAMP = 1_700_000_000

_HEX64 = re.compile(r"[0-9a-f]{64}")


# ---------------------------------------------------------------------------
# sign_payload
# ---------------------------------------------------------------------------
class TestSignPayload:
    def test_matches_reference_hmac(self) -> None:
        expected = hmac.new(
            b"whsec_test", b'1700000000.{"id":"evt_1"}', hashlib.sha256
        ).hexdigest()
        assert sign_payload("whsec_test", 1_700_000_000, '{"id":"evt_1"}') == expected

    def test_is_64_lowercase_hex(self) -> None:
        assert _HEX64.fullmatch(sign_payload(SECRET, TIMESTAMP, PAYLOAD))

    def test_deterministic(self) -> None:
        assert sign_payload(SECRET, TIMESTAMP, PAYLOAD) == sign_payload(SECRET, TIMESTAMP, PAYLOAD)

    def test_different_payload(self) -> None:
        assert sign_payload(SECRET, TIMESTAMP, PAYLOAD) != sign_payload(
            SECRET, TIMESTAMP, '{"different":"payload"}'
        )

    def test_different_timestamp(self) -> None:
        assert sign_payload(SECRET, TIMESTAMP, PAYLOAD) != sign_payload(
            SECRET, TIMESTAMP + 1, PAYLOAD
        )

    def test_different_secret(self) -> None:
        assert sign_payload(SECRET, TIMESTAMP, PAYLOAD) != sign_payload(
            "different_secret", TIMESTAMP, PAYLOAD
        )

    def test_bytes_and_str_sign_identically(self) -> None:
        body = '{"name":"Jöns"}'
        assert sign_payload(SECRET, TIMESTAMP, body.encode("utf-8")) == sign_payload(
            SECRET, TIMESTAMP, body
        )
        assert sign_payload(SECRET, TIMESTAMP, bytearray(body.encode("utf-8"))) == sign_payload(
            SECRET, TIMESTAMP, body
        )

    def test_empty_secret_rejected(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            sign_payload("", TIMESTAMP, PAYLOAD)
        assert exc_info.value.field == "secret"

    @given(secret=st.text(min_size=1), timestamp=st.integers(0, 2**40), body=st.text())
    def test_property_deterministic_hex(self, secret: str, timestamp: int, body: str) -> None:
        first = sign_payload(secret, timestamp, body)
        assert first == sign_payload(secret, timestamp, body)
        assert _HEX64.fullmatch(first)

    @given(body=st.text(), other=st.text())
    def test_property_body_sensitivity(self, body: str, other: str) -> None:
        if body != other:
            assert sign_payload(SECRET, TIMESTAMP, body) != sign_payload(SECRET, TIMESTAMP, other)


# ---------------------------------------------------------------------------
# normalize_body
# ---------------------------------------------------------------------------
class TestNormalizeBody:
    def test_str_passthrough(self) -> None:
        assert normalize_body("abc") == "abc"

    def test_bytes_decoded_as_utf8(self) -> None:
        assert normalize_body("ä€".encode("utf-8")) == "ä€"

    def test_memoryview(self) -> None:
        assert normalize_body(memoryview(b"xyz")) == "xyz"


# ---------------------------------------------------------------------------
# build_signature_header
# ---------------------------------------------------------------------------
class TestBuildSignatureHeader:
    def test_format(self) -> None:
        header = build_signature_header(SECRET, PAYLOAD, TIMESTAMP)
        assert re.fullmatch(r"t=\d+,v1=[0-9a-f]{64}", header)
        assert header.startswith(f"t={TIMESTAMP},")
        assert header.endswith(sign_payload(SECRET, TIMESTAMP, PAYLOAD))

    def test_uses_clock_when_timestamp_omitted(self) -> None:
        clock = FrozenClock.at_unix(1_718_452_800)
        header = build_signature_header(SECRET, PAYLOAD, clock=clock)
        parsed = parse_signature_header(header)
        assert parsed is not None
        assert parsed.timestamp == 1_718_452_800

    def test_uses_current_time_by_default(self) -> None:
        import time

        before = int(time.time())
        parsed = parse_signature_header(build_signature_header(SECRET, PAYLOAD))
        after = int(time.time())
        assert parsed is not None
        assert before <= parsed.timestamp <= after


# ---------------------------------------------------------------------------
# parse_signature_header
# ---------------------------------------------------------------------------
class TestParseSignatureHeader:
    def test_parses_valid_header(self) -> None:
        assert parse_signature_header("t=1700000000,v1=abc123def456") == SignedHeader(
            timestamp=1_700_000_000, signatures=("abc123def456",)
        )

    def test_multiple_v1_kept_in_order(self) -> None:
        parsed = parse_signature_header("t=1700000000,v1=sig1,v1=sig2,v1=sig3")
        assert parsed is not None
        assert parsed.signatures == ("sig1", "sig2", "sig3")

    def test_tolerates_whitespace(self) -> None:
        assert parse_signature_header("t = 1700000000 , v1 = abc123") == SignedHeader(
            timestamp=1_700_000_000, signatures=("abc123",)
        )

    def test_ignores_unknown_keys(self) -> None:
        parsed = parse_signature_header("t=1700000000,v2=ignored,v1=sig,unknown=value")
        assert parsed == SignedHeader(timestamp=1_700_000_000, signatures=("sig",))

    def test_last_timestamp_wins(self) -> None:
        parsed = parse_signature_header("t=1000,t=2000,v1=sig")
        assert parsed is not None
        assert parsed.timestamp == 2000

    def test_drops_oversized_signature_but_keeps_valid_one(self) -> None:
        long_sig = "a" * (MAX_SIGNATURE_LENGTH + 1)
        parsed = parse_signature_header(f"t=1700000000,v1={long_sig},v1=valid")
        assert parsed == SignedHeader(timestamp=1_700_000_000, signatures=("valid",))

    def test_signature_at_length_bound_is_kept(self) -> None:
        sig = "b" * MAX_SIGNATURE_LENGTH
        parsed = parse_signature_header(f"t=1,v1={sig}")
        assert parsed is not None
        assert parsed.signatures == (sig,)

    def test_only_oversized_signatures_is_malformed(self) -> None:
        assert parse_signature_header(f"t=1700000000,v1={'a' * 257}") is None

    def test_negative_timestamp_parses(self) -> None:
        parsed = parse_signature_header("t=-5,v1=sig")
        assert parsed is not None
        assert parsed.timestamp == -5

    def test_value_may_contain_equals(self) -> None:
        parsed = parse_signature_header("t=1,v1=ab=cd")
        assert parsed is not None
        assert parsed.signatures == ("ab=cd",)

    @pytest.mark.parametrize(
        "header",
        [
            "",
            None,
            "invalid",
            "v1=abc123",
            "t=1700000000",
            "t=notanumber,v1=sig",
            "t=1.5,v1=sig",
            "t=1e9,v1=sig",
            "t=١٧٠٠,v1=sig",
            "t=,v1=sig",
            "t=1700000000,v1=",
            ",,,",
        ],
    )
    def test_malformed_headers_return_none(self, header: str | None) -> None:
        assert parse_signature_header(header) is None

    @given(st.text())
    def test_never_raises(self, header: str) -> None:
        parse_signature_header(header)
