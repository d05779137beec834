"""Application webhooks – HMAC-SHA256 signing and signature-header codec.

Header wire format::

    t=<unix_seconds>,v1=<hex_hmac_sha256>[,v1=<hex_hmac_sha256>...]

The signed message is ``"{timestamp}.{raw_body}"``.  Several ``v1`` entries may
be present while a webhook secret is being rotated; a receiver accepts any one
of them.
"""
from __future__ import annotations

import dataclasses
import hashlib
import hmac
import re

from verigate.kernel.errors import ValidationError
from verigate.kernel.time import Clock, unix_seconds

__all__ = [
    "MAX_SIGNATURE_LENGTH",
    "RawBody",
    "SIGNATURE_SCHEME",
    "SignedHeader",
    "build_signature_header",
    "normalize_body",
    "parse_signature_header",
    "sign_payload",
]

SIGNATURE_SCHEME = "v1"
TIMESTAMP_KEY = "t"
MAX_SIGNATURE_LENGTH = 256

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

RawBody = str | bytes | bytearray | memoryview


@dataclasses.dataclass(frozen=True)
class SignedHeader:
    """Parsed signature header: one timestamp, one or more candidate signatures."""

    timestamp: int
    signatures: tuple[str, ...]


def normalize_body(raw_body: RawBody) -> str:
    """Return *raw_body* as text; byte buffers are decoded as UTF-8."""
    if isinstance(raw_body, str):
        return raw_body
    return bytes(raw_body).decode("utf-8", errors="replace")


def sign_payload(secret: str, timestamp: int, raw_body: RawBody) -> str:
    """Return the lowercase hex HMAC-SHA256 of ``"{timestamp}.{raw_body}"``."""
    if not secret:
        raise ValidationError("Webhook secret must not be empty", field="secret")
    message = f"{timestamp}.{normalize_body(raw_body)}"
    return hmac.new(
        key=secret.encode("utf-8"),
        msg=message.encode("utf-8"),
        digestmod=hashlib.sha256,
    ).hexdigest()


def build_signature_header(
    secret: str,
    raw_body: RawBody,
    timestamp: int | None = None,
    *,
    clock: Clock | None = None,
) -> str:
    """Build a complete header value, stamping the current time when *timestamp* is omitted."""
    ts = unix_seconds(clock) if timestamp is None else timestamp
    return f"{TIMESTAMP_KEY}={ts},{SIGNATURE_SCHEME}={sign_payload(secret, ts, raw_body)}"


def parse_signature_header(header: str | None) -> SignedHeader | None:
    """Parse a signature header, returning ``None`` when it is not well formed.

    * segments are ``key=value`` separated by ``,``; whitespace is trimmed
    * the last ``t`` wins
    * every ``v1`` is kept in order of appearance
    * a ``v1`` longer than :data:`MAX_SIGNATURE_LENGTH` is dropped
    * unknown keys are ignored

    Never raises.
    """
    if not header:
        return None

    raw_timestamp: str | None = None
    signatures: list[str] = []

    for segment in header.split(","):
        key, sep, value = segment.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key == TIMESTAMP_KEY:
            raw_timestamp = value
        elif key == SIGNATURE_SCHEME:
            if value and len(value) <= MAX_SIGNATURE_LENGTH:
                signatures.append(value)

    if raw_timestamp is None or not _INTEGER_RE.fullmatch(raw_timestamp):
        return None
    if not signatures:
        return None
    return SignedHeader(timestamp=int(raw_timestamp), signatures=tuple(signatures))
