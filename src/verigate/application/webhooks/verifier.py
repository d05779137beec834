"""Application webhooks – inbound request authentication and event construction."""
from __future__ import annotations

import dataclasses
import hmac
from typing import Callable, TypeVar

from verigate.application.webhooks.signature import (
    RawBody,
    normalize_body,
    parse_signature_header,
    sign_payload,
)
from verigate.kernel.errors import SignatureVerificationError
from verigate.kernel.time import Clock, unix_seconds
from verigate.observability.logging import get_logger

T = TypeVar("T")

DEFAULT_TOLERANCE_SECONDS = 300

logger = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class VerificationOutcome:
    """Result of one verification attempt; ``reason`` is set only on failure."""

    valid: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.valid


_VALID = VerificationOutcome(valid=True)


def _matches(expected: bytes, candidate: str) -> bool:
    try:
        provided = bytes.fromhex(candidate)
    except ValueError:
        return False
    return hmac.compare_digest(expected, provided)


def verify_signature_detailed(
    secret: str,
    raw_body: RawBody,
    signature_header: str | None,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    *,
    clock: Clock | None = None,
) -> VerificationOutcome:
    """Check *signature_header* against *raw_body*; report why it failed.

    The timestamp must lie within ``tolerance_seconds`` of now in either
    direction.  Every candidate signature is compared in constant time and
    any single match is accepted.
    """
    if not secret:
        return VerificationOutcome(False, "Webhook secret is not configured")

    parsed = parse_signature_header(signature_header)
    if parsed is None:
        return VerificationOutcome(False, "Missing or malformed signature header")

    if parsed.timestamp < 0:
        return VerificationOutcome(False, "Invalid timestamp in signature header")

    now = unix_seconds(clock)
    if abs(now - parsed.timestamp) > tolerance_seconds:
        return VerificationOutcome(
            False, f"Timestamp outside the tolerance window of {tolerance_seconds}s"
        )

    expected = bytes.fromhex(sign_payload(secret, parsed.timestamp, raw_body))
    if any(_matches(expected, candidate) for candidate in parsed.signatures):
        return _VALID
    return VerificationOutcome(False, "No signature matched the expected signature")


def verify_signature(
    secret: str,
    raw_body: RawBody,
    signature_header: str | None,
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    *,
    clock: Clock | None = None,
) -> bool:
    """Return True when the request is authentic and within tolerance. Never raises."""
    return verify_signature_detailed(
        secret, raw_body, signature_header, tolerance_seconds, clock=clock
    ).valid


def construct_event(
    raw_body: RawBody,
    signature_header: str | None,
    secret: str,
    parse: Callable[[str], T],
    tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
    *,
    clock: Clock | None = None,
) -> T:
    """Verify, then hand the body text to *parse*.

    Raises :class:`SignatureVerificationError` when verification fails.
    Exceptions raised by *parse* propagate unchanged.
    """
    outcome = verify_signature_detailed(
        secret, raw_body, signature_header, tolerance_seconds, clock=clock
    )
    if not outcome.valid:
        raise SignatureVerificationError(reason=outcome.reason)
    return parse(normalize_body(raw_body))


class WebhookVerifier:
    """Bind a webhook secret and tolerance once, verify many requests."""

    def __init__(
        self,
        secret: str,
        *,
        tolerance_seconds: int = DEFAULT_TOLERANCE_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        self._secret = secret
        self._tolerance = tolerance_seconds
        self._clock = clock

    @property
    def tolerance_seconds(self) -> int:
        return self._tolerance

    def verify_detailed(self, raw_body: RawBody, signature_header: str | None) -> VerificationOutcome:
        outcome = verify_signature_detailed(
            self._secret, raw_body, signature_header, self._tolerance, clock=self._clock
        )
        if not outcome.valid:
            logger.warning("webhook.signature_rejected", reason=outcome.reason)
        return outcome

    def verify(self, raw_body: RawBody, signature_header: str | None) -> bool:
        return self.verify_detailed(raw_body, signature_header).valid

    def construct_event(
        self,
        raw_body: RawBody,
        signature_header: str | None,
        parse: Callable[[str], T],
    ) -> T:
        outcome = self.verify_detailed(raw_body, signature_header)
        if not outcome.valid:
            raise SignatureVerificationError(reason=outcome.reason)
        return parse(normalize_body(raw_body))


__all__ = [
    "DEFAULT_TOLERANCE_SECONDS",
    "VerificationOutcome",
    "WebhookVerifier",
    "construct_event",
    "verify_signature",
    "verify_signature_detailed",
]
