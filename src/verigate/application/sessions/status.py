"""Application sessions – verification session status values."""
from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Status of a verification session on the gateway."""

    PENDING = "pending"
    PROCESSING = "processing"
    REQUIRES_INPUT = "requires_input"
    VERIFIED = "verified"
    FAILED = "failed"
    CANCELED = "canceled"


TERMINAL_STATUSES: frozenset[SessionStatus] = frozenset({
    SessionStatus.VERIFIED,
    SessionStatus.FAILED,
    SessionStatus.CANCELED,
})


def is_terminal_status(status: SessionStatus | str) -> bool:
    """Return True when *status* will not change any more.

    Unknown status strings are treated as non-terminal.
    """
    try:
        return SessionStatus(status) in TERMINAL_STATUSES
    except ValueError:
        return False


__all__ = ["SessionStatus", "TERMINAL_STATUSES", "is_terminal_status"]
