"""Application sessions – status values, gateway models, polling engine."""
from verigate.application.sessions.models import (
    CreateSessionParams,
    SessionCreated,
    VerificationSession,
    VerifiedOutputs,
)
from verigate.application.sessions.poller import PollState, SessionPoller, poll
from verigate.application.sessions.status import (
    TERMINAL_STATUSES,
    SessionStatus,
    is_terminal_status,
)

__all__ = [
    "CreateSessionParams",
    "PollState",
    "SessionCreated",
    "SessionPoller",
    "SessionStatus",
    "TERMINAL_STATUSES",
    "VerificationSession",
    "VerifiedOutputs",
    "is_terminal_status",
    "poll",
]
