"""Application – webhook verification and session polling (framework-agnostic)."""

from verigate.application.sessions import SessionPoller, SessionStatus, is_terminal_status, poll
from verigate.application.webhooks import (
    WebhookVerifier,
    build_signature_header,
    construct_event,
    parse_signature_header,
    sign_payload,
    verify_signature,
)

__all__ = [
    "SessionPoller",
    "SessionStatus",
    "WebhookVerifier",
    "build_signature_header",
    "construct_event",
    "is_terminal_status",
    "parse_signature_header",
    "poll",
    "sign_payload",
    "verify_signature",
]
