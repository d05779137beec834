"""Application webhooks – signature codec, verification, event envelope."""
from verigate.application.webhooks.events import (
    WebhookEvent,
    WebhookEventType,
    parse_webhook_event,
)
from verigate.application.webhooks.signature import (
    MAX_SIGNATURE_LENGTH,
    SignedHeader,
    build_signature_header,
    normalize_body,
    parse_signature_header,
    sign_payload,
)
from verigate.application.webhooks.verifier import (
    DEFAULT_TOLERANCE_SECONDS,
    VerificationOutcome,
    WebhookVerifier,
    construct_event,
    verify_signature,
    verify_signature_detailed,
)

__all__ = [
    "DEFAULT_TOLERANCE_SECONDS",
    "MAX_SIGNATURE_LENGTH",
    "SignedHeader",
    "VerificationOutcome",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookVerifier",
    "build_signature_header",
    "construct_event",
    "normalize_body",
    "parse_signature_header",
    "parse_webhook_event",
    "sign_payload",
    "verify_signature",
    "verify_signature_detailed",
]
