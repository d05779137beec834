"""Application webhooks – gateway event envelope."""
from __future__ import annotations

import json
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from verigate.application.sessions.models import VerificationSession, validate_model
from verigate.application.sessions.status import SessionStatus


class WebhookEventType(str, Enum):
    """Every event type the gateway delivers."""

    PROCESSING = "identity.verification_session.processing"
    VERIFIED = "identity.verification_session.verified"
    REQUIRES_INPUT = "identity.verification_session.requires_input"
    FAILED = "identity.verification_session.failed"
    CANCELED = "identity.verification_session.canceled"
    REDACTED = "identity.verification_session.redacted"


_STATUS_EVENT_TYPES: dict[SessionStatus, WebhookEventType] = {
    SessionStatus.PROCESSING: WebhookEventType.PROCESSING,
    SessionStatus.VERIFIED: WebhookEventType.VERIFIED,
    SessionStatus.REQUIRES_INPUT: WebhookEventType.REQUIRES_INPUT,
    SessionStatus.FAILED: WebhookEventType.FAILED,
    SessionStatus.CANCELED: WebhookEventType.CANCELED,
}


def event_type_for_status(status: SessionStatus) -> WebhookEventType | None:
    """Map a session status to the event the gateway emits for it (``pending`` has none)."""
    return _STATUS_EVENT_TYPES.get(status)


class WebhookEventData(BaseModel):
    object: VerificationSession


class WebhookEvent(BaseModel):
    """Signed notification about a verification session."""

    model_config = ConfigDict(frozen=True)

    id: str
    object: Literal["event"] = "event"
    type: WebhookEventType
    created: int
    livemode: bool
    data: WebhookEventData

    @property
    def session(self) -> VerificationSession:
        return self.data.object


def parse_webhook_event(body: str) -> WebhookEvent:
    """Decode *body* as JSON and validate it as a :class:`WebhookEvent`.

    Malformed JSON raises :class:`json.JSONDecodeError`; a well-formed
    document with the wrong shape raises
    :class:`~verigate.kernel.errors.ValidationError` naming the field.
    """
    return validate_model(WebhookEvent, json.loads(body), context="Invalid webhook payload")


__all__ = [
    "WebhookEvent",
    "WebhookEventData",
    "WebhookEventType",
    "event_type_for_status",
    "parse_webhook_event",
]
