"""Application sessions – gateway wire models.

Field names follow the gateway's JSON (snake_case) so responses validate
without aliasing.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Literal

import pydantic
from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from verigate.application.sessions.status import SessionStatus
from verigate.kernel.errors import ValidationError


class VerificationType(str, Enum):
    DOCUMENT = "document"
    ID_NUMBER = "id_number"


class Dob(BaseModel):
    day: int = Field(ge=1, le=31)
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1900, le=2100)


class VerifiedOutputs(BaseModel):
    """User data extracted from the verified document."""

    first_name: str | None = None
    last_name: str | None = None
    dob: Dob | None = None
    sex: Literal["male", "female", "unspecified"] | None = None
    id_number_type: Literal["fi_hetu", "us_ssn", "other"] | None = None
    id_number_last4: str | None = None
    id_number_masked: str | None = None


class LastError(BaseModel):
    code: str
    reason: str


class CreateSessionParams(BaseModel):
    model_config = ConfigDict(extra="forbid")

    customer_user_ref: str = Field(min_length=1)
    callback_url: HttpUrl
    error_url: HttpUrl | None = None
    customer_name: str | None = None
    reason: str | None = None


class SessionCreated(BaseModel):
    session_id: str
    client_token: str
    expires_at: str


class VerificationSession(BaseModel):
    """A verification session as returned by ``GET /api/v1/sessions/{id}``."""

    model_config = ConfigDict(frozen=True)

    id: str
    object: Literal["identity.verification_session"] = "identity.verification_session"
    created: int
    livemode: bool
    type: VerificationType
    status: SessionStatus
    client_reference_id: str
    last_error: LastError | None = None
    last_verification_report: str | None = None
    verified_outputs: VerifiedOutputs | None = None

    @property
    def session_id(self) -> str:
        return self.id


def _first_error_field(exc: pydantic.ValidationError) -> str | None:
    errors = exc.errors()
    if not errors:
        return None
    return ".".join(str(part) for part in errors[0]["loc"]) or None


def validate_model(model: type[BaseModel], data: Any, *, context: str) -> Any:
    """Validate *data* against *model*, mapping failures to :class:`ValidationError`."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        field = _first_error_field(exc)
        first = exc.errors()[0]["msg"] if exc.errors() else str(exc)
        raise ValidationError(f"{context}: {field or 'body'} - {first}", field=field) from exc


__all__ = [
    "CreateSessionParams",
    "Dob",
    "LastError",
    "SessionCreated",
    "VerificationSession",
    "VerificationType",
    "VerifiedOutputs",
    "validate_model",
]
