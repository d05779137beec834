"""Application errors – webhook authentication, credentials and polling deadlines."""

from __future__ import annotations

from typing import Any

from verigate.kernel.errors.base import BaseError


class SignatureVerificationError(BaseError):
    """Webhook signature header missing, malformed, stale or not matching."""

    default_code = "invalid_signature"
    status_code = 401

    def __init__(
        self,
        message: str = "Webhook signature verification failed",
        *,
        reason: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["reason"] = self.reason
        return base


class AuthenticationError(BaseError):
    """Credential rejected by the remote gateway. Never retried automatically."""

    default_code = "invalid_api_key"
    status_code = 401

    def __init__(self, message: str = "Invalid API key provided", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class TimeoutError(BaseError):  # noqa: A001
    """Polling deadline exceeded before the session reached a terminal status."""

    default_code = "polling_timeout"
    retryable = True

    def __init__(
        self,
        session_id: str,
        last_status: str,
        duration_ms: int,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Polling timed out after {duration_ms}ms. "
            f"Session {session_id} last status: {last_status}",
            **kwargs,
        )
        self.session_id = session_id
        self.last_status = last_status
        self.duration_ms = duration_ms

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(
            session_id=self.session_id,
            last_status=self.last_status,
            duration_ms=self.duration_ms,
        )
        return base


__all__ = ["AuthenticationError", "SignatureVerificationError", "TimeoutError"]
