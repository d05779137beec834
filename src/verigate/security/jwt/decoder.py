"""Security – session token capability (PyJWT-backed).

Web-framework integrations keep the verification outcome in a signed session
token (usually a cookie).  The SDK core only needs the capability
``verify_token(token, secret) -> SessionClaims``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol

import jwt as pyjwt

from verigate.kernel.errors import BaseError

__all__ = [
    "InvalidTokenError",
    "JwtSessionTokenVerifier",
    "SessionClaims",
    "SessionTokenVerifier",
]


class InvalidTokenError(BaseError):
    """Raised when a session token cannot be decoded or fails validation."""

    default_code = "invalid_token"
    status_code = 401


@dataclass(frozen=True)
class SessionClaims:
    sub: str
    session_id: str = ""
    status: str = ""
    exp: datetime | None = None
    iat: datetime | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_verified(self) -> bool:
        return self.status == "verified"

    def is_expired(self) -> bool:
        return self.exp is not None and datetime.now(timezone.utc) >= self.exp

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> SessionClaims:
        def _dt(v: Any) -> datetime:
            if isinstance(v, datetime):
                return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v
            return datetime.fromtimestamp(int(v), tz=timezone.utc)

        known = {"sub", "sid", "status", "exp", "iat"}
        return cls(
            sub=payload.get("sub", ""),
            session_id=payload.get("sid", ""),
            status=payload.get("status", ""),
            exp=_dt(payload["exp"]) if "exp" in payload else None,
            iat=_dt(payload["iat"]) if "iat" in payload else None,
            extra={k: v for k, v in payload.items() if k not in known},
        )


class SessionTokenVerifier(Protocol):
    """Port: turn an opaque session token into claims or raise InvalidTokenError."""

    def verify_token(self, token: str, secret: str | bytes) -> SessionClaims: ...


class JwtSessionTokenVerifier:
    """Issues and verifies HS256 session tokens using PyJWT."""

    def __init__(self, algorithms: list[str] | None = None, leeway_seconds: int = 0) -> None:
        self._algorithms = algorithms or ["HS256"]
        self._leeway = leeway_seconds

    def verify_token(self, token: str, secret: str | bytes) -> SessionClaims:
        if not token:
            raise InvalidTokenError("Session token is missing")
        try:
            payload = pyjwt.decode(
                token,
                secret,
                algorithms=self._algorithms,
                leeway=self._leeway,
                options={"verify_aud": False, "require": ["sub"]},
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise InvalidTokenError("Session token has expired", cause=exc) from exc
        except pyjwt.PyJWTError as exc:
            raise InvalidTokenError(f"Invalid session token: {exc}", cause=exc) from exc
        return SessionClaims.from_payload(payload)

    def issue(
        self,
        claims: dict[str, Any],
        secret: str | bytes,
        expires_in: timedelta | None = None,
    ) -> str:
        payload = dict(claims)
        now = datetime.now(timezone.utc)
        payload.setdefault("iat", now)
        if expires_in is not None:
            payload["exp"] = now + expires_in
        return pyjwt.encode(payload, secret, algorithm=self._algorithms[0])
