"""Root error class for the verigate error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.

    ``retryable`` tells callers whether repeating the same operation may
    succeed (transport trouble, deadlines) or is pointless (bad signature,
    rejected credentials, malformed input).
    """

    default_code: str = "base_error"
    retryable: bool = False
    status_code: int | None = None

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging / HTTP responses)."""
        payload: dict[str, Any] = {
            "type": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
            "detail": self.detail,
        }
        if self.status_code is not None:
            payload["status_code"] = self.status_code
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


def is_retryable(exc: BaseException) -> bool:
    """Return True when *exc* is a verigate error flagged as retryable."""
    return isinstance(exc, BaseError) and exc.retryable


__all__ = ["BaseError", "is_retryable"]
