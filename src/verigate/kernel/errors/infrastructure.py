"""Infrastructure errors – transport failures and unexpected gateway responses."""

from __future__ import annotations

from typing import Any

from verigate.kernel.errors.base import BaseError


class ConnectionError(BaseError):  # noqa: A001
    """Transport-level failure while talking to the gateway."""

    default_code = "connection_error"
    retryable = True

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, cause=cause, **kwargs)


class ApiError(BaseError):
    """The gateway answered with a non-2xx status other than 401."""

    default_code = "api_error"

    def __init__(
        self,
        message: str,
        status_code: int,
        *,
        request_id: str | None = None,
        raw_body: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.request_id = request_id
        self.raw_body = raw_body

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.status_code >= 500 or self.status_code == 429

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["request_id"] = self.request_id
        return base


__all__ = ["ApiError", "ConnectionError"]
