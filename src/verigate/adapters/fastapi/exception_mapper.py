"""FastAPI adapter – FastAPIExceptionMapper."""
from __future__ import annotations

from typing import Any, Callable

from fastapi.responses import JSONResponse

from verigate.kernel.errors import (
    ApiError,
    AuthenticationError,
    BaseError,
    ConnectionError,
    SignatureVerificationError,
    TimeoutError,
    ValidationError,
)
from verigate.security.jwt import InvalidTokenError


class FastAPIExceptionMapper:
    """Register verigate error → HTTP status-code mappings on a FastAPI app.

    Error body schema::

        {"type": "...", "code": "...", "message": "...", "retryable": false, ...}

    Mappings
    --------
    ``ValidationError``            → 400
    ``SignatureVerificationError`` → 401
    ``AuthenticationError``        → 401
    ``InvalidTokenError``          → 401
    ``ApiError``                   → 502
    ``ConnectionError``            → 503
    ``TimeoutError``               → 504
    ``BaseError``                  → 500
    """

    def __init__(self) -> None:
        self._map: list[tuple[type[Exception], int]] = [
            (ValidationError, 400),
            (SignatureVerificationError, 401),
            (AuthenticationError, 401),
            (InvalidTokenError, 401),
            (ApiError, 502),
            (ConnectionError, 503),
            (TimeoutError, 504),
            (BaseError, 500),
        ]

    def status_for(self, exc: BaseException) -> int:
        for exc_type, status in self._map:
            if isinstance(exc, exc_type):
                return status
        return 500

    def register(self, app: Any) -> None:
        """Register all error handlers on a ``FastAPI`` or ``Starlette`` app."""
        for exc_type, status in self._map:

            def make_handler(code: int) -> Callable[[Any, Any], Any]:
                def handler(request: Any, exc: Any) -> Any:  # noqa: ARG001
                    return JSONResponse(status_code=code, content=exc.to_dict())

                return handler

            app.add_exception_handler(exc_type, make_handler(status))


__all__ = ["FastAPIExceptionMapper"]
