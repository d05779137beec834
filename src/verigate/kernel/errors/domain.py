"""Domain errors – malformed parameters and payloads."""

from __future__ import annotations

from typing import Any

from verigate.kernel.errors.base import BaseError


class ValidationError(BaseError):
    """Parameters or a response shape failed validation.

    ``field`` names the offending field when it is known (dotted path for
    nested fields, e.g. ``data.object.status``).
    """

    default_code = "invalid_parameters"
    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["field"] = self.field
        return base


__all__ = ["ValidationError"]
