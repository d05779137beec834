"""Observability – SensitiveFieldsFilter.

Runs first in the structlog chain so that API keys, webhook secrets, session
tokens and signature headers never reach a renderer.  A key is sensitive when
its lower-cased name equals a configured field or ends with ``_<field>``
(``verigate_webhook_secret``, ``x_api_key``).
"""
from __future__ import annotations

from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "secret", "webhook_secret", "api_key", "apikey", "authorization",
    "signature", "signature_header", "x-verigate-signature",
    "token", "client_token", "password",
})


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def is_sensitive(self, key: Any) -> bool:
        if not isinstance(key, str):
            return False
        lowered = key.lower()
        return lowered in self._fields or any(lowered.endswith(f"_{f}") for f in self._fields)

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if self.is_sensitive(k) else v) for k, v in data.items()}

    def redact_deep(self, data: Any) -> Any:
        """Recursively redact dicts, including dicts nested in lists and tuples."""
        if isinstance(data, dict):
            return {
                k: (self.REDACTED if self.is_sensitive(k) else self.redact_deep(v))
                for k, v in data.items()
            }
        if isinstance(data, list):
            return [self.redact_deep(item) for item in data]
        if isinstance(data, tuple):
            return tuple(self.redact_deep(item) for item in data)
        return data

    def __call__(self, logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG002
        """structlog processor entry point."""
        return self.redact_deep(event_dict)


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
