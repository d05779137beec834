"""Config settings – Settings base class and the SDK's own settings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from verigate.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class VerigateSettings(Settings):
    """Gateway credentials, webhook secret and polling defaults.

    Loaded from ``VERIGATE_*`` environment variables, e.g.
    ``VERIGATE_API_KEY`` and ``VERIGATE_WEBHOOK_SECRET``.
    """

    _prefix: ClassVar[str] = "VERIGATE"

    api_key: str
    api_base_url: str = "https://api.verigate.io"
    webhook_secret: str = ""
    webhook_tolerance_seconds: int = 300
    signature_header: str = "X-Verigate-Signature"
    poll_interval_ms: int = 2000
    poll_max_duration_ms: int = 300_000
    request_timeout_ms: int = 30_000

    def _validate(self) -> None:
        if not self.api_key:
            raise InvalidSettingValueError("api_key", self.api_key, "must not be empty")
        if not self.api_base_url.startswith(("https://", "http://")):
            raise InvalidSettingValueError(
                "api_base_url", self.api_base_url, "must be an http(s) URL"
            )
        if self.webhook_tolerance_seconds < 0:
            raise InvalidSettingValueError(
                "webhook_tolerance_seconds", self.webhook_tolerance_seconds, "must be >= 0"
            )
        if self.poll_interval_ms < 0:
            raise InvalidSettingValueError("poll_interval_ms", self.poll_interval_ms, "must be >= 0")
        if self.poll_max_duration_ms <= 0:
            raise InvalidSettingValueError(
                "poll_max_duration_ms", self.poll_max_duration_ms, "must be > 0"
            )
        if self.request_timeout_ms <= 0:
            raise InvalidSettingValueError(
                "request_timeout_ms", self.request_timeout_ms, "must be > 0"
            )

    def __repr__(self) -> str:
        return (
            f"VerigateSettings(api_base_url={self.api_base_url!r}, "
            f"api_key='***', webhook_secret={'***' if self.webhook_secret else ''!r})"
        )


__all__ = ["Settings", "VerigateSettings"]
