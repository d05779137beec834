"""Config validation errors.

Messages never echo the value of a credential setting (API key, webhook
secret); only its name and the reason it was rejected.
"""
from __future__ import annotations

from typing import Any

from verigate.kernel.errors import BaseError

_CREDENTIAL_MARKERS = ("key", "secret", "token", "password")


def _is_credential(setting_name: str) -> bool:
    lowered = setting_name.lower()
    return any(marker in lowered for marker in _CREDENTIAL_MARKERS)


class ConfigError(BaseError):
    """The SDK cannot start with the configuration it was given."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Required setting '{setting_name}' is missing; "
            "set it in the environment or in a .env file"
        )
        self.setting_name = setting_name

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["setting_name"] = self.setting_name
        return base


class InvalidSettingValueError(ConfigError):
    """A setting is present but unusable (wrong type, out of range, empty credential)."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        shown = "***" if _is_credential(setting_name) and value else repr(value)
        super().__init__(f"Setting '{setting_name}' = {shown} is invalid: {reason}")
        self.setting_name = setting_name
        self.value = value
        self.reason = reason

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base.update(setting_name=self.setting_name, reason=self.reason)
        return base


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
