"""Config settings – environment and ``.env`` loaders.

Each dataclass field ``name`` of a :class:`Settings` subclass maps to the
variable ``{PREFIX}_{NAME}``, e.g. ``VerigateSettings.webhook_secret`` to
``VERIGATE_WEBHOOK_SECRET``.  Values are stripped of surrounding whitespace
(secrets pasted from a dashboard often carry a trailing newline) and coerced
to ``int``, ``float`` or ``bool`` according to the field annotation.
"""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Callable, Mapping, TypeVar

from dotenv import dotenv_values

from verigate.config.settings.base import Settings
from verigate.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _to_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"expected one of {sorted(_TRUE | _FALSE - {''})}")


_COERCERS: dict[str, Callable[[str], Any]] = {"bool": _to_bool, "int": int, "float": float}


def env_key(settings_class: type[Settings], field_name: str) -> str:
    """Environment variable name for *field_name* on *settings_class*."""
    prefix = getattr(settings_class, "_prefix", "")
    return f"{prefix}_{field_name}".upper() if prefix else field_name.upper()


def _has_default(field: dataclasses.Field[Any]) -> bool:
    return (
        field.default is not dataclasses.MISSING
        or field.default_factory is not dataclasses.MISSING
    )


class SettingsLoader(abc.ABC):
    """Port: build a :class:`Settings` instance from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read settings from ``os.environ`` or from an explicit mapping."""

    def __init__(self, environ: Mapping[str, str | None] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):
            key = env_key(settings_class, field.name)
            raw = environ.get(key)
            if raw is None:
                if not _has_default(field):
                    raise MissingRequiredSettingError(key)
                continue
            raw = raw.strip()
            try:
                kwargs[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except TypeError as exc:
            raise ConfigError(f"Cannot build {settings_class.__name__}: {exc}") from exc

    @staticmethod
    def _coerce(value: str, type_hint: Any) -> Any:
        name = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "")
        coerce = _COERCERS.get(name)
        return value if coerce is None else coerce(value)


class DotenvSettingsLoader(SettingsLoader):
    """Overlay a ``.env`` file on the process environment.

    The file is parsed with python-dotenv and never written into
    ``os.environ``.  Real environment variables win unless ``override`` is set.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        file_values = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            merged = {**os.environ, **file_values}
        else:
            merged = {**file_values, **os.environ}
        return EnvSettingsLoader(environ=merged).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader", "env_key"]
