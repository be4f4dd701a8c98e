"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Mapping, TypeVar

from catalog_search.config.settings.base import Settings
from catalog_search.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from environment variables named ``<PREFIX>_<FIELD>``.

    *environ* defaults to :data:`os.environ`; tests pass a plain dict.
    Annotations are read as strings (modules use postponed evaluation), so
    coercion keys on the annotation text: ``bool``, ``int``, ``float``,
    ``list[...]`` (comma separated) and ``X | None`` (empty string is
    ``None``).
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = os.environ if environ is None else environ

    def load(self, settings_class: type[T]) -> T:
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = self._environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            try:
                kwargs[field.name] = self._coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        hint = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", str(type_hint))
        hint = hint.replace(" ", "")
        if hint.endswith("|None"):
            if value.strip() == "":
                return None
            hint = hint[: -len("|None")]
        if hint == "bool":
            return value.lower() in ("1", "true", "yes", "on")
        if hint == "int":
            return int(value)
        if hint == "float":
            return float(value)
        if hint.startswith(("list[", "tuple[")) or hint in ("list", "tuple"):
            items = [v.strip() for v in value.split(",") if v.strip()]
            return tuple(items) if hint.startswith("tuple") else items
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
