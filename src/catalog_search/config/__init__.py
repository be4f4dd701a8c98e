"""Config – settings dataclasses, loaders and validation errors."""
from catalog_search.config.settings import EnvSettingsLoader, SearchSettings, Settings, SettingsLoader
from catalog_search.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SearchSettings",
    "Settings",
    "SettingsLoader",
]
