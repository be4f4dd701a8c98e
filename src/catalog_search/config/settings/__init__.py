"""Config settings – 12-factor env-based configuration."""
from catalog_search.config.settings.base import Settings
from catalog_search.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from catalog_search.config.settings.search import SearchSettings

__all__ = ["EnvSettingsLoader", "SearchSettings", "Settings", "SettingsLoader"]
