"""Config settings – SearchSettings (connection and index defaults)."""
from __future__ import annotations

import dataclasses
import logging
from urllib.parse import urlparse

from catalog_search.config.settings.base import Settings
from catalog_search.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class SearchSettings(Settings):
    """Environment-driven settings for the catalog search layer.

    Loaded from ``CATALOG_SEARCH_*`` variables::

        settings = EnvSettingsLoader().load(SearchSettings)
        backend = ElasticsearchBackend.from_settings(settings)
        JsonLoggerFactory.from_settings(settings)
    """

    _prefix = "CATALOG_SEARCH"

    hosts: list[str] = dataclasses.field(default_factory=lambda: ["http://localhost:9200"])
    index: str = "products"
    api_key: str | None = None
    request_timeout: float = 10.0
    refresh_on_write: bool = True
    log_level: str = "INFO"

    def _validate(self) -> None:
        if not self.hosts:
            raise InvalidSettingValueError("hosts", self.hosts, "at least one host is required")
        for host in self.hosts:
            parsed = urlparse(host)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise InvalidSettingValueError("hosts", host, "expected http(s)://host[:port]")
        if not self.index or self.index != self.index.lower():
            raise InvalidSettingValueError("index", self.index, "index names must be non-empty lowercase")
        if self.request_timeout <= 0:
            raise InvalidSettingValueError("request_timeout", self.request_timeout, "must be > 0")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")


__all__ = ["SearchSettings"]
