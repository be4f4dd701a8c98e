"""Observability – SensitiveFieldsFilter.

Engine credentials reach log events two ways: as keyword fields
(``api_key=...``) and embedded in host URLs (``https://elastic:pw@es:9200``).
Both are masked before rendering.
"""
from __future__ import annotations

import re
from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {"api_key", "apikey", "authorization", "password", "basic_auth", "token"}
)

_URL_USERINFO = re.compile(r"(?P<scheme>[a-z][a-z0-9+.-]*://)[^/@\s]+@", re.IGNORECASE)


class SensitiveFieldsFilter:
    """Mask credential values in structured log events."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = frozenset(f.lower() for f in (sensitive_fields or DEFAULT_SENSITIVE_FIELDS))

    def is_sensitive(self, key: str) -> bool:
        return key.lower() in self._fields

    def redact(self, data: dict[str, Any]) -> dict[str, Any]:
        """Top-level keys only."""
        return {k: (self.REDACTED if self.is_sensitive(k) else v) for k, v in data.items()}

    def redact_deep(self, data: dict[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if self.is_sensitive(k) else self._scrub(v)) for k, v in data.items()}

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.redact_deep(value)
        if isinstance(value, (list, tuple)):
            return type(value)(self._scrub(v) for v in value)
        if isinstance(value, str) and "@" in value:
            return _URL_USERINFO.sub(rf"\g<scheme>{self.REDACTED}@", value)
        return value


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsFilter"]
