"""Application expressions – relative date expressions (``now-3d``).

A :class:`DateMath` bound and an absolute ``datetime`` bound compile through
the same range path; the engine resolves the relative form against its own
clock at query time.
"""
from __future__ import annotations

import calendar
import dataclasses
import re
from datetime import datetime, timedelta

from catalog_search.kernel.errors import InvalidExpressionError

_STEP_RE = re.compile(r"([+-])(\d+)([yMwdhHms])")
_EXPR_RE = re.compile(r"^now((?:[+-]\d+[yMwdhHms])*)(?:/([yMwdhHms]))?$")

_FIXED_UNITS = {
    "w": timedelta(weeks=1),
    "d": timedelta(days=1),
    "h": timedelta(hours=1),
    "H": timedelta(hours=1),
    "m": timedelta(minutes=1),
    "s": timedelta(seconds=1),
}


@dataclasses.dataclass(frozen=True)
class DateMath:
    """An engine date-math expression anchored at ``now``."""

    expression: str

    def __post_init__(self) -> None:
        if not _EXPR_RE.match(self.expression):
            raise InvalidExpressionError(
                f"Unsupported date math expression '{self.expression}'",
                fragment=self.expression,
            )

    def __str__(self) -> str:
        return self.expression

    @classmethod
    def now(cls) -> "DateMath":
        return cls("now")

    @classmethod
    def ago(
        cls,
        *,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
    ) -> "DateMath":
        """``DateMath.ago(days=3)`` → ``now-3d``."""
        parts = [
            (weeks, "w"),
            (days, "d"),
            (hours, "h"),
            (minutes, "m"),
            (seconds, "s"),
        ]
        steps = "".join(f"-{amount}{unit}" for amount, unit in parts if amount)
        return cls(f"now{steps}")

    @classmethod
    def is_expression(cls, value: str) -> bool:
        return bool(_EXPR_RE.match(value))

    def resolve(self, now: datetime) -> datetime:
        """Evaluate against *now*; used by engines without native date math."""
        match = _EXPR_RE.match(self.expression)
        assert match is not None
        steps, rounding = match.groups()
        value = now
        for sign, amount, unit in _STEP_RE.findall(steps or ""):
            delta = int(amount) if sign == "+" else -int(amount)
            value = _shift(value, delta, unit)
        if rounding:
            value = _round_down(value, rounding)
        return value


def _shift(value: datetime, amount: int, unit: str) -> datetime:
    if unit == "y":
        return _add_months(value, 12 * amount)
    if unit == "M":
        return _add_months(value, amount)
    return value + _FIXED_UNITS[unit] * amount


def _add_months(value: datetime, months: int) -> datetime:
    index = value.month - 1 + months
    year, month = value.year + index // 12, index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _round_down(value: datetime, unit: str) -> datetime:
    value = value.replace(microsecond=0)
    if unit == "s":
        return value
    value = value.replace(second=0)
    if unit == "m":
        return value
    value = value.replace(minute=0)
    if unit in ("h", "H"):
        return value
    value = value.replace(hour=0)
    if unit == "d":
        return value
    if unit == "w":
        return value - timedelta(days=value.weekday())
    value = value.replace(day=1)
    if unit == "M":
        return value
    return value.replace(month=1)


__all__ = ["DateMath"]
