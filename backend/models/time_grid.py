"""Weekly grid: school levels, their period sequences and the day order.

Pure lookup tables. Ordering matters: grids are rendered and bulk
constraints are generated by walking these sequences front to back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.ids import slugify


class Level(str, Enum):
    ANAOKULU = "Anaokulu"
    ILKOKUL = "İlkokul"
    ORTAOKUL = "Ortaokul"

    @classmethod
    def parse(cls, raw: "str | Level") -> "Level":
        if isinstance(raw, Level):
            return raw
        key = slugify(str(raw or ""))
        for level in cls:
            if slugify(level.value) == key:
                return level
        raise ValueError(f"Unknown level: {raw!r}")


DEFAULT_LEVEL = Level.ILKOKUL

DAYS: tuple[str, ...] = ("Pazartesi", "Salı", "Çarşamba", "Perşembe", "Cuma")


@dataclass(frozen=True)
class TimePeriod:
    period: str
    start_time: str
    end_time: str
    is_break: bool = False


def _lesson(period: str, start: str, end: str) -> TimePeriod:
    return TimePeriod(period=period, start_time=start, end_time=end)


def _break(period: str, start: str, end: str) -> TimePeriod:
    return TimePeriod(period=period, start_time=start, end_time=end, is_break=True)


# Anaokulu and İlkokul share the primary-school day: breakfast first, lunch on period 5.
_PRIMARY_DAY: tuple[TimePeriod, ...] = (
    _break("prep", "08:30", "08:50"),
    _lesson("1", "08:50", "09:25"),
    _lesson("2", "09:35", "10:10"),
    _lesson("3", "10:20", "10:55"),
    _lesson("4", "11:05", "11:40"),
    _break("5", "11:50", "12:25"),
    _lesson("6", "12:25", "13:00"),
    _lesson("7", "13:10", "13:45"),
    _lesson("8", "13:55", "14:30"),
    _break("afternoon-breakfast", "14:35", "14:45"),
    _lesson("9", "14:45", "15:20"),
    _lesson("10", "15:30", "16:05"),
)

_MIDDLE_DAY: tuple[TimePeriod, ...] = (
    _break("prep", "08:30", "08:40"),
    _lesson("1", "08:40", "09:20"),
    _lesson("2", "09:30", "10:10"),
    _lesson("3", "10:20", "11:00"),
    _lesson("4", "11:10", "11:50"),
    _lesson("5", "11:50", "12:30"),
    _break("6", "12:30", "13:05"),
    _lesson("7", "13:05", "13:45"),
    _lesson("8", "13:55", "14:35"),
    _break("afternoon-breakfast", "14:35", "14:45"),
    _lesson("9", "14:45", "15:25"),
    _lesson("10", "15:35", "16:15"),
)

_PERIODS_BY_LEVEL: dict[Level, tuple[TimePeriod, ...]] = {
    Level.ANAOKULU: _PRIMARY_DAY,
    Level.ILKOKUL: _PRIMARY_DAY,
    Level.ORTAOKUL: _MIDDLE_DAY,
}


def periods_for(level: Level | str | None) -> tuple[TimePeriod, ...]:
    if level is None:
        return _PERIODS_BY_LEVEL[DEFAULT_LEVEL]
    return _PERIODS_BY_LEVEL[Level.parse(level)]


def days_of() -> tuple[str, ...]:
    return DAYS


def lesson_periods(level: Level | str | None) -> tuple[TimePeriod, ...]:
    return tuple(p for p in periods_for(level) if not p.is_break)


def find_period(level: Level | str | None, label: str) -> TimePeriod | None:
    for p in periods_for(level):
        if p.period == label:
            return p
    return None


def is_assignable(level: Level | str | None, day: str, period: str) -> bool:
    """True when (day, period) is a lesson slot of ``level``'s grid."""
    if day not in DAYS:
        return False
    tp = find_period(level, period)
    return tp is not None and not tp.is_break


def is_known_period_label(period: str) -> bool:
    return any(find_period(level, period) is not None for level in Level)


def format_time_range(tp: TimePeriod) -> str:
    return f"{tp.start_time} - {tp.end_time}"
