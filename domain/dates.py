"""Date key and weekday helpers."""
from __future__ import annotations

import calendar
from datetime import date
from typing import List, Sequence

NO_DAY_OFF = "none"

# Sunday first, matches the day-off selector
WEEKDAYS: Sequence[str] = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")


def date_key(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_date_key(key: str) -> date:
    return date.fromisoformat(key)


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def days_in_month(year: int, month: int) -> List[int]:
    _, num_days = calendar.monthrange(year, month)
    return list(range(1, num_days + 1))


def weekday_name(key: str) -> str:
    # date.weekday() is Monday=0; shift to Sunday=0
    return WEEKDAYS[(parse_date_key(key).weekday() + 1) % 7]


def is_clinic_closed(key: str, day_off: str | None) -> bool:
    if not day_off or day_off == NO_DAY_OFF:
        return False
    return weekday_name(key) == day_off


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
