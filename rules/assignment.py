"""Assignment rules applied to every cell edit."""
from __future__ import annotations

from typing import Mapping

from config import CONFIG
from domain import dates, shift_types
from domain.errors import ShiftRejected
from domain.models import Employee, Shift, ShiftEntry, WorkingAssignment
from domain.schedule import Schedule


def resolve_shift(
    employee: Employee,
    key: str,
    value: str | None,
    viewed_branch: str,
    schedule: Schedule,
    clinic_day_off: str | None,
    *,
    prompts: Mapping[str, str] | None = None,
    weekday_labels: Mapping[str, str] | None = None,
) -> ShiftEntry:
    """Return the entry to store for ``(employee, key)`` or raise ``ShiftRejected``.

    The clinic day-off gate is checked first; once it applies no other rule
    runs. Part-time staff may hold one working assignment per date across all
    branches; non-working tags replace it wherever it was.
    """

    prompts = prompts or CONFIG["prompts"]
    tag = shift_types.normalize_tag(value)

    if dates.is_clinic_closed(key, clinic_day_off):
        if tag != shift_types.CLINIC_CLOSED:
            labels = weekday_labels or CONFIG["weekday_labels"]
            weekday = dates.weekday_name(key)
            raise ShiftRejected(
                prompts["clinic_closed_title"],
                prompts["clinic_closed_message"].format(weekday=labels.get(weekday, weekday)),
            )
        return Shift(shift_types.CLINIC_CLOSED)

    if not employee.is_part_time:
        return Shift(tag)

    if not shift_types.is_working_tag(tag):
        return Shift(tag)

    current = schedule.working_assignment(employee.id, key)
    if current is not None and current.branch != viewed_branch:
        raise ShiftRejected(
            prompts["part_time_title"],
            prompts["part_time_message"].format(other=current.branch, branch=viewed_branch),
        )
    return WorkingAssignment(state=tag, branch=viewed_branch)
