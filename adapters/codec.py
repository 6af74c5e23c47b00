"""Encode/decode the persisted schedule document."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from domain import dates, shift_types
from domain.models import EMPLOYEE_TYPES, FULL_TIME, PART_TIME, Employee, Shift, ShiftEntry, WorkingAssignment
from domain.schedule import Schedule

logger = logging.getLogger(__name__)


@dataclass
class DecodedDocument:
    employees: List[Employee] = field(default_factory=list)
    schedule: Schedule = field(default_factory=Schedule)
    month: Optional[str] = None
    clinic_day_off: Optional[str] = None
    branch: Optional[str] = None


def encode_entry(entry: ShiftEntry) -> Any:
    if isinstance(entry, WorkingAssignment):
        return {"type": entry.state, "branch": entry.branch}
    return entry.tag


def decode_entry(raw: Any) -> ShiftEntry:
    if shift_types.is_working_assignment(raw):
        state = shift_types.normalize_tag(raw.get("type", raw.get("state")))
        return WorkingAssignment(state=state, branch=str(raw["branch"]))
    if isinstance(raw, Mapping):
        # an object without a usable branch keeps only its state
        return Shift(shift_types.normalize_tag(raw.get("type", raw.get("state"))))
    return Shift(shift_types.normalize_tag(raw))


def encode_document(
    employees: List[Employee],
    schedule: Schedule,
    *,
    month: str,
    clinic_day_off: str,
    branch: str | None = None,
    branches: List[str] | None = None,
) -> Dict[str, Any]:
    by_employee: Dict[str, Dict[str, Any]] = {}
    for key in schedule:
        for employee_id, entry in schedule[key].items():
            by_employee.setdefault(employee_id, {})[key] = encode_entry(entry)
    return {
        "employees": [emp.to_dict() for emp in employees],
        "schedule": by_employee,
        "date": month,
        "clinic_day_off": clinic_day_off,
        "branch": branch,
        "branches": list(branches or []),
        "saved_at": datetime.now(timezone.utc).isoformat(),
    }


def decode_document(document: Mapping[str, Any] | None, *, pool_branch: str) -> DecodedDocument:
    result = DecodedDocument()
    if not document:
        return result
    if not isinstance(document, Mapping):
        raise TypeError(f"Schedule document must be a mapping, got {type(document).__name__}")

    result.month = _month_of(document.get("date"))
    result.clinic_day_off = document.get("clinic_day_off") or None
    result.branch = document.get("branch") or None

    raw_employees = document.get("employees")
    if isinstance(raw_employees, list):
        for raw in raw_employees:
            employee = _decode_employee(raw, pool_branch)
            if employee is not None:
                result.employees.append(employee)

    raw_schedule = document.get("schedule") or {}
    if isinstance(raw_schedule, Mapping):
        for employee_id, days in raw_schedule.items():
            if not isinstance(days, Mapping):
                continue
            for day, raw_entry in days.items():
                key = _resolve_key(str(day), result.month)
                if key is None:
                    logger.warning("Skipping cell %s/%s: no usable date", employee_id, day)
                    continue
                try:
                    entry = decode_entry(raw_entry)
                except (shift_types.UnknownShiftTagError, ValueError) as exc:
                    logger.warning("Skipping cell %s/%s: %s", employee_id, key, exc)
                    continue
                result.schedule.set_entry(str(employee_id), key, entry)
    return result


def _decode_employee(raw: Any, pool_branch: str) -> Optional[Employee]:
    if not isinstance(raw, Mapping) or not raw.get("id"):
        logger.warning("Skipping employee record without id: %r", raw)
        return None
    employee_type = raw.get("type") if raw.get("type") in EMPLOYEE_TYPES else FULL_TIME
    branch = pool_branch if employee_type == PART_TIME else str(raw.get("branch") or "")
    return Employee(
        id=str(raw["id"]),
        name=str(raw.get("name") or ""),
        position=str(raw.get("position") or ""),
        branch=branch,
        type=employee_type,
    )


def _month_of(value: Any) -> Optional[str]:
    if not value:
        return None
    text = str(value)[:7]
    try:
        datetime.strptime(text, "%Y-%m")
    except ValueError:
        return None
    return text


def _resolve_key(day: str, month: Optional[str]) -> Optional[str]:
    """Accept ``YYYY-MM-DD`` keys and bare day numbers relative to *month*."""

    try:
        return date.fromisoformat(day).isoformat()
    except ValueError:
        pass
    if month is None or not day.isdigit():
        return None
    year, mon = (int(part) for part in month.split("-"))
    if int(day) not in dates.days_in_month(year, mon):
        return None
    return dates.date_key(year, mon, int(day))
