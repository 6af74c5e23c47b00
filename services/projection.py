"""Derived views over the roster and the schedule store."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from config import CONFIG
from domain import dates, shift_types
from domain.models import Employee
from domain.schedule import Schedule

STATUS_OK = "ok"
STATUS_ALERT = "alert"
STATUS_CLOSED = "closed"


@dataclass(slots=True)
class CellView:
    tag: str
    label: str
    css_class: str


@dataclass(slots=True)
class DayView:
    day: int
    key: str
    weekday: str
    closed: bool
    headcount: int
    status: str


@dataclass(slots=True)
class MonthGrid:
    ym: str
    branch: str
    clinic_day_off: str
    days: List[DayView]
    employees: List[Employee]
    cells: Dict[str, Dict[int, CellView]] = field(default_factory=dict)


def visible_roster(employees: Iterable[Employee], viewed_branch: str) -> List[Employee]:
    return [emp for emp in employees if emp.is_part_time or emp.branch == viewed_branch]


def daily_headcount(
    employees: Iterable[Employee],
    schedule: Schedule,
    key: str,
    viewed_branch: str,
    clinic_day_off: str | None,
) -> int:
    if dates.is_clinic_closed(key, clinic_day_off):
        return 0
    return sum(
        1
        for emp in visible_roster(employees, viewed_branch)
        if shift_types.is_working_tag(schedule.get_effective_shift(emp, key, viewed_branch, clinic_day_off))
    )


def staffing_status(count: int, closed: bool, band: Optional[Mapping[str, int]] = None) -> str:
    if closed:
        return STATUS_CLOSED
    band = band or CONFIG["staffing"]
    return STATUS_OK if band["min"] <= count <= band["max"] else STATUS_ALERT


def month_grid(
    employees: Iterable[Employee],
    schedule: Schedule,
    year: int,
    month: int,
    viewed_branch: str,
    clinic_day_off: str,
    *,
    labels: Optional[Mapping[str, str]] = None,
    band: Optional[Mapping[str, int]] = None,
) -> MonthGrid:
    labels = labels or CONFIG["shift_labels"]
    employees = list(employees)
    shown = visible_roster(employees, viewed_branch)

    days: List[DayView] = []
    cells: Dict[str, Dict[int, CellView]] = {emp.id: {} for emp in shown}
    for day in dates.days_in_month(year, month):
        key = dates.date_key(year, month, day)
        closed = dates.is_clinic_closed(key, clinic_day_off)
        count = daily_headcount(employees, schedule, key, viewed_branch, clinic_day_off)
        days.append(
            DayView(
                day=day,
                key=key,
                weekday=dates.weekday_name(key),
                closed=closed,
                headcount=count,
                status=staffing_status(count, closed, band),
            )
        )
        for emp in shown:
            tag = schedule.get_effective_shift(emp, key, viewed_branch, clinic_day_off)
            cells[emp.id][day] = CellView(
                tag=tag,
                label=shift_types.label_for(tag, labels),
                css_class=f"cell cell-{tag or 'empty'}",
            )

    return MonthGrid(
        ym=dates.month_key(year, month),
        branch=viewed_branch,
        clinic_day_off=clinic_day_off,
        days=days,
        employees=shown,
        cells=cells,
    )


def grid_as_dict(grid: MonthGrid) -> Dict[str, object]:
    return {
        "month": grid.ym,
        "branch": grid.branch,
        "clinic_day_off": grid.clinic_day_off,
        "days": [
            {
                "day": d.day,
                "date": d.key,
                "weekday": d.weekday,
                "closed": d.closed,
                "headcount": d.headcount,
                "status": d.status,
            }
            for d in grid.days
        ],
        "employees": [emp.to_dict() for emp in grid.employees],
        "cells": {
            emp_id: {str(day): cell.tag for day, cell in row.items()}
            for emp_id, row in grid.cells.items()
        },
    }
