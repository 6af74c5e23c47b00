"""CSV report helpers."""
from __future__ import annotations

import csv
from typing import TextIO

from services.projection import MonthGrid


def write_grid(handle: TextIO, grid: MonthGrid) -> TextIO:
    writer = csv.writer(handle)
    writer.writerow(["employee_id", "employee", "position"] + [day.key for day in grid.days])
    writer.writerow(["", "headcount", ""] + [day.status if day.closed else day.headcount for day in grid.days])
    for employee in grid.employees:
        row = grid.cells.get(employee.id, {})
        writer.writerow(
            [employee.id, employee.name, employee.position]
            + [row[day.day].tag if day.day in row else "" for day in grid.days]
        )
    return handle
