"""Excel writer for a branch month grid."""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from services.projection import STATUS_ALERT, STATUS_CLOSED, MonthGrid

HEADER_FONT = Font(bold=True)
CENTER = Alignment(horizontal="center", vertical="center")
CLOSED_FILL = PatternFill(fill_type="solid", start_color="E9D5FF", end_color="E9D5FF")
ALERT_FILL = PatternFill(fill_type="solid", start_color="FEE2E2", end_color="FEE2E2")


def write_grid(target: str | Path | BinaryIO, grid: MonthGrid, *, closed_label: str = "ปิด") -> str | Path | BinaryIO:
    wb = Workbook()
    ws = wb.active
    # sheet titles are capped at 31 characters
    ws.title = f"{grid.ym} {grid.branch}"[:31]

    ws.cell(row=1, column=1, value="Employee").font = HEADER_FONT
    ws.cell(row=2, column=1, value="Staff / day").font = HEADER_FONT
    for col_idx, day in enumerate(grid.days, start=2):
        cell = ws.cell(row=1, column=col_idx, value=day.day)
        cell.font = HEADER_FONT
        cell.alignment = CENTER
        count = ws.cell(row=2, column=col_idx, value=closed_label if day.closed else day.headcount)
        count.alignment = CENTER
        if day.status == STATUS_CLOSED:
            cell.fill = count.fill = CLOSED_FILL
        elif day.status == STATUS_ALERT:
            count.fill = ALERT_FILL

    for row_idx, employee in enumerate(grid.employees, start=3):
        ws.cell(row=row_idx, column=1, value=f"{employee.name} ({employee.position})").font = HEADER_FONT
        row = grid.cells.get(employee.id, {})
        for col_idx, day in enumerate(grid.days, start=2):
            view = row.get(day.day)
            cell = ws.cell(row=row_idx, column=col_idx, value=view.label if view and view.tag else "")
            cell.alignment = CENTER
            if day.closed:
                cell.fill = CLOSED_FILL

    wb.save(target)
    return target


def grid_to_bytes(grid: MonthGrid, **kwargs) -> BytesIO:
    stream = BytesIO()
    write_grid(stream, grid, **kwargs)
    stream.seek(0)
    return stream
