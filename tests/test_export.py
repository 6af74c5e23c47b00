from __future__ import annotations

import csv

from openpyxl import load_workbook

from domain.models import FULL_TIME
from domain.roster import EmployeeDraft
from services import export_service

BRANCH_A = "บึงทับช้าง"


def _seed(state):
    doctor = state.add_employee(EmployeeDraft("Somchai", "แพทย์แผนไทย", BRANCH_A, FULL_TIME))
    state.set_shift(doctor.id, 2, "morning")
    state.set_shift(doctor.id, 3, "leave")
    return doctor


def test_export_xlsx(state):
    _seed(state)
    stream, filename = export_service.export_xlsx(state)
    assert filename == f"schedule_2025-06_{BRANCH_A}.xlsx"

    ws = load_workbook(stream).active
    assert ws.cell(row=1, column=2).value == 1
    assert ws.cell(row=1, column=31).value == 30
    # row 2 holds the daily headcount, Sunday the 1st is closed
    assert ws.cell(row=2, column=2).value == "ปิด"
    assert ws.cell(row=2, column=3).value == 1
    assert ws.cell(row=3, column=1).value == "Somchai (แพทย์แผนไทย)"
    assert ws.cell(row=3, column=3).value == "เช้า"
    assert ws.cell(row=3, column=4).value == "ลา"


def test_export_csv(state):
    doctor = _seed(state)
    buffer, filename = export_service.export_csv(state)
    assert filename.endswith(".csv")

    rows = list(csv.reader(buffer))
    assert rows[0][:4] == ["employee_id", "employee", "position", "2025-06-01"]
    assert rows[1][3] == "closed"
    assert rows[1][4] == "1"
    assert rows[2][0] == doctor.id
    assert rows[2][3:6] == ["clinic-closed", "morning", "leave"]
