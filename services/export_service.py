from __future__ import annotations

from io import BytesIO, StringIO
from typing import Tuple

from adapters.report import csv_writer, xlsx_writer
from services.clinic_state import ClinicState


def _filename(state: ClinicState, branch: str, extension: str) -> str:
    return f"schedule_{state.month_key}_{branch}.{extension}"


def export_xlsx(state: ClinicState, branch: str | None = None) -> Tuple[BytesIO, str]:
    grid = state.grid(branch)
    stream = xlsx_writer.grid_to_bytes(grid, closed_label=state.config["shift_labels"]["clinic-closed"])
    return stream, _filename(state, grid.branch, "xlsx")


def export_csv(state: ClinicState, branch: str | None = None) -> Tuple[StringIO, str]:
    grid = state.grid(branch)
    buffer = StringIO()
    csv_writer.write_grid(buffer, grid)
    buffer.seek(0)
    return buffer, _filename(state, grid.branch, "csv")
