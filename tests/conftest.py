from __future__ import annotations

from datetime import date

import pytest

from adapters.prompt import RecordingPrompt
from domain.models import FULL_TIME, PART_TIME, Employee
from domain.schedule import Schedule
from services.clinic_state import ClinicState

BRANCH_A = "บึงทับช้าง"
BRANCH_B = "บัวใหญ่"


@pytest.fixture()
def full_timer() -> Employee:
    return Employee(id="emp1", name="Somchai", position="แพทย์แผนไทย", branch=BRANCH_A, type=FULL_TIME)


@pytest.fixture()
def part_timer() -> Employee:
    return Employee(id="pte1", name="Malee", position="พนักงานนวด", branch="พาร์ทไทม์", type=PART_TIME)


@pytest.fixture()
def schedule() -> Schedule:
    return Schedule()


@pytest.fixture()
def prompt() -> RecordingPrompt:
    return RecordingPrompt()


@pytest.fixture()
def state(prompt: RecordingPrompt) -> ClinicState:
    # June 2025: the 1st is a Sunday
    return ClinicState(prompt=prompt, today=date(2025, 6, 10), autosave=False)
