"""Employee roster with id assignment and required-field checks."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Mapping, Optional

from config import CONFIG

from .errors import EmployeeValidationError, UnknownEmployeeError
from .models import EMPLOYEE_TYPES, FULL_TIME, PART_TIME, Employee


@dataclass
class EmployeeDraft:
    name: str = ""
    position: str = ""
    branch: str = ""
    type: str = FULL_TIME

    @classmethod
    def from_mapping(cls, payload: Mapping[str, object]) -> "EmployeeDraft":
        return cls(
            name=str(payload.get("name") or ""),
            position=str(payload.get("position") or ""),
            branch=str(payload.get("branch") or ""),
            type=str(payload.get("type") or FULL_TIME),
        )


class Roster:
    """Ordered list of employees. New employees are appended."""

    def __init__(
        self,
        employees: Iterable[Employee] | None = None,
        *,
        pool_branch: str | None = None,
        id_prefixes: Mapping[str, str] | None = None,
        prompts: Mapping[str, str] | None = None,
    ) -> None:
        self._employees: List[Employee] = list(employees or [])
        self.pool_branch = pool_branch or CONFIG["pool_branch"]
        self.id_prefixes = dict(id_prefixes or CONFIG["id_prefixes"])
        self.prompts = prompts or CONFIG["prompts"]

    def __iter__(self) -> Iterator[Employee]:
        return iter(self._employees)

    def __len__(self) -> int:
        return len(self._employees)

    def __contains__(self, employee_id: object) -> bool:
        return self.find(str(employee_id)) is not None

    @property
    def employees(self) -> List[Employee]:
        return list(self._employees)

    def find(self, employee_id: str) -> Optional[Employee]:
        return next((emp for emp in self._employees if emp.id == employee_id), None)

    def get(self, employee_id: str) -> Employee:
        employee = self.find(employee_id)
        if employee is None:
            raise UnknownEmployeeError(employee_id)
        return employee

    def count_of_type(self, employee_type: str) -> int:
        return sum(1 for emp in self._employees if emp.type == employee_type)

    def next_id(self, employee_type: str) -> str:
        prefix = self.id_prefixes[employee_type]
        ordinal = self.count_of_type(employee_type) + 1
        # count + 1 collides once someone of this type was deleted
        while self.find(f"{prefix}{ordinal}") is not None:
            ordinal += 1
        return f"{prefix}{ordinal}"

    def add(self, draft: EmployeeDraft) -> Employee:
        self._validate(draft)
        employee = Employee(
            id=self.next_id(draft.type),
            name=draft.name.strip(),
            position=draft.position.strip(),
            branch=self._branch_for(draft.type, draft.branch),
            type=draft.type,
        )
        self._employees.append(employee)
        return employee

    def edit(self, employee_id: str, patch: EmployeeDraft) -> Employee:
        employee = self.get(employee_id)
        self._validate(patch)
        employee.name = patch.name.strip()
        employee.position = patch.position.strip()
        employee.type = patch.type
        employee.branch = self._branch_for(patch.type, patch.branch)
        return employee

    def delete(self, employee_id: str) -> Employee:
        employee = self.get(employee_id)
        self._employees = [emp for emp in self._employees if emp.id != employee_id]
        return employee

    # -- helpers ---------------------------------------------------------------
    def _branch_for(self, employee_type: str, branch: str) -> str:
        if employee_type == PART_TIME:
            return self.pool_branch
        return branch.strip()

    def _validate(self, draft: EmployeeDraft) -> None:
        if draft.type not in EMPLOYEE_TYPES:
            raise ValueError(f"Unknown employee type: {draft.type!r}")
        missing = not draft.name.strip() or not draft.position.strip()
        if draft.type == FULL_TIME and not draft.branch.strip():
            missing = True
        if missing:
            raise EmployeeValidationError(self.prompts["missing_fields_title"], self.prompts["missing_fields_message"])
