"""Schedule store: date key -> employee id -> shift entry."""
from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, MutableMapping, Optional

from . import dates, shift_types
from .models import Employee, ShiftEntry, WorkingAssignment


class Schedule(MutableMapping[str, Dict[str, ShiftEntry]]):
    """A thin mapping wrapper over shift entries grouped by date key.

    Inner mappings are created on first write and dropped once empty.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, ShiftEntry]] | None = None) -> None:
        self._data: Dict[str, Dict[str, ShiftEntry]] = {}
        if entries:
            for key, cells in entries.items():
                for employee_id, entry in cells.items():
                    self.set_entry(employee_id, key, entry)

    # -- MutableMapping protocol -------------------------------------------------
    def __getitem__(self, key: str) -> Dict[str, ShiftEntry]:
        return self._data[key]

    def __setitem__(self, key: str, value: Dict[str, ShiftEntry]) -> None:
        if value:
            self._data[key] = dict(value)
        else:
            self._data.pop(key, None)

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._data.keys()))

    def __len__(self) -> int:
        return len(self._data)

    # -- Core helpers -------------------------------------------------------------
    def set_entry(self, employee_id: str, key: str, entry: ShiftEntry) -> None:
        self._data.setdefault(key, {})[employee_id] = entry

    def get_entry(self, employee_id: str, key: str) -> Optional[ShiftEntry]:
        return self._data.get(key, {}).get(employee_id)

    def get_effective_shift(
        self,
        employee: Employee,
        key: str,
        viewed_branch: str,
        clinic_day_off: str | None,
    ) -> str:
        """Return the bare tag shown in *viewed_branch*'s table."""

        if dates.is_clinic_closed(key, clinic_day_off):
            return shift_types.CLINIC_CLOSED

        entry = self.get_entry(employee.id, key)
        if entry is None:
            return shift_types.EMPTY
        if isinstance(entry, WorkingAssignment):
            if employee.is_part_time and entry.branch == viewed_branch:
                return entry.state
            return shift_types.EMPTY
        return entry.tag

    def working_assignment(self, employee_id: str, key: str) -> Optional[WorkingAssignment]:
        entry = self.get_entry(employee_id, key)
        return entry if isinstance(entry, WorkingAssignment) else None

    def entries_for(self, employee_id: str) -> Dict[str, ShiftEntry]:
        return {
            key: cells[employee_id]
            for key, cells in sorted(self._data.items())
            if employee_id in cells
        }

    def dates_in_month(self, year: int, month: int) -> List[str]:
        prefix = dates.month_key(year, month) + "-"
        return [key for key in self if key.startswith(prefix)]

    def as_dict(self) -> Dict[str, Dict[str, ShiftEntry]]:
        return {key: dict(cells) for key, cells in self._data.items()}

    # -- Mutation utilities -------------------------------------------------------
    def remove_employee(self, employee_id: str) -> int:
        """Drop every entry of *employee_id*; returns how many were removed."""

        removed = 0
        for key, cells in list(self._data.items()):
            if cells.pop(employee_id, None) is not None:
                removed += 1
            if not cells:
                self._data.pop(key, None)
        return removed

    def copy(self) -> "Schedule":
        return Schedule(self._data)
