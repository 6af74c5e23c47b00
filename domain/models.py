"""Domain dataclasses for the clinic roster."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from . import shift_types

FULL_TIME = "full-time"
PART_TIME = "part-time"
EMPLOYEE_TYPES = (FULL_TIME, PART_TIME)


@dataclass
class Employee:
    id: str
    name: str
    position: str
    branch: str
    type: str = FULL_TIME

    @property
    def is_part_time(self) -> bool:
        return self.type == PART_TIME

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position,
            "branch": self.branch,
            "type": self.type,
        }


@dataclass(frozen=True)
class Shift:
    """A bare shift tag, visible the same way from every branch."""

    tag: str = shift_types.EMPTY

    @property
    def display_tag(self) -> str:
        return self.tag


@dataclass(frozen=True)
class WorkingAssignment:
    """A part-time working shift bound to one branch."""

    state: str
    branch: str

    def __post_init__(self) -> None:
        if not shift_types.is_working_tag(self.state):
            raise ValueError(f"Working assignment needs a working state, got {self.state!r}")

    @property
    def display_tag(self) -> str:
        return self.state


ShiftEntry = Union[Shift, WorkingAssignment]
