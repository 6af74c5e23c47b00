"""Canonical shift tag helpers."""
from __future__ import annotations

from typing import Any, Dict, FrozenSet, Mapping, Optional

__all__ = [
    "MORNING",
    "AFTERNOON",
    "DAY_OFF",
    "LEAVE",
    "SICK",
    "CLINIC_CLOSED",
    "EMPTY",
    "WORKING_TAGS",
    "ALL_TAGS",
    "UnknownShiftTagError",
    "normalize_tag",
    "is_working_tag",
    "is_working_assignment",
]


MORNING = "morning"
AFTERNOON = "afternoon"
DAY_OFF = "day-off"
LEAVE = "leave"
SICK = "sick"
CLINIC_CLOSED = "clinic-closed"
EMPTY = ""

WORKING_TAGS: FrozenSet[str] = frozenset({MORNING, AFTERNOON})
ALL_TAGS: FrozenSet[str] = frozenset({MORNING, AFTERNOON, DAY_OFF, LEAVE, SICK, CLINIC_CLOSED, EMPTY})

# Labels written by the first version of the clinic app
_LEGACY_LABELS: Dict[str, str] = {
    "เช้า": MORNING,
    "บ่าย": AFTERNOON,
    "หยุด": DAY_OFF,
    "ลา": LEAVE,
    "ป่วย": SICK,
    "ปิด": CLINIC_CLOSED,
}


class UnknownShiftTagError(ValueError):
    """Raised when a value cannot be mapped to a shift tag."""


def normalize_tag(value: Optional[str]) -> str:
    """Return the canonical tag for *value*.

    ``None`` counts as the empty tag. Legacy Thai labels are accepted so that
    documents saved by the first version of the app still decode.
    """

    if value is None:
        return EMPTY
    text = str(value).strip()
    if text in ALL_TAGS:
        return text
    if text in _LEGACY_LABELS:
        return _LEGACY_LABELS[text]
    raise UnknownShiftTagError(f"Unknown shift value: {value!r}")


def is_working_tag(tag: Optional[str]) -> bool:
    return tag in WORKING_TAGS


def is_working_assignment(raw: Any) -> bool:
    """Structural check for raw (decoded JSON) entries.

    A working assignment is a mapping carrying a working state and a branch.
    Missing values and plain strings are bare tags.
    """

    if not isinstance(raw, Mapping):
        return False
    if "branch" not in raw:
        return False
    state = raw.get("type", raw.get("state"))
    try:
        return is_working_tag(normalize_tag(state))
    except UnknownShiftTagError:
        return False


def label_for(tag: str, labels: Mapping[str, str]) -> str:
    return labels.get(tag, tag)
