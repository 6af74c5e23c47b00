"""Exceptions raised by the roster domain."""
from __future__ import annotations


class ClinicRosterError(Exception):
    """Base class for policy rejections.

    ``title`` and ``message`` are meant for the prompt shown to the user.
    """

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title
        self.message = message


class EmployeeValidationError(ClinicRosterError):
    """Raised when an employee draft misses a required field."""


class ShiftRejected(ClinicRosterError):
    """Raised when a cell edit breaks an assignment rule."""


class UnknownEmployeeError(LookupError):
    """Raised for ids that are not in the roster."""
