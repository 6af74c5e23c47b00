"""Application state: roster, schedule store and view selections in one place."""
from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from adapters.codec import decode_document, encode_document
from adapters.document_store import DocumentStore, DocumentStoreError
from adapters.prompt import Prompt, PromptRequest, RecordingPrompt
from config import CONFIG
from domain import dates
from domain.errors import ClinicRosterError, EmployeeValidationError, ShiftRejected
from domain.models import Employee
from domain.roster import EmployeeDraft, Roster
from domain.schedule import Schedule
from rules.assignment import resolve_shift
from services import projection

logger = logging.getLogger(__name__)


class ClinicState:
    """Owns every piece of mutable session state.

    Rejections never raise: they are shown through the prompt and the call
    returns a falsy value. Each operation takes an optional ``prompt`` that
    overrides the default one for that call only. With ``autosave`` on, the
    whole state is written to the store after each roster, schedule or day-off
    change.

    One instance is shared by every request; callers hold ``lock`` around a
    mutation and whatever they read back from it.
    """

    def __init__(
        self,
        *,
        store: Optional[DocumentStore] = None,
        prompt: Optional[Prompt] = None,
        config: Optional[Mapping[str, Any]] = None,
        today: Optional[date] = None,
        autosave: bool = True,
    ) -> None:
        self.config = config or CONFIG
        self.branches: List[str] = list(self.config["branches"])
        self.roster = Roster(
            pool_branch=self.config["pool_branch"],
            id_prefixes=self.config["id_prefixes"],
            prompts=self.config["prompts"],
        )
        self.schedule = Schedule()
        today = today or date.today()
        self.year, self.month = today.year, today.month
        self.branch = self.branches[0]
        self.clinic_day_off: str = self.config["clinic_day_off"]
        self.prompt: Prompt = prompt or RecordingPrompt()
        self.store = store
        self.autosave = autosave
        self.load_error: Optional[Exception] = None
        self.lock = threading.RLock()

    # -- persistence ---------------------------------------------------------------
    def load(self) -> bool:
        """Replace roster and schedule with the latest stored document."""

        if self.store is None:
            return False
        try:
            document = self.store.load_latest()
        except DocumentStoreError as exc:
            logger.exception("Loading the schedule document failed; starting empty")
            self.load_error = exc
            return False
        if document is None:
            logger.info("No stored schedule document; starting empty")
            return False

        try:
            decoded = decode_document(document, pool_branch=self.roster.pool_branch)
        except (TypeError, ValueError) as exc:
            logger.exception("Stored schedule document is unreadable; starting empty")
            self.load_error = exc
            return False
        self.roster = Roster(
            decoded.employees,
            pool_branch=self.roster.pool_branch,
            id_prefixes=self.roster.id_prefixes,
            prompts=self.roster.prompts,
        )
        self.schedule = decoded.schedule
        if decoded.clinic_day_off in self.day_off_choices:
            self.clinic_day_off = decoded.clinic_day_off
        if decoded.branch in self.branches:
            self.branch = decoded.branch
        self.load_error = None
        logger.info("Loaded %d employees and %d scheduled dates", len(self.roster), len(self.schedule))
        return True

    def snapshot(self) -> Dict[str, Any]:
        return encode_document(
            self.roster.employees,
            self.schedule,
            month=dates.month_key(self.year, self.month),
            clinic_day_off=self.clinic_day_off,
            branch=self.branch,
            branches=self.branches,
        )

    def save(self) -> None:
        if self.store is None:
            return
        self.store.save(self.snapshot())

    def _changed(self) -> None:
        if self.autosave:
            self.save()

    # -- prompt plumbing -----------------------------------------------------------
    def _prompt_for(self, prompt: Optional[Prompt]) -> Prompt:
        return prompt if prompt is not None else self.prompt

    def _notify(self, error: ClinicRosterError, prompt: Optional[Prompt] = None) -> None:
        logger.info("Rejected: %s", error.message)
        self._prompt_for(prompt).show(PromptRequest(title=error.title, message=error.message))

    # -- selections ----------------------------------------------------------------
    @property
    def day_off_choices(self) -> List[str]:
        return list(dates.WEEKDAYS) + [dates.NO_DAY_OFF]

    @property
    def month_key(self) -> str:
        return dates.month_key(self.year, self.month)

    def change_month(self, delta: int) -> str:
        self.year, self.month = dates.shift_month(self.year, self.month, delta)
        return self.month_key

    def select_month(self, year: int, month: int) -> str:
        if not 1 <= month <= 12:
            raise ValueError(f"Month out of range: {month}")
        self.year, self.month = year, month
        return self.month_key

    def select_branch(self, branch: str) -> None:
        if branch not in self.branches:
            raise ValueError(f"Unknown branch: {branch!r}")
        self.branch = branch

    def set_clinic_day_off(self, day_off: str) -> None:
        if day_off not in self.day_off_choices:
            raise ValueError(f"Unknown weekday: {day_off!r}")
        self.clinic_day_off = day_off
        logger.info("Clinic day off set to %s", day_off)
        self._changed()

    def date_key(self, day: int | str) -> str:
        if isinstance(day, int):
            if day not in dates.days_in_month(self.year, self.month):
                raise ValueError(f"Day {day} is outside {self.month_key}")
            return dates.date_key(self.year, self.month, day)
        return dates.parse_date_key(day).isoformat()

    # -- schedule ------------------------------------------------------------------
    def set_shift(
        self,
        employee_id: str,
        day: int | str,
        value: str | None,
        *,
        branch: str | None = None,
        prompt: Optional[Prompt] = None,
    ) -> bool:
        employee = self.roster.get(employee_id)
        key = self.date_key(day)
        viewed = branch or self.branch
        try:
            entry = resolve_shift(
                employee,
                key,
                value,
                viewed,
                self.schedule,
                self.clinic_day_off,
                prompts=self.config["prompts"],
                weekday_labels=self.config["weekday_labels"],
            )
        except ShiftRejected as exc:
            self._notify(exc, prompt)
            return False
        self.schedule.set_entry(employee.id, key, entry)
        logger.debug("Set %s on %s to %r (viewing %s)", employee.id, key, entry, viewed)
        self._changed()
        return True

    def get_effective_shift(self, employee_id: str, day: int | str, *, branch: str | None = None) -> str:
        employee = self.roster.get(employee_id)
        return self.schedule.get_effective_shift(employee, self.date_key(day), branch or self.branch, self.clinic_day_off)

    # -- roster --------------------------------------------------------------------
    def add_employee(self, draft: EmployeeDraft, *, prompt: Optional[Prompt] = None) -> Optional[Employee]:
        try:
            employee = self.roster.add(draft)
        except EmployeeValidationError as exc:
            self._notify(exc, prompt)
            return None
        logger.info("Added employee %s (%s)", employee.id, employee.type)
        self._changed()
        return employee

    def edit_employee(
        self, employee_id: str, patch: EmployeeDraft, *, prompt: Optional[Prompt] = None
    ) -> Optional[Employee]:
        try:
            employee = self.roster.edit(employee_id, patch)
        except EmployeeValidationError as exc:
            self._notify(exc, prompt)
            return None
        logger.info("Edited employee %s", employee.id)
        self._changed()
        return employee

    def delete_employee(self, employee_id: str, *, prompt: Optional[Prompt] = None) -> bool:
        """Ask for confirmation, then drop the employee and all their cells."""

        self.roster.get(employee_id)
        outcome = {"deleted": False}

        def confirm() -> None:
            self.roster.delete(employee_id)
            removed = self.schedule.remove_employee(employee_id)
            outcome["deleted"] = True
            logger.info("Deleted employee %s with %d schedule entries", employee_id, removed)
            self._changed()

        prompts = self.config["prompts"]
        self._prompt_for(prompt).show(
            PromptRequest(
                title=prompts["delete_title"],
                message=prompts["delete_message"],
                on_confirm=confirm,
                on_cancel=lambda: None,
                show_cancel=True,
            )
        )
        return outcome["deleted"]

    # -- views ---------------------------------------------------------------------
    def visible_employees(self, branch: str | None = None) -> List[Employee]:
        return projection.visible_roster(self.roster, branch or self.branch)

    def headcount(self, day: int | str, *, branch: str | None = None) -> int:
        return projection.daily_headcount(
            self.roster, self.schedule, self.date_key(day), branch or self.branch, self.clinic_day_off
        )

    def grid(self, branch: str | None = None) -> projection.MonthGrid:
        return projection.month_grid(
            self.roster,
            self.schedule,
            self.year,
            self.month,
            branch or self.branch,
            self.clinic_day_off,
            labels=self.config["shift_labels"],
            band=self.config["staffing"],
        )
