from domain import shift_types
from domain.models import Shift, WorkingAssignment
from domain.schedule import Schedule

BRANCH_A = "บึงทับช้าง"
BRANCH_B = "บัวใหญ่"


def test_effective_shift_full_time_defaults_to_empty(schedule, full_timer):
    assert schedule.get_effective_shift(full_timer, "2025-06-02", BRANCH_A, "sunday") == shift_types.EMPTY
    schedule.set_entry(full_timer.id, "2025-06-02", Shift("leave"))
    assert schedule.get_effective_shift(full_timer, "2025-06-02", BRANCH_A, "sunday") == "leave"


def test_effective_shift_is_clinic_closed_on_day_off(schedule, full_timer, part_timer):
    # 2025-06-01 is a Sunday
    schedule.set_entry(full_timer.id, "2025-06-01", Shift("morning"))
    schedule.set_entry(part_timer.id, "2025-06-01", WorkingAssignment("morning", BRANCH_A))
    for branch in (BRANCH_A, BRANCH_B):
        assert schedule.get_effective_shift(full_timer, "2025-06-01", branch, "sunday") == shift_types.CLINIC_CLOSED
        assert schedule.get_effective_shift(part_timer, "2025-06-01", branch, "sunday") == shift_types.CLINIC_CLOSED
    assert schedule.get_effective_shift(full_timer, "2025-06-01", BRANCH_A, "none") == "morning"


def test_part_time_working_assignment_only_shows_in_its_branch(schedule, part_timer):
    schedule.set_entry(part_timer.id, "2025-06-02", WorkingAssignment("afternoon", BRANCH_A))
    assert schedule.get_effective_shift(part_timer, "2025-06-02", BRANCH_A, "sunday") == "afternoon"
    assert schedule.get_effective_shift(part_timer, "2025-06-02", BRANCH_B, "sunday") == shift_types.EMPTY


def test_part_time_bare_tag_is_branch_agnostic(schedule, part_timer):
    schedule.set_entry(part_timer.id, "2025-06-02", Shift("sick"))
    assert schedule.get_effective_shift(part_timer, "2025-06-02", BRANCH_A, "sunday") == "sick"
    assert schedule.get_effective_shift(part_timer, "2025-06-02", BRANCH_B, "sunday") == "sick"


def test_remove_employee_cascades_and_prunes_dates():
    schedule = Schedule()
    schedule.set_entry("emp1", "2025-06-02", Shift("morning"))
    schedule.set_entry("emp1", "2025-06-03", Shift("leave"))
    schedule.set_entry("emp2", "2025-06-03", Shift("afternoon"))

    assert schedule.remove_employee("emp1") == 2
    assert list(schedule) == ["2025-06-03"]
    assert schedule["2025-06-03"] == {"emp2": Shift("afternoon")}
    assert schedule.entries_for("emp1") == {}


def test_dates_in_month_and_copy_are_independent():
    schedule = Schedule()
    schedule.set_entry("emp1", "2025-06-30", Shift("morning"))
    schedule.set_entry("emp1", "2025-07-01", Shift("morning"))
    assert schedule.dates_in_month(2025, 6) == ["2025-06-30"]

    clone = schedule.copy()
    clone.remove_employee("emp1")
    assert len(clone) == 0
    assert len(schedule) == 2


def test_full_time_ignores_leftover_working_assignment(schedule, full_timer):
    schedule.set_entry(full_timer.id, "2025-06-02", WorkingAssignment("morning", BRANCH_B))
    assert schedule.get_effective_shift(full_timer, "2025-06-02", BRANCH_A, "sunday") == shift_types.EMPTY
    assert schedule.get_effective_shift(full_timer, "2025-06-02", BRANCH_B, "sunday") == shift_types.EMPTY
