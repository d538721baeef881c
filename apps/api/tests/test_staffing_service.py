from app.services import staffing_service as staffing
from app.services.staffing_service import StaffingState

T0 = "2024-01-01T09:00:00.000Z"
T1 = "2024-02-01T09:00:00.000Z"
T2 = "2024-03-01T09:00:00.000Z"


def _project(*employee_ids, manager=1):
    project = {"id": 1, "manager": manager, "employees": []}
    staffing.reconcile_roster(project, [{"employeeId": e} for e in employee_ids], now=T0)
    return project


def test_new_members_get_one_open_period():
    project = _project(1, 2)
    assert project["employees"] == [
        {"employeeId": 1, "periods": [{"joining_time": T0, "leaving_time": None}]},
        {"employeeId": 2, "periods": [{"joining_time": T0, "leaving_time": None}]},
    ]


def test_dropping_member_closes_period_but_keeps_entry():
    project = _project(1, 2)
    staffing.reconcile_roster(project, [{"employeeId": 1}], now=T1)

    entry = staffing.find_entry(project, 2)
    assert entry is not None
    assert entry["periods"] == [{"joining_time": T0, "leaving_time": T1}]
    assert staffing.entry_state(entry) is StaffingState.ended
    assert len(project["employees"]) == 2


def test_closing_twice_does_not_touch_closed_period():
    project = _project(1, 2)
    staffing.reconcile_roster(project, [1], now=T1)
    staffing.reconcile_roster(project, [1], now=T2)
    assert staffing.find_entry(project, 2)["periods"] == [{"joining_time": T0, "leaving_time": T1}]


def test_rejoin_appends_exactly_one_new_period():
    project = _project(1, 2)
    staffing.reconcile_roster(project, [1], now=T1)
    before = len(staffing.find_entry(project, 2)["periods"])

    staffing.reconcile_roster(project, [1, 2], now=T2)

    periods = staffing.find_entry(project, 2)["periods"]
    assert len(periods) == before + 1
    assert periods[0] == {"joining_time": T0, "leaving_time": T1}
    assert periods[-1] == {"joining_time": T2, "leaving_time": None}


def test_open_member_is_left_untouched():
    project = _project(1)
    staffing.reconcile_roster(project, [{"employeeId": 1, "periods": []}], now=T1)
    assert staffing.find_entry(project, 1)["periods"] == [{"joining_time": T0, "leaving_time": None}]


def test_caller_supplied_periods_are_ignored_and_duplicates_collapse():
    project = {"id": 1, "manager": 1, "employees": []}
    fake = [{"joining_time": "1999-01-01T00:00:00.000Z", "leaving_time": None}]
    staffing.reconcile_roster(project, [{"employeeId": 3, "periods": fake}, {"employeeId": 3}, "3"], now=T0)
    assert project["employees"] == [{"employeeId": 3, "periods": [{"joining_time": T0, "leaving_time": None}]}]


def test_at_most_one_open_period_after_many_reconciles():
    project = _project(1, 2)
    for i, desired in enumerate([[1], [1, 2], [1, 2], [2], [1, 2], [2]]):
        staffing.reconcile_roster(project, desired, now=f"2024-04-0{i + 1}T00:00:00.000Z")
        for entry in project["employees"]:
            open_count = sum(1 for p in entry["periods"] if p["leaving_time"] is None)
            assert open_count <= 1


def test_remove_employee_is_a_hard_removal():
    project = _project(1, 2)
    assert staffing.remove_employee(project, 2) is True
    assert [e["employeeId"] for e in project["employees"]] == [1]
    assert staffing.remove_employee(project, 42) is False


def test_current_roster_attaches_employee_and_drops_dangling():
    project = _project(1, 2)
    staffing.reconcile_roster(project, [1], now=T1)
    employees = {2: {"id": 2, "name": "Bob"}}

    roster = staffing.current_roster(project, employees)

    assert roster == [{"id": 2, "name": "Bob", "periods": [{"joining_time": T0, "leaving_time": T1}]}]


def test_integrity_predicates():
    project = _project(1, manager=5)
    assert staffing.is_required_manager(project, 5)
    assert not staffing.is_required_manager(project, 1)
    assert staffing.is_sole_employee(project, 1)
    assert staffing.is_active_member(project, 1)

    staffing.reconcile_roster(project, [2], now=T1)
    assert not staffing.is_sole_employee(project, 1)
    assert not staffing.is_active_member(project, 1)
    assert staffing.is_active_member(project, 2)


def test_rejoin_is_noop_when_an_earlier_period_is_still_open():
    entry = {"employeeId": 1, "periods": [
        {"joining_time": T0, "leaving_time": None},
        {"joining_time": T1, "leaving_time": T2},
    ]}
    project = {"id": 1, "manager": 1, "employees": [entry]}

    staffing.reconcile_roster(project, [1], now=T2)

    assert len(entry["periods"]) == 2
    assert staffing.entry_state(entry) is StaffingState.active
