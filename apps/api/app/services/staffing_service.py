# apps/api/app/services/staffing_service.py
"""Project roster period tracking.

A roster is the ordered list of staffing entries of a project::

    {"employeeId": 7, "periods": [{"joining_time": "...", "leaving_time": None}]}

History is append-only: leaving a project closes the open period, coming
back appends a new one. An entry never holds more than one open period.
Entries are only removed outright when the employee record itself is
deleted.
"""
from __future__ import annotations

import enum
from typing import Any, Iterable

from app.core.time import utcnow_iso

Entry = dict[str, Any]
Project = dict[str, Any]


class StaffingState(str, enum.Enum):
    active = "active"
    ended = "ended"


def open_period(entry: Entry) -> dict | None:
    for period in reversed(entry.get("periods") or []):
        if period.get("leaving_time") is None:
            return period
    return None


def entry_state(entry: Entry) -> StaffingState:
    return StaffingState.active if open_period(entry) else StaffingState.ended


def new_entry(employee_id: int, now: str) -> Entry:
    return {"employeeId": employee_id, "periods": [{"joining_time": now, "leaving_time": None}]}


def close_entry(entry: Entry, now: str) -> bool:
    """active -> ended. Returns False when there was nothing open."""
    period = open_period(entry)
    if period is None:
        return False
    period["leaving_time"] = now
    return True


def reopen_entry(entry: Entry, now: str) -> bool:
    """ended -> active by appending a fresh period; no-op while still open."""
    if open_period(entry) is not None:
        return False
    entry.setdefault("periods", []).append({"joining_time": now, "leaving_time": None})
    return True


def desired_employee_ids(desired: Iterable[Any]) -> list[int]:
    """
    Accepts ``[{"employeeId": 1, "periods": [...]}, ...]`` or plain ids.
    Caller-supplied periods are ignored; duplicates collapse, order kept.
    """
    out: list[int] = []
    for item in desired or []:
        emp_id = item.get("employeeId") if isinstance(item, dict) else getattr(item, "employeeId", item)
        emp_id = int(emp_id)
        if emp_id not in out:
            out.append(emp_id)
    return out


def reconcile_roster(project: Project, desired: Iterable[Any], now: str | None = None) -> list[Entry]:
    """Diff the desired members against the roster and apply period transitions in place."""
    now = now or utcnow_iso()
    roster: list[Entry] = project.setdefault("employees", [])
    wanted = desired_employee_ids(desired)
    wanted_set = set(wanted)

    by_employee: dict[int, Entry] = {}
    for entry in roster:
        by_employee.setdefault(entry.get("employeeId"), entry)

    for entry in roster:
        if entry.get("employeeId") not in wanted_set:
            close_entry(entry, now)

    for emp_id in wanted:
        entry = by_employee.get(emp_id)
        if entry is None:
            entry = new_entry(emp_id, now)
            roster.append(entry)
            by_employee[emp_id] = entry
        else:
            reopen_entry(entry, now)
    return roster


def remove_employee(project: Project, employee_id: int) -> bool:
    """Hard removal (employee deletion cascade); returns True if anything was dropped."""
    roster = project.get("employees") or []
    kept = [e for e in roster if e.get("employeeId") != employee_id]
    project["employees"] = kept
    return len(kept) != len(roster)


def find_entry(project: Project, employee_id: int) -> Entry | None:
    for entry in project.get("employees") or []:
        if entry.get("employeeId") == employee_id:
            return entry
    return None


def current_roster(project: Project, employees_by_id: dict[int, dict]) -> list[dict]:
    """Roster entries whose employee still resolves, with employee fields attached."""
    out = []
    for entry in project.get("employees") or []:
        emp = employees_by_id.get(entry.get("employeeId"))
        if emp is None:
            continue
        out.append({**emp, "periods": entry.get("periods") or []})
    return out


# ---- integrity predicates (employee update/delete guards) ----

def is_required_manager(project: Project, employee_id: int) -> bool:
    return project.get("manager") == employee_id


def is_sole_employee(project: Project, employee_id: int) -> bool:
    roster = project.get("employees") or []
    return len(roster) == 1 and roster[0].get("employeeId") == employee_id


def is_active_member(project: Project, employee_id: int) -> bool:
    entry = find_entry(project, employee_id)
    return entry is not None and entry_state(entry) is StaffingState.active
