# apps/api/app/services/presentation_service.py
"""Composite read views: project detail, employee detail, dashboard.

References between records are weak (plain ids). A reference that no longer
resolves is dropped from the view through ``resolve_or_omit`` instead of
failing the request.
"""
from __future__ import annotations

import copy
from typing import Any

from app.core.errors import NotFoundError
from app.db.document_store import DocumentSession, DocumentStore
from app.services import staffing_service as staffing
from app.services.listing import ListParams, apply_list_params

PROJECT_MANAGER_ROLE = "Project Manager"
DEFAULT_MEMBER_ROLE = "Member"

# proje kartında taşınan özet alanlar
PROJECT_SUMMARY_FIELDS = ("id", "name", "status", "start_date", "end_date", "manager")


def resolve_or_omit(index: dict[Any, dict], ref: Any) -> dict | None:
    """Tolerance policy for dangling references: unresolved -> None, never an error."""
    if ref is None:
        return None
    rec = index.get(ref)
    return dict(rec) if rec is not None else None


def _employees_by_id(db: DocumentSession) -> dict[Any, dict]:
    return {e.get("id"): e for e in db.collection("employees")}


def position_label(db: DocumentSession, position: Any) -> str:
    if position in (None, ""):
        return DEFAULT_MEMBER_ROLE
    found = db.find("positions", lambda p: str(p.get("id")) == str(position))
    if found and found.get("name"):
        return found["name"]
    return str(position)


# ---------------- projects ----------------

def project_view(project: dict, employees_by_id: dict[Any, dict]) -> dict[str, Any]:
    return {
        **project,
        "manager": resolve_or_omit(employees_by_id, project.get("manager")),
        "employees": staffing.current_roster(project, employees_by_id),
    }


def get_project_detail(store: DocumentStore, project_id: int) -> dict[str, Any]:
    with store.read() as db:
        project = db.get("projects", project_id)
        if project is None:
            raise NotFoundError("project does not exist", tag="project_not_found")
        return copy.deepcopy(project_view(project, _employees_by_id(db)))


def list_projects(store: DocumentStore, params: ListParams) -> dict[str, Any]:
    with store.read() as db:
        page = apply_list_params([dict(p) for p in db.collection("projects")], params)
        index = _employees_by_id(db)
        page["data"] = [project_view(p, index) for p in page["data"]]
        return copy.deepcopy(page)


# ---------------- employees ----------------

def participations(db: DocumentSession, employee: dict) -> list[dict[str, Any]]:
    """Projects the employee is (or was) staffed on, unioned with projects it manages."""
    employee_id = employee.get("id")
    member_role = position_label(db, employee.get("position"))
    by_project: dict[Any, dict] = {}

    for project in db.collection("projects"):
        entry = staffing.find_entry(project, employee_id)
        if entry is None:
            continue
        item = {k: project.get(k) for k in PROJECT_SUMMARY_FIELDS}
        item["periods"] = entry.get("periods") or []
        item["roles"] = [member_role]
        by_project[project.get("id")] = item

    for project in db.filter("projects", manager=employee_id):
        item = by_project.get(project.get("id"))
        if item is None:
            item = {k: project.get(k) for k in PROJECT_SUMMARY_FIELDS}
            item["periods"] = []
            item["roles"] = []
            by_project[project.get("id")] = item
        if PROJECT_MANAGER_ROLE not in item["roles"]:
            item["roles"].append(PROJECT_MANAGER_ROLE)

    return list(by_project.values())


def _get_employee(db: DocumentSession, employee_id: int) -> dict:
    employee = db.get("employees", employee_id)
    if employee is None:
        raise NotFoundError("employee does not exist", tag="employee_not_found")
    return employee


def get_employee_detail(store: DocumentStore, employee_id: int) -> dict[str, Any]:
    with store.read() as db:
        employee = _get_employee(db, employee_id)
        return copy.deepcopy({
            **employee,
            "manager": resolve_or_omit(_employees_by_id(db), employee.get("manager")),
            "projects": participations(db, employee),
        })


def get_employee_projects(store: DocumentStore, employee_id: int) -> list[dict[str, Any]]:
    with store.read() as db:
        return copy.deepcopy(participations(db, _get_employee(db, employee_id)))


# ---------------- dashboard ----------------

def skill_counts(employees: list[dict]) -> list[dict[str, Any]]:
    counts: dict[str, int] = {}
    for emp in employees:
        for skill in emp.get("skills") or []:
            name = skill.get("name") if isinstance(skill, dict) else skill
            if not name:
                continue
            counts[name] = counts.get(name, 0) + 1
    return [{"name": name, "count": count} for name, count in counts.items()]


def dashboard(store: DocumentStore) -> dict[str, Any]:
    with store.read() as db:
        return {
            "employeeCount": db.size("employees"),
            "projectCount": db.size("projects"),
            "positionCount": db.size("positions"),
            "skills": skill_counts(db.collection("employees")),
        }
