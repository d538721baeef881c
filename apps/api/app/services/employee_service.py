# apps/api/app/services/employee_service.py
"""Employee directory: uniqueness, manager references and delete cascades.

Guards run against the locked document before anything is written, so a
rejected call leaves the store as it was. Routes call ``precheck_create`` /
``precheck_update`` first (to fail fast before an avatar upload), then the
mutating functions, which run the same guards again under the write lock.
"""
from __future__ import annotations

import copy
from typing import Any

from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.core.time import utcnow_iso
from app.db.document_store import DocumentSession, DocumentStore
from app.services import staffing_service as staffing
from app.services.listing import ListParams, apply_list_params

logger = get_logger(__name__)

UNIQUE_FIELDS = (
    ("code", "code_exists"),
    ("email", "email_exists"),
    ("phone", "phone_exists"),
    ("identity", "identity_exists"),
)

SEARCH_FIELDS = ("name", "code", "email")


def _truthy(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(v)


# ---------------- guards ----------------

def check_unique(db: DocumentSession, fields: dict[str, Any], exclude_id: int | None = None) -> None:
    for field, reason in UNIQUE_FIELDS:
        value = fields.get(field)
        if value in (None, ""):
            continue
        clash = db.find(
            "employees",
            lambda e: e.get(field) == value and e.get("id") != exclude_id,
        )
        if clash:
            raise ConflictError(reason, f"{field} already exists")


def check_manager_ref(db: DocumentSession, manager: int | None, self_id: int | None = None) -> None:
    if manager is None:
        return
    if self_id is not None and manager == self_id:
        raise ConflictError("manager_invalid", "an employee cannot manage itself")
    if db.get("employees", manager) is None:
        raise ConflictError("manager_not_found", "manager does not exist")


def check_create(db: DocumentSession, fields: dict[str, Any]) -> None:
    check_unique(db, fields)
    check_manager_ref(db, fields.get("manager"))


def check_update(db: DocumentSession, employee_id: int, fields: dict[str, Any]) -> dict[str, Any]:
    employee = db.get("employees", employee_id)
    if employee is None:
        raise NotFoundError("employee does not exist", tag="employee_not_found")

    if fields.get("status") == "inactive":
        for project in db.collection("projects"):
            if staffing.is_required_manager(project, employee_id) or staffing.is_active_member(project, employee_id):
                raise ConflictError("employee_in_project", "employee is still staffed on a project")

    if "is_manager" in fields and not _truthy(fields["is_manager"]):
        if db.find("employees", lambda e: e.get("manager") == employee_id and e.get("id") != employee_id):
            raise ConflictError("employee_in_manager", "employee still manages other employees")

    check_unique(db, {**employee, **fields}, exclude_id=employee_id)
    if "manager" in fields:
        check_manager_ref(db, fields["manager"], self_id=employee_id)
    return employee


def precheck_create(store: DocumentStore, fields: dict[str, Any]) -> None:
    with store.read() as db:
        check_create(db, fields)


def precheck_update(store: DocumentStore, employee_id: int, fields: dict[str, Any]) -> None:
    with store.read() as db:
        check_update(db, employee_id, fields)


# ---------------- mutations ----------------

def create_employee(store: DocumentStore, fields: dict[str, Any], avatar_url: str = "") -> dict[str, Any]:
    with store.with_write_lock() as db:
        check_create(db, fields)
        now = utcnow_iso()
        record = db.insert("employees", {
            **fields,
            "avatar": avatar_url or "",
            "createdAt": now,
            "updatedAt": now,
        })
        logger.info("employees.created id=%s", record["id"])
        return copy.deepcopy(record)


def update_employee(
    store: DocumentStore,
    employee_id: int,
    fields: dict[str, Any],
    avatar_url: str | None = None,
) -> dict[str, Any]:
    with store.with_write_lock() as db:
        check_update(db, employee_id, fields)
        changes = dict(fields)
        if avatar_url is not None:
            changes["avatar"] = avatar_url
        changes["updatedAt"] = utcnow_iso()
        record = db.update("employees", employee_id, changes)
        logger.info("employees.updated id=%s fields=%s", employee_id, sorted(fields))
        return copy.deepcopy(record)


def delete_employee(store: DocumentStore, employee_id: int) -> None:
    with store.with_write_lock() as db:
        if db.get("employees", employee_id) is None:
            raise NotFoundError("employee does not exist", tag="employee_not_found")

        projects = db.collection("projects")
        for project in projects:
            if staffing.is_required_manager(project, employee_id):
                raise ConflictError("required_manager", f"employee manages project {project.get('id')}")
        for project in projects:
            if staffing.is_sole_employee(project, employee_id):
                raise ConflictError("required_employee", f"employee is the only member of project {project.get('id')}")

        now = utcnow_iso()
        for project in projects:
            if staffing.remove_employee(project, employee_id):
                project["updatedAt"] = now
                logger.info("projects.roster.removed project_id=%s employee_id=%s", project.get("id"), employee_id)

        # yönetici referansı zayıf: silinen kişiye bağlı olanlar boşa düşer
        for report in db.filter("employees", manager=employee_id):
            report["manager"] = None
            report["updatedAt"] = now

        db.delete("employees", employee_id)
        logger.info("employees.deleted id=%s", employee_id)


# ---------------- queries ----------------

def list_employees(store: DocumentStore, params: ListParams) -> dict[str, Any]:
    with store.read() as db:
        return apply_list_params(
            [dict(e) for e in db.collection("employees")],
            params,
            search_fields=SEARCH_FIELDS,
        )


def list_managers(store: DocumentStore) -> list[dict[str, Any]]:
    with store.read() as db:
        return [dict(e) for e in db.filter("employees", lambda e: _truthy(e.get("is_manager")))]


def list_positions(store: DocumentStore) -> list[dict[str, Any]]:
    with store.read() as db:
        return [dict(p) for p in db.collection("positions")]
