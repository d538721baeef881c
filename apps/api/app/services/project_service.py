# apps/api/app/services/project_service.py
from __future__ import annotations

import copy
from typing import Any

from app.core.errors import ConflictError, NotFoundError
from app.core.logging import get_logger
from app.core.time import utcnow_iso
from app.db.document_store import DocumentSession, DocumentStore
from app.services import staffing_service as staffing


logger = get_logger(__name__)


def _check_refs(db: DocumentSession, manager: int | None, members: list[int]) -> None:
    if manager is not None and db.get("employees", manager) is None:
        raise ConflictError("manager_not_found", "project manager does not exist")
    for emp_id in members:
        if db.get("employees", emp_id) is None:
            raise ConflictError("employee_not_found", f"employee {emp_id} does not exist")


def create_project(store: DocumentStore, fields: dict[str, Any]) -> dict[str, Any]:
    desired = fields.pop("employees", None) or []
    with store.with_write_lock() as db:
        _check_refs(db, fields.get("manager"), staffing.desired_employee_ids(desired))
        now = utcnow_iso()
        project = {**fields, "employees": [], "createdAt": now, "updatedAt": now}
        staffing.reconcile_roster(project, desired, now=now)
        record = db.insert("projects", project)
        logger.info("projects.created id=%s members=%s", record["id"], len(record["employees"]))
        return copy.deepcopy(record)


def update_project(store: DocumentStore, project_id: int, fields: dict[str, Any]) -> dict[str, Any]:
    desired = fields.pop("employees", None)
    with store.with_write_lock() as db:
        project = db.get("projects", project_id)
        if project is None:
            raise NotFoundError("project does not exist", tag="project_not_found")
        if "manager" in fields and fields["manager"] is None:
            raise ConflictError("manager_required", "a project must have a manager")
        members = staffing.desired_employee_ids(desired) if desired is not None else []
        _check_refs(db, fields.get("manager"), members)

        now = utcnow_iso()
        project.update(fields)
        if desired is not None:
            staffing.reconcile_roster(project, desired, now=now)
        project["updatedAt"] = now
        logger.info("projects.updated id=%s fields=%s roster=%s", project_id, sorted(fields), desired is not None)
        return copy.deepcopy(project)


def delete_project(store: DocumentStore, project_id: int) -> None:
    with store.with_write_lock() as db:
        if not db.delete("projects", project_id):
            raise NotFoundError("project does not exist", tag="project_not_found")
        logger.info("projects.deleted id=%s", project_id)
