# apps/api/app/schemas/project.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from app.schemas.common import reject_nulls


class StaffingMemberIn(BaseModel):
    employeeId: int
    # istemcinin gönderdiği periods yok sayılır; geçmişi sunucu tutar
    periods: list[dict[str, Any]] | None = None


def _members(v):
    if isinstance(v, list):
        return [{"employeeId": x} if isinstance(x, (int, str)) else x for x in v]
    return v


class ProjectCreateIn(BaseModel):
    name: str
    manager: int
    status: str = "active"
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    customer: str = ""
    technical: str = ""
    employees: list[StaffingMemberIn] = []

    @field_validator("employees", mode="before")
    @classmethod
    def normalize_members(cls, v):
        return _members(v)


class ProjectUpdateIn(BaseModel):
    name: str | None = None
    manager: int | None = None
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    description: str | None = None
    customer: str | None = None
    technical: str | None = None
    employees: list[StaffingMemberIn] | None = None

    @field_validator("employees", mode="before")
    @classmethod
    def normalize_members(cls, v):
        return _members(v)

    # manager=null servis katmanında manager_required ile reddedilir
    @model_validator(mode="after")
    def no_null_overwrites(self):
        return reject_nulls(self, ("manager",))
