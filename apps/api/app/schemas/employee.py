# apps/api/app/schemas/employee.py
from __future__ import annotations

import json
from typing import Any, Literal

from pydantic import BaseModel, EmailStr, field_validator, model_validator

from app.schemas.common import reject_nulls

EmployeeStatus = Literal["active", "inactive"]

# PUT ile null gönderilerek temizlenebilen alanlar
CLEARABLE_FIELDS = ("email", "manager", "position")


class SkillIn(BaseModel):
    name: str


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and v.strip() in ("", "null", "undefined"):
        return None
    return v


class _EmployeeFields(BaseModel):
    # form-data ile gelen değerler string olur: "true", "3", '[{"name": "python"}]'
    @field_validator("email", "manager", mode="before", check_fields=False)
    @classmethod
    def blank_to_none(cls, v):
        return _blank_to_none(v)

    @field_validator("code", "phone", "identity", "position", mode="before", check_fields=False)
    @classmethod
    def coerce_text(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator("skills", mode="before", check_fields=False)
    @classmethod
    def parse_skills(cls, v):
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return []
            try:
                v = json.loads(v)
            except ValueError:
                v = [s.strip() for s in v.split(",") if s.strip()]
        if isinstance(v, list):
            return [{"name": s} if isinstance(s, str) else s for s in v]
        return v


class EmployeeCreateIn(_EmployeeFields):
    name: str
    code: str = ""
    email: EmailStr | None = None
    phone: str = ""
    identity: str = ""
    position: str | None = None
    manager: int | None = None
    is_manager: bool = False
    status: EmployeeStatus = "active"
    skills: list[SkillIn] = []
    address: str = ""
    gender: str = ""
    birthday: str = ""
    join_date: str = ""


class EmployeeUpdateIn(_EmployeeFields):
    """Whitelist of fields PUT /employees/{id} may change."""

    name: str | None = None
    code: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    identity: str | None = None
    position: str | None = None
    manager: int | None = None
    is_manager: bool | None = None
    status: EmployeeStatus | None = None
    skills: list[SkillIn] | None = None
    address: str | None = None
    gender: str | None = None
    birthday: str | None = None
    join_date: str | None = None

    @model_validator(mode="after")
    def no_null_overwrites(self):
        return reject_nulls(self, CLEARABLE_FIELDS)
