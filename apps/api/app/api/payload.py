# apps/api/app/api/payload.py
# Yazma uçları JSON, urlencoded veya multipart (avatar dosyası ile) kabul eder.
from __future__ import annotations

from typing import Any, TypeVar

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

FORM_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
FILE_FIELD = "avatar"

M = TypeVar("M", bound=BaseModel)


async def read_payload(request: Request) -> tuple[dict[str, Any], UploadFile | None]:
    ctype = (request.headers.get("content-type") or "").lower()
    if ctype.startswith(FORM_TYPES):
        form = await request.form()
        data: dict[str, Any] = {}
        avatar = None
        for key in form.keys():
            values = form.getlist(key)
            if key == FILE_FIELD:
                files = [v for v in values if isinstance(v, UploadFile) and v.filename]
                avatar = files[0] if files else None
                continue
            data[key] = values[0] if len(values) == 1 else list(values)
        return data, avatar

    raw = await request.body()
    if not raw:
        return {}, None
    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError([{"type": "json_invalid", "loc": ("body",), "msg": "invalid JSON body", "input": None}])
    if not isinstance(body, dict):
        raise RequestValidationError([{"type": "dict_type", "loc": ("body",), "msg": "body must be an object", "input": None}])
    return body, None


def validate_payload(model: type[M], data: dict[str, Any]) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        raise RequestValidationError([{**err, "loc": ("body", *err["loc"])} for err in errors]) from e
