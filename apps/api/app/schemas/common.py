# apps/api/app/schemas/common.py
from typing import Any, Iterable, Literal

from pydantic import BaseModel


def reject_nulls(model: BaseModel, nullable: Iterable[str] = ()) -> BaseModel:
    """Explicit null is only accepted for fields that may be cleared."""
    allowed = set(nullable)
    nulled = sorted(f for f in model.model_fields_set if f not in allowed and getattr(model, f) is None)
    if nulled:
        raise ValueError(f"null is not allowed for: {', '.join(nulled)}")
    return model


class PaginationOut(BaseModel):
    total: int
    page: int
    limit: int


class SortOut(BaseModel):
    field: str
    order: Literal["asc", "desc"]


class PageOut(BaseModel):
    pagination: PaginationOut
    sort: SortOut
    data: list[dict[str, Any]]


class MessageOut(BaseModel):
    message: str
