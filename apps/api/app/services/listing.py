# apps/api/app/services/listing.py
# Liste uçlarının ortak filtre / arama / sıralama / sayfalama mantığı
# (?name=&q=&_sort=&_order=&_page=&_limit=) ve { pagination, sort, data } cevabı.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from fastapi import Query


@dataclass
class ListParams:
    name: str | None = None
    q: str | None = None
    sort: str | None = None
    order: str = "asc"
    page: int = 1
    limit: int = 10


def list_params(
    name: str | None = None,
    q: str | None = None,
    sort: str | None = Query(None, alias="_sort"),
    order: str = Query("asc", alias="_order", pattern="^(asc|desc)$"),
    page: int = Query(1, alias="_page", ge=1),
    limit: int = Query(10, alias="_limit", ge=1, le=500),
) -> ListParams:
    return ListParams(name=name, q=q, sort=sort, order=order, page=page, limit=limit)


def _sort_value(v: Any):
    if isinstance(v, bool):
        return (1, int(v), "")
    if isinstance(v, (int, float)):
        return (0, v, "")
    return (2, 0, str(v))


def sort_records(records: list[dict], field: str, order: str = "asc") -> list[dict]:
    present = [r for r in records if r.get(field) is not None]
    missing = [r for r in records if r.get(field) is None]
    present.sort(key=lambda r: _sort_value(r.get(field)), reverse=(order == "desc"))
    return present + missing


def apply_list_params(
    records: Iterable[dict],
    params: ListParams,
    search_fields: tuple[str, ...] = ("name",),
) -> dict:
    rows = list(records)

    # Filter (birebir alt dizgi, büyük/küçük harf duyarlı)
    if params.name:
        rows = [r for r in rows if params.name in str(r.get("name") or "")]

    # Search (büyük/küçük harf duyarsız)
    if params.q:
        term = params.q.lower()
        rows = [r for r in rows if any(term in str(r.get(f) or "").lower() for f in search_fields)]

    if params.sort:
        rows = sort_records(rows, params.sort, params.order)

    start = (params.page - 1) * params.limit
    end = params.page * params.limit

    return {
        "pagination": {"total": len(rows), "page": params.page, "limit": params.limit},
        "sort": {"field": params.sort or "id", "order": params.order},
        "data": rows[start:end],
    }
