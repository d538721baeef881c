# apps/api/app/core/time.py
from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def utcnow_iso() -> str:
    """ISO-8601 UTC, millisecond precision, "Z" suffix (2024-05-01T08:30:00.000Z)."""
    return utcnow().isoformat(timespec="milliseconds").replace("+00:00", "Z")
