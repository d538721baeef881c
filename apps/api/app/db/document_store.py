# apps/api/app/db/document_store.py
"""In-memory JSON document with an explicit write boundary.

The whole document is loaded once, read and mutated under one process-wide
lock, and written back in full when a ``with_write_lock()`` block exits
cleanly. A block that raises reloads the document from the backend, so the
in-memory copy never drifts from what was last persisted.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from app.core.logging import get_logger
from app.db.backends import COLLECTIONS, Document, DocumentBackend

logger = get_logger(__name__)

Record = dict[str, Any]
Predicate = Callable[[Record], bool]


def _max_int_id(records: list[Record]) -> int:
    ids = [r.get("id") for r in records]
    return max((i for i in ids if isinstance(i, int) and not isinstance(i, bool)), default=0)


class DocumentSession:
    """Collection operations over the locked document."""

    def __init__(self, store: "DocumentStore", writable: bool):
        self._store = store
        self.writable = writable

    @property
    def document(self) -> Document:
        return self._store._doc

    def collection(self, name: str) -> list[Record]:
        if name not in self.document:
            if name not in COLLECTIONS:
                raise KeyError(f"unknown collection: {name}")
            self.document[name] = []
        return self.document[name]

    def size(self, name: str) -> int:
        return len(self.collection(name))

    def filter(self, name: str, predicate: Predicate | None = None, **equals: Any) -> list[Record]:
        out = []
        for rec in self.collection(name):
            if predicate and not predicate(rec):
                continue
            if any(rec.get(k) != v for k, v in equals.items()):
                continue
            out.append(rec)
        return out

    def find(self, name: str, predicate: Predicate | None = None, **equals: Any) -> Record | None:
        found = self.filter(name, predicate, **equals)
        return found[0] if found else None

    def get(self, name: str, record_id: Any) -> Record | None:
        return self.find(name, id=record_id)

    def _require_writable(self) -> None:
        if not self.writable:
            raise RuntimeError("document opened read-only; use with_write_lock()")

    def insert(self, name: str, record: Record) -> Record:
        self._require_writable()
        if record.get("id") is None:
            record = {"id": self._store._next_id(name), **{k: v for k, v in record.items() if k != "id"}}
        else:
            self._store._bump(name, record["id"])
        self.collection(name).append(record)
        return record

    def update(self, name: str, record_id: Any, fields: dict[str, Any]) -> Record | None:
        """Shallow merge of ``fields`` into the stored record (in place)."""
        self._require_writable()
        rec = self.get(name, record_id)
        if rec is None:
            return None
        rec.update(fields)
        return rec

    def delete(self, name: str, record_id: Any) -> bool:
        self._require_writable()
        records = self.collection(name)
        kept = [r for r in records if r.get("id") != record_id]
        if len(kept) == len(records):
            return False
        records[:] = kept
        return True


class DocumentStore:
    def __init__(self, backend: DocumentBackend):
        self.backend = backend
        self._lock = threading.RLock()
        self._doc: Document | None = None
        self._counters: dict[str, int] = {}

    def _load(self) -> None:
        self._doc = self.backend.load()
        # max+1 sayaçları: silinen id'ler tekrar verilmez, boşluklar tolere edilir
        # yalnızca bilinen koleksiyonlar; db.json'daki diğer anahtarlara dokunulmaz
        self._counters = {name: _max_int_id(self._doc[name]) for name in COLLECTIONS}

    def _ensure_loaded(self) -> None:
        if self._doc is None:
            self._load()

    def _next_id(self, name: str) -> int:
        current = self._counters.get(name, 0)
        self._counters[name] = current + 1
        return current + 1

    def _bump(self, name: str, record_id: Any) -> None:
        if isinstance(record_id, int) and record_id > self._counters.get(name, 0):
            self._counters[name] = record_id

    @contextmanager
    def read(self) -> Iterator[DocumentSession]:
        with self._lock:
            self._ensure_loaded()
            yield DocumentSession(self, writable=False)

    @contextmanager
    def with_write_lock(self) -> Iterator[DocumentSession]:
        """One writer at a time; persists on success, reloads on error."""
        with self._lock:
            self._ensure_loaded()
            try:
                yield DocumentSession(self, writable=True)
            except BaseException as exc:
                logger.info("store.write.aborted error=%s; reloading document", type(exc).__name__)
                self._load()
                raise
            self.backend.save(self._doc)
