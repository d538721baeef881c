# apps/api/app/db/backends.py
"""Whole-document persistence: ``load() -> document`` / ``save(document)``."""
from __future__ import annotations

import copy
import json
import os
import tempfile
from typing import Any, Protocol

from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.attributes import flag_modified

from app.core.logging import get_logger
from app.db.models_documents import StoredDocument
from app.db.session import make_session_factory

logger = get_logger(__name__)

COLLECTIONS = ("users", "employees", "projects", "positions")

Document = dict[str, list[dict[str, Any]]]


def empty_document() -> Document:
    return {name: [] for name in COLLECTIONS}


def normalize_document(raw: dict[str, Any] | None) -> Document:
    doc: Document = dict(raw or {})
    for name in COLLECTIONS:
        doc.setdefault(name, [])
    return doc


class DocumentBackend(Protocol):
    def load(self) -> Document: ...

    def save(self, document: Document) -> None: ...


class JsonFileBackend:
    def __init__(self, path: str):
        self.path = path

    def load(self) -> Document:
        if not os.path.exists(self.path):
            logger.info("store.json.missing path=%s", self.path)
            return empty_document()
        with open(self.path, "r", encoding="utf-8") as fh:
            return normalize_document(json.load(fh))

    def save(self, document: Document) -> None:
        # temp dosyaya yaz + os.replace => yarım yazılmış doküman kalmaz
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".db-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(document, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class SqlDocumentBackend:
    def __init__(self, database_url: str, name: str = "main", session_factory: sessionmaker | None = None):
        self.name = name
        self.SessionLocal = session_factory or make_session_factory(database_url)

    def load(self) -> Document:
        db = self.SessionLocal()
        try:
            row = db.get(StoredDocument, self.name)
            return normalize_document(copy.deepcopy(row.body) if row else None)
        finally:
            db.close()

    def save(self, document: Document) -> None:
        db = self.SessionLocal()
        try:
            row = db.get(StoredDocument, self.name)
            if row:
                row.body = copy.deepcopy(document)
                flag_modified(row, "body")
            else:
                db.add(StoredDocument(name=self.name, body=copy.deepcopy(document)))
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


def build_backend(settings) -> DocumentBackend:
    if settings.DB_BACKEND == "sql":
        if not settings.DATABASE_URL:
            raise RuntimeError("DB_BACKEND=sql requires DATABASE_URL")
        return SqlDocumentBackend(settings.DATABASE_URL)
    if settings.DB_BACKEND != "json":
        raise RuntimeError(f"unknown DB_BACKEND: {settings.DB_BACKEND}")
    return JsonFileBackend(settings.DB_PATH)
