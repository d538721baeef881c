from __future__ import annotations

from fastapi import Depends, Request

from app.core.config import settings
from app.db.backends import build_backend
from app.db.document_store import DocumentStore
from app.services import auth_service
from app.services.image_storage import ImageStorage, build_image_storage

_store: DocumentStore | None = None
_image_storage: ImageStorage | None = None


def get_store() -> DocumentStore:
    # Süreç genelinde tek doküman + tek yazma kilidi
    global _store
    if _store is None:
        _store = DocumentStore(build_backend(settings))
    return _store


def get_image_storage() -> ImageStorage:
    global _image_storage
    if _image_storage is None:
        _image_storage = build_image_storage(settings)
    return _image_storage


def _bearer_token(request: Request) -> str | None:
    auth = request.headers.get("authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None


def get_current_user(request: Request, store: DocumentStore = Depends(get_store)) -> dict:
    return auth_service.authenticate(store, _bearer_token(request))


def RolesAllowed(*roles: str):
    def dep(user: dict = Depends(get_current_user)) -> dict:
        auth_service.require_role(user, *roles)
        return user
    return dep
