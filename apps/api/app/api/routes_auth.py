from fastapi import APIRouter, Depends

from app.deps import get_current_user, get_store
from app.db.document_store import DocumentStore
from app.schemas.auth import LoginIn, LoginOut, RefreshIn, TokenOut
from app.services import auth_service

router = APIRouter(tags=["auth"])

@router.post("/login", response_model=LoginOut)
def login(body: LoginIn, store: DocumentStore = Depends(get_store)):
    return auth_service.login(store, body.email, body.password)

@router.post("/refresh-token", response_model=TokenOut)
def refresh_token(body: RefreshIn, store: DocumentStore = Depends(get_store)):
    return auth_service.refresh(store, body.refreshToken)

@router.get("/me")
def me(user: dict = Depends(get_current_user)):
    return auth_service.sanitize_user(user)
