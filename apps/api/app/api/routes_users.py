from fastapi import APIRouter, Depends

from app.deps import get_store, RolesAllowed
from app.db.document_store import DocumentStore
from app.schemas.common import PageOut
from app.services.auth_service import sanitize_user
from app.services.listing import ListParams, apply_list_params, list_params

router = APIRouter(prefix="/users", tags=["users"])

@router.get("", response_model=PageOut, dependencies=[Depends(RolesAllowed("admin"))])
def list_users(params: ListParams = Depends(list_params), store: DocumentStore = Depends(get_store)):
    with store.read() as db:
        users = [sanitize_user(u) for u in db.collection("users")]
    return apply_list_params(users, params, search_fields=("name", "email"))
