from fastapi import APIRouter, Depends

from app.deps import get_store, RolesAllowed
from app.db.document_store import DocumentStore
from app.services import presentation_service

router = APIRouter(tags=["dashboard"])

@router.get("/dashboard", dependencies=[Depends(RolesAllowed("admin"))])
def dashboard(store: DocumentStore = Depends(get_store)):
    """Kayıt sayıları + yetenek frekansları (ilk görülme sırasıyla)."""
    return presentation_service.dashboard(store)
