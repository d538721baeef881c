from fastapi import APIRouter, Depends

from app.deps import get_current_user, get_store
from app.db.document_store import DocumentStore
from app.services import employee_service

router = APIRouter(tags=["catalog"], dependencies=[Depends(get_current_user)])

@router.get("/managers")
def list_managers(store: DocumentStore = Depends(get_store)):
    return employee_service.list_managers(store)

@router.get("/positions")
def list_positions(store: DocumentStore = Depends(get_store)):
    return employee_service.list_positions(store)
