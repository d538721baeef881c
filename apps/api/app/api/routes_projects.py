# apps/api/app/api/routes_projects.py
from fastapi import APIRouter, Depends, status

from app.deps import get_store, RolesAllowed
from app.db.document_store import DocumentStore
from app.schemas.project import ProjectCreateIn, ProjectUpdateIn
from app.services import presentation_service, project_service
from app.schemas.common import MessageOut, PageOut
from app.services.listing import ListParams, list_params

router = APIRouter(prefix="/projects", tags=["projects"], dependencies=[Depends(RolesAllowed("admin"))])

@router.get("", response_model=PageOut)
def list_projects(params: ListParams = Depends(list_params), store: DocumentStore = Depends(get_store)):
    return presentation_service.list_projects(store, params)

@router.post("", status_code=status.HTTP_201_CREATED)
def create_project(body: ProjectCreateIn, store: DocumentStore = Depends(get_store)):
    project = project_service.create_project(store, body.model_dump())
    return presentation_service.get_project_detail(store, project["id"])

@router.get("/{project_id}")
def get_project(project_id: int, store: DocumentStore = Depends(get_store)):
    return presentation_service.get_project_detail(store, project_id)

@router.put("/{project_id}")
def update_project(project_id: int, body: ProjectUpdateIn, store: DocumentStore = Depends(get_store)):
    """
    employees gönderilirse kadro uzlaştırılır: çıkanın açık dönemi kapanır,
    yeni gelen / geri dönen için yeni dönem açılır. Geçmiş silinmez.
    """
    project_service.update_project(store, project_id, body.model_dump(exclude_unset=True))
    return presentation_service.get_project_detail(store, project_id)

@router.delete("/{project_id}", response_model=MessageOut)
def delete_project(project_id: int, store: DocumentStore = Depends(get_store)):
    project_service.delete_project(store, project_id)
    return {"message": "project deleted"}
