# apps/api/app/api/routes_employees.py
from fastapi import APIRouter, Depends, Request, status
from fastapi.concurrency import run_in_threadpool

from app.api.payload import read_payload, validate_payload
from app.deps import get_current_user, get_image_storage, get_store, RolesAllowed
from app.db.document_store import DocumentStore
from app.schemas.employee import EmployeeCreateIn, EmployeeUpdateIn
from app.services import employee_service, presentation_service
from app.services.image_storage import ImageStorage
from app.schemas.common import MessageOut, PageOut
from app.services.listing import ListParams, list_params

router = APIRouter(prefix="/employees", tags=["employees"])

@router.get("", response_model=PageOut, dependencies=[Depends(RolesAllowed("admin"))])
def list_employees(params: ListParams = Depends(list_params), store: DocumentStore = Depends(get_store)):
    """
    ?name= (birebir), ?q= (isim/kod/e-posta, harf duyarsız), ?_sort=&_order=, ?_page=&_limit=
    """
    return employee_service.list_employees(store, params)

# Form gövdesi async okunur; kilit ve disk yazımı threadpool'da, event loop bloklanmaz
@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(RolesAllowed("admin"))])
async def create_employee(
    request: Request,
    store: DocumentStore = Depends(get_store),
    storage: ImageStorage = Depends(get_image_storage),
):
    data, avatar = await read_payload(request)
    fields = validate_payload(EmployeeCreateIn, data).model_dump()

    # Önce kısıtlar, sonra upload: reddedilecek kayıt için dosya yüklenmez
    await run_in_threadpool(employee_service.precheck_create, store, fields)
    avatar_url = await storage.upload(avatar) if avatar else ""

    return await run_in_threadpool(employee_service.create_employee, store, fields, avatar_url)

@router.get("/{employee_id}", dependencies=[Depends(get_current_user)])
def get_employee(employee_id: int, store: DocumentStore = Depends(get_store)):
    return presentation_service.get_employee_detail(store, employee_id)

@router.put("/{employee_id}", dependencies=[Depends(RolesAllowed("admin"))])
async def update_employee(
    employee_id: int,
    request: Request,
    store: DocumentStore = Depends(get_store),
    storage: ImageStorage = Depends(get_image_storage),
):
    data, avatar = await read_payload(request)
    # Sadece gönderilen alanları güncelle
    fields = validate_payload(EmployeeUpdateIn, data).model_dump(exclude_unset=True)

    await run_in_threadpool(employee_service.precheck_update, store, employee_id, fields)
    avatar_url = await storage.upload(avatar) if avatar else None

    return await run_in_threadpool(employee_service.update_employee, store, employee_id, fields, avatar_url)

@router.delete("/{employee_id}", response_model=MessageOut, dependencies=[Depends(RolesAllowed("admin"))])
def delete_employee(employee_id: int, store: DocumentStore = Depends(get_store)):
    employee_service.delete_employee(store, employee_id)
    return {"message": "employee deleted"}

@router.get("/{employee_id}/projects", dependencies=[Depends(RolesAllowed("admin"))])
def employee_projects(employee_id: int, store: DocumentStore = Depends(get_store)):
    return presentation_service.get_employee_projects(store, employee_id)
