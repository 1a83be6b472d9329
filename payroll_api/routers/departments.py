from typing import List

from fastapi import APIRouter, Depends

from payroll_api.core.authorization import ANY_ROLE, PEOPLE_MANAGERS, require_role
from payroll_api.deps.services import get_department_service, unwrap
from payroll_api.schemas.department import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from payroll_api.services.department_service import DepartmentService

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.get("", response_model=List[DepartmentResponse])
def list_departments(
    service: DepartmentService = Depends(get_department_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.list_departments())


@router.get("/active", response_model=List[DepartmentResponse])
def list_active_departments(
    service: DepartmentService = Depends(get_department_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.list_departments(active_only=True))


@router.get("/{department_id}", response_model=DepartmentResponse)
def get_department(
    department_id: int,
    service: DepartmentService = Depends(get_department_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_department(department_id))


@router.post("", response_model=DepartmentResponse, status_code=201)
def create_department(
    payload: DepartmentCreate,
    service: DepartmentService = Depends(get_department_service),
    _role=Depends(require_role(*PEOPLE_MANAGERS)),
):
    return unwrap(service.create_department(payload))


@router.put("/{department_id}", response_model=DepartmentResponse)
def update_department(
    department_id: int,
    payload: DepartmentUpdate,
    service: DepartmentService = Depends(get_department_service),
    _role=Depends(require_role(*PEOPLE_MANAGERS)),
):
    return unwrap(service.update_department(department_id, payload))


@router.delete("/{department_id}")
def delete_department(
    department_id: int,
    service: DepartmentService = Depends(get_department_service),
    _role=Depends(require_role(*PEOPLE_MANAGERS)),
):
    result = service.delete_department(department_id)
    unwrap(result)
    return {"message": result.message}
