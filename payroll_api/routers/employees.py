from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from payroll_api.core.authorization import ANY_ROLE, PEOPLE_MANAGERS, require_role
from payroll_api.deps.services import get_employee_service, unwrap
from payroll_api.models.employee import EmployeeStatus
from payroll_api.schemas.common import PagedResult
from payroll_api.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from payroll_api.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get("", response_model=PagedResult[EmployeeResponse])
def search_employees(
    search: Optional[str] = None,
    department_id: Optional[int] = None,
    status: Optional[EmployeeStatus] = None,
    page_number: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(
        service.search_employees(
            term=search,
            department_id=department_id,
            status=status,
            page_number=page_number,
            page_size=page_size,
        )
    )


@router.get("/active", response_model=List[EmployeeResponse])
def list_active_employees(
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.list_active_employees())


@router.get("/by-code/{employee_code}", response_model=EmployeeResponse)
def get_employee_by_code(
    employee_code: str,
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_employee_by_code(employee_code))


@router.get("/by-department/{department_id}", response_model=List[EmployeeResponse])
def get_employees_by_department(
    department_id: int,
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_employees_by_department(department_id))


@router.get("/{employee_id}", response_model=EmployeeResponse)
def get_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_employee(employee_id))


@router.post("", response_model=EmployeeResponse, status_code=201)
def create_employee(
    payload: EmployeeCreate,
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*PEOPLE_MANAGERS)),
):
    return unwrap(service.create_employee(payload))


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: int,
    payload: EmployeeUpdate,
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*PEOPLE_MANAGERS)),
):
    return unwrap(service.update_employee(employee_id, payload))


@router.delete("/{employee_id}")
def delete_employee(
    employee_id: int,
    service: EmployeeService = Depends(get_employee_service),
    _role=Depends(require_role(*PEOPLE_MANAGERS)),
):
    result = service.delete_employee(employee_id)
    unwrap(result)
    return {"message": result.message}
