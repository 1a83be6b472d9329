from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from payroll_api.core.authorization import ANY_ROLE, PAYROLL_MANAGERS, require_role
from payroll_api.deps.services import get_payroll_service, unwrap
from payroll_api.models.payroll import PayrollStatus
from payroll_api.schemas.common import PagedResult
from payroll_api.schemas.payroll import (
    GenerationReportResponse,
    PayrollCreate,
    PayrollItemTypeResponse,
    PayrollResponse,
    PayrollTotalResponse,
    PayrollUpdate,
)
from payroll_api.services.payroll_service import PayrollService

router = APIRouter(prefix="/payrolls", tags=["Payrolls"])
item_types_router = APIRouter(prefix="/payroll-item-types", tags=["Payrolls"])


@router.get("", response_model=PagedResult[PayrollResponse])
def search_payrolls(
    employee_id: Optional[int] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=2000, le=3000),
    status: Optional[PayrollStatus] = None,
    page_number: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(
        service.search_payrolls(
            employee_id=employee_id,
            month=month,
            year=year,
            status=status,
            page_number=page_number,
            page_size=page_size,
        )
    )


@router.get("/by-employee/{employee_id}", response_model=List[PayrollResponse])
def get_payrolls_by_employee(
    employee_id: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_payrolls_by_employee(employee_id))


@router.get("/by-period/{year}/{month}", response_model=List[PayrollResponse])
def get_payrolls_by_period(
    year: int,
    month: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_payrolls_by_period(month, year))


@router.get("/total-amount/{year}/{month}", response_model=PayrollTotalResponse)
def get_total_payroll_amount(
    year: int,
    month: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_total_payroll_amount(month, year))


@router.get("/{payroll_id}", response_model=PayrollResponse)
def get_payroll(
    payroll_id: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.get_payroll(payroll_id))


@router.post("", response_model=PayrollResponse, status_code=201)
def create_payroll(
    payload: PayrollCreate,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*PAYROLL_MANAGERS)),
):
    return unwrap(service.create_payroll(payload))


@router.put("/{payroll_id}", response_model=PayrollResponse)
def update_payroll(
    payroll_id: int,
    payload: PayrollUpdate,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*PAYROLL_MANAGERS)),
):
    return unwrap(service.update_payroll(payroll_id, payload))


@router.delete("/{payroll_id}")
def delete_payroll(
    payroll_id: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*PAYROLL_MANAGERS)),
):
    result = service.delete_payroll(payroll_id)
    unwrap(result)
    return {"message": result.message}


@router.post("/{payroll_id}/process", response_model=PayrollResponse)
def process_payroll(
    payroll_id: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*PAYROLL_MANAGERS)),
):
    return unwrap(service.process_payroll(payroll_id))


@router.post("/{payroll_id}/mark-paid", response_model=PayrollResponse)
def mark_payroll_paid(
    payroll_id: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*PAYROLL_MANAGERS)),
):
    return unwrap(service.mark_payroll_paid(payroll_id))


@router.post("/generate/{employee_id}/{year}/{month}", response_model=PayrollResponse, status_code=201)
def generate_payroll_for_employee(
    employee_id: int,
    year: int,
    month: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*PAYROLL_MANAGERS)),
):
    return unwrap(service.generate_payroll_for_employee(employee_id, month, year))


@router.post("/generate-all/{year}/{month}", response_model=GenerationReportResponse)
def generate_payrolls_for_period(
    year: int,
    month: int,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*PAYROLL_MANAGERS)),
):
    return unwrap(service.generate_payrolls_for_period(month, year))


@item_types_router.get("", response_model=List[PayrollItemTypeResponse])
def list_payroll_item_types(
    include_inactive: bool = False,
    service: PayrollService = Depends(get_payroll_service),
    _role=Depends(require_role(*ANY_ROLE)),
):
    return unwrap(service.list_payroll_item_types(active_only=not include_inactive))
