from typing import Any

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from payroll_api.core.clock import Clock, get_clock
from payroll_api.database import get_db
from payroll_api.repositories.unit_of_work import UnitOfWork
from payroll_api.services.department_service import DepartmentService
from payroll_api.services.employee_service import EmployeeService
from payroll_api.services.payroll_service import PayrollService
from payroll_api.services.result import ServiceResult


def get_uow(db: Session = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)


def get_department_service(
    uow: UnitOfWork = Depends(get_uow),
    clock: Clock = Depends(get_clock),
) -> DepartmentService:
    return DepartmentService(uow, clock)


def get_employee_service(
    uow: UnitOfWork = Depends(get_uow),
    clock: Clock = Depends(get_clock),
) -> EmployeeService:
    return EmployeeService(uow, clock)


def get_payroll_service(
    uow: UnitOfWork = Depends(get_uow),
    clock: Clock = Depends(get_clock),
) -> PayrollService:
    return PayrollService(uow, clock)


def unwrap(result: ServiceResult) -> Any:
    """Return the payload of a successful result or raise the matching HTTP error."""
    if result.success:
        return result.data

    if result.not_found:
        detail = result.errors[0] if result.errors else result.message
        raise HTTPException(status_code=404, detail=detail)

    raise HTTPException(
        status_code=400,
        detail={"message": result.message, "errors": result.errors},
    )
