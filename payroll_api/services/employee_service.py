import logging
from typing import Optional

from payroll_api.core.clock import Clock
from payroll_api.mappings import employee_to_dict, paged
from payroll_api.models.employee import Employee, EmployeeStatus
from payroll_api.models.payroll import PayrollStatus
from payroll_api.repositories.unit_of_work import UnitOfWork
from payroll_api.schemas.employee import EmployeeCreate, EmployeeUpdate
from payroll_api.services.result import ServiceResult
from payroll_api.validators.employee_validator import EmployeeValidator

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class EmployeeService:
    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock
        self.validator = EmployeeValidator(uow, clock)

    def _department_name(self, employee: Employee) -> str:
        if employee.department_id is None:
            return ""
        department = self.uow.departments.get_by_id(employee.department_id)
        return department.name if department is not None else ""

    def _to_dict(self, employee: Employee) -> dict:
        return employee_to_dict(employee, self._department_name(employee))

    def search_employees(
        self,
        term: Optional[str] = None,
        department_id: Optional[int] = None,
        status: Optional[EmployeeStatus] = None,
        page_number: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ServiceResult:
        page_number = max(int(page_number), 1)
        page_size = min(max(int(page_size), 1), MAX_PAGE_SIZE)

        rows, total = self.uow.employees.search_paged(
            term=term,
            department_id=department_id,
            status=status,
            limit=page_size,
            offset=(page_number - 1) * page_size,
        )
        return ServiceResult.ok(paged([self._to_dict(e) for e in rows], total, page_number, page_size))

    def list_active_employees(self) -> ServiceResult:
        return ServiceResult.ok([self._to_dict(e) for e in self.uow.employees.get_active()])

    def get_employees_by_department(self, department_id: int) -> ServiceResult:
        rows = self.uow.employees.get_by_department(department_id)
        return ServiceResult.ok([self._to_dict(e) for e in rows])

    def get_employee(self, employee_id: int) -> ServiceResult:
        employee = self.uow.employees.get_by_id(employee_id)
        if employee is None:
            logger.warning("Employee not found", extra={"employee_id": employee_id})
            return ServiceResult.missing("Employee")
        return ServiceResult.ok(self._to_dict(employee))

    def get_employee_by_code(self, employee_code: str) -> ServiceResult:
        employee = self.uow.employees.get_by_employee_code(employee_code)
        if employee is None:
            logger.warning("Employee not found", extra={"employee_code": employee_code})
            return ServiceResult.missing("Employee")
        return ServiceResult.ok(self._to_dict(employee))

    def create_employee(self, dto: EmployeeCreate) -> ServiceResult:
        validation = self.validator.validate_create(dto)
        if not validation.is_valid:
            logger.warning("Employee creation validation failed", extra={"errors": validation.errors})
            return ServiceResult.invalid(validation)

        employee = Employee(
            employee_code=dto.employee_code,
            employee_number=dto.employee_number or dto.employee_code,
            first_name=dto.first_name,
            last_name=dto.last_name,
            email=dto.email,
            phone_number=_clean(dto.phone_number),
            address=_clean(dto.address),
            position=dto.position,
            date_of_birth=dto.date_of_birth,
            hire_date=dto.hire_date,
            base_salary=dto.base_salary,
            status=EmployeeStatus(dto.status).value,
            department_id=dto.department_id,
            created_at=self.clock.now(),
        )

        try:
            self.uow.employees.add(employee)
            self.uow.commit()
        except Exception:
            logger.exception("Failed to create employee")
            self.uow.rollback()
            raise

        logger.info(
            "Created employee",
            extra={"employee_id": employee.id, "employee_code": employee.employee_code},
        )
        return ServiceResult.ok(self._to_dict(employee), "Employee created successfully")

    def update_employee(self, employee_id: int, dto: EmployeeUpdate) -> ServiceResult:
        validation = self.validator.validate_update(employee_id, dto)
        if not validation.is_valid:
            logger.warning(
                "Employee update validation failed",
                extra={"employee_id": employee_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        employee = self.uow.employees.get_by_id(employee_id)
        employee.first_name = dto.first_name
        employee.last_name = dto.last_name
        employee.email = dto.email
        employee.phone_number = _clean(dto.phone_number)
        employee.address = _clean(dto.address)
        employee.position = dto.position
        employee.date_of_birth = dto.date_of_birth
        employee.hire_date = dto.hire_date
        employee.base_salary = dto.base_salary
        employee.status = EmployeeStatus(dto.status).value
        employee.department_id = dto.department_id
        employee.updated_at = self.clock.now()

        try:
            self.uow.commit()
        except Exception:
            logger.exception("Failed to update employee")
            self.uow.rollback()
            raise

        logger.info("Updated employee", extra={"employee_id": employee_id})
        return ServiceResult.ok(self._to_dict(employee), "Employee updated successfully")

    def delete_employee(self, employee_id: int) -> ServiceResult:
        validation = self.validator.validate_delete(employee_id)
        if not validation.is_valid:
            logger.warning(
                "Employee deletion validation failed",
                extra={"employee_id": employee_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        employee = self.uow.employees.get_by_id(employee_id)
        # Validation leaves only Draft or Cancelled payrolls behind.
        payrolls = self.uow.payrolls.get_by_employee(employee_id)
        unsettled = [p for p in payrolls if p.status not in (PayrollStatus.PROCESSED.value, PayrollStatus.PAID.value)]

        try:
            self.uow.payroll_items.delete_by_payrolls([p.id for p in unsettled])
            self.uow.payrolls.delete_all(unsettled)
            self.uow.employees.delete(employee)
            self.uow.commit()
        except Exception:
            logger.exception("Failed to delete employee")
            self.uow.rollback()
            raise

        logger.info(
            "Deleted employee",
            extra={"employee_id": employee_id, "payrolls_removed": len(unsettled)},
        )
        return ServiceResult.ok(True, "Employee deleted successfully")
