import re
from decimal import Decimal
from typing import List, Optional

from payroll_api.core.clock import Clock
from payroll_api.core.dates import years_before
from payroll_api.repositories.unit_of_work import UnitOfWork
from payroll_api.schemas.employee import EmployeeCreate, EmployeeUpdate
from payroll_api.validators.result import ValidationResult

MIN_AGE_YEARS = 16
MAX_AGE_YEARS = 100
MAX_BASE_SALARY = Decimal("10000000")

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(email) is not None


def is_valid_phone_number(phone_number: str) -> bool:
    return PHONE_PATTERN.match(_PHONE_SEPARATORS.sub("", phone_number)) is not None


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class EmployeeValidator:
    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    def validate_create(self, dto: EmployeeCreate) -> ValidationResult:
        errors: List[str] = []

        if _blank(dto.employee_code):
            errors.append("Employee code is required")
        elif len(dto.employee_code) > 50:
            errors.append("Employee code cannot exceed 50 characters")

        if dto.employee_number is not None:
            if _blank(dto.employee_number):
                errors.append("Employee number cannot be blank")
            elif len(dto.employee_number) > 20:
                errors.append("Employee number cannot exceed 20 characters")

        self._check_basic_fields(dto, errors)

        if not _blank(dto.employee_code):
            if self.uow.employees.get_by_employee_code(dto.employee_code) is not None:
                errors.append("An employee with this employee code already exists")

        employee_number = dto.employee_number or dto.employee_code
        if not _blank(employee_number):
            if self.uow.employees.get_by_employee_number(employee_number) is not None:
                errors.append("An employee with this employee number already exists")

        if not _blank(dto.email):
            if self.uow.employees.get_by_email(dto.email) is not None:
                errors.append("An employee with this email already exists")

        self._check_department(dto.department_id, errors)

        return ValidationResult.from_errors(errors)

    def validate_update(self, employee_id: int, dto: EmployeeUpdate) -> ValidationResult:
        if self.uow.employees.get_by_id(employee_id) is None:
            return ValidationResult.missing("Employee")

        errors: List[str] = []
        self._check_basic_fields(dto, errors)

        if not _blank(dto.email):
            existing = self.uow.employees.get_by_email(dto.email)
            if existing is not None and existing.id != int(employee_id):
                errors.append("An employee with this email already exists")

        self._check_department(dto.department_id, errors)

        return ValidationResult.from_errors(errors)

    def validate_delete(self, employee_id: int) -> ValidationResult:
        if self.uow.employees.get_by_id(employee_id) is None:
            return ValidationResult.missing("Employee")

        errors: List[str] = []
        if self.uow.payrolls.has_processed_for_employee(employee_id):
            errors.append(
                "Cannot delete employee with processed payrolls. Consider marking as inactive instead."
            )

        return ValidationResult.from_errors(errors)

    def _check_department(self, department_id: int, errors: List[str]) -> None:
        if not department_id or department_id <= 0:
            errors.append("Department is required")
        elif not self.uow.departments.is_active_department(department_id):
            errors.append("Selected department does not exist or is inactive")

    def _check_basic_fields(self, dto: EmployeeUpdate, errors: List[str]) -> None:
        if _blank(dto.first_name):
            errors.append("First name is required")
        elif len(dto.first_name) > 100:
            errors.append("First name cannot exceed 100 characters")

        if _blank(dto.last_name):
            errors.append("Last name is required")
        elif len(dto.last_name) > 100:
            errors.append("Last name cannot exceed 100 characters")

        if _blank(dto.email):
            errors.append("Email is required")
        elif len(dto.email) > 255:
            errors.append("Email cannot exceed 255 characters")
        elif not is_valid_email(dto.email):
            errors.append("Invalid email format")

        if dto.phone_number:
            if len(dto.phone_number) > 20:
                errors.append("Phone number cannot exceed 20 characters")
            elif not is_valid_phone_number(dto.phone_number):
                errors.append("Invalid phone number format")

        if dto.address and len(dto.address) > 500:
            errors.append("Address cannot exceed 500 characters")

        if dto.position and len(dto.position) > 100:
            errors.append("Position cannot exceed 100 characters")

        today = self.clock.today()

        if dto.date_of_birth is None:
            errors.append("Date of birth is required")
        elif dto.date_of_birth > years_before(today, MIN_AGE_YEARS):
            errors.append(f"Employee must be at least {MIN_AGE_YEARS} years old")
        elif dto.date_of_birth < years_before(today, MAX_AGE_YEARS):
            errors.append("Invalid date of birth")

        if dto.hire_date is None:
            errors.append("Hire date is required")
        elif dto.hire_date > today:
            errors.append("Hire date cannot be in the future")
        elif dto.date_of_birth is not None and dto.hire_date < dto.date_of_birth:
            errors.append("Hire date cannot be before date of birth")

        if dto.base_salary is None or dto.base_salary <= 0:
            errors.append("Base salary must be greater than zero")
        elif dto.base_salary > MAX_BASE_SALARY:
            errors.append("Base salary cannot exceed 10,000,000")
