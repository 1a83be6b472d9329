from typing import List, Optional

from payroll_api.repositories.unit_of_work import UnitOfWork
from payroll_api.schemas.department import DepartmentCreate, DepartmentUpdate
from payroll_api.validators.result import ValidationResult

NAME_MAX_LENGTH = 100
CODE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 500


class DepartmentValidator:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def validate_create(self, dto: DepartmentCreate) -> ValidationResult:
        errors: List[str] = []
        self._check_fields(dto, errors)
        self._check_uniqueness(dto, errors, exclude_id=None)
        return ValidationResult.from_errors(errors)

    def validate_update(self, department_id: int, dto: DepartmentUpdate) -> ValidationResult:
        if self.uow.departments.get_by_id(department_id) is None:
            return ValidationResult.missing("Department")

        errors: List[str] = []
        self._check_fields(dto, errors)
        self._check_uniqueness(dto, errors, exclude_id=department_id)
        return ValidationResult.from_errors(errors)

    def validate_delete(self, department_id: int) -> ValidationResult:
        if self.uow.departments.get_by_id(department_id) is None:
            return ValidationResult.missing("Department")

        errors: List[str] = []
        if self.uow.employees.has_active_in_department(department_id):
            errors.append("Cannot delete department with active employees")

        return ValidationResult.from_errors(errors)

    @staticmethod
    def _check_fields(dto: DepartmentCreate, errors: List[str]) -> None:
        if not dto.name or not dto.name.strip():
            errors.append("Department name is required")
        elif len(dto.name) > NAME_MAX_LENGTH:
            errors.append(f"Department name cannot exceed {NAME_MAX_LENGTH} characters")

        if not dto.code or not dto.code.strip():
            errors.append("Department code is required")
        elif len(dto.code) > CODE_MAX_LENGTH:
            errors.append(f"Department code cannot exceed {CODE_MAX_LENGTH} characters")

        if dto.description and len(dto.description) > DESCRIPTION_MAX_LENGTH:
            errors.append(f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters")

    def _check_uniqueness(self, dto: DepartmentCreate, errors: List[str], exclude_id: Optional[int]) -> None:
        if dto.name and dto.name.strip():
            if self.uow.departments.get_by_name(dto.name, exclude_id=exclude_id) is not None:
                errors.append("A department with this name already exists")

        if dto.code and dto.code.strip():
            if self.uow.departments.get_by_code(dto.code, exclude_id=exclude_id) is not None:
                errors.append("A department with this code already exists")
