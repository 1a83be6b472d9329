import logging

from payroll_api.core.clock import Clock
from payroll_api.mappings import department_to_dict
from payroll_api.models.department import Department
from payroll_api.repositories.unit_of_work import UnitOfWork
from payroll_api.schemas.department import DepartmentCreate, DepartmentUpdate
from payroll_api.services.result import ServiceResult
from payroll_api.validators.department_validator import DepartmentValidator

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock
        self.validator = DepartmentValidator(uow)

    def _to_dict(self, department: Department) -> dict:
        return department_to_dict(department, self.uow.departments.count_employees(department.id))

    def list_departments(self, active_only: bool = False) -> ServiceResult:
        if active_only:
            rows = self.uow.departments.get_active()
        else:
            rows = self.uow.departments.get_all()
        return ServiceResult.ok([self._to_dict(d) for d in rows])

    def get_department(self, department_id: int) -> ServiceResult:
        department = self.uow.departments.get_by_id(department_id)
        if department is None:
            logger.warning("Department not found", extra={"department_id": department_id})
            return ServiceResult.missing("Department")
        return ServiceResult.ok(self._to_dict(department))

    def create_department(self, dto: DepartmentCreate) -> ServiceResult:
        validation = self.validator.validate_create(dto)
        if not validation.is_valid:
            logger.warning("Department creation validation failed", extra={"errors": validation.errors})
            return ServiceResult.invalid(validation)

        now = self.clock.now()
        department = Department(
            name=dto.name,
            code=dto.code,
            description=dto.description,
            is_active=dto.is_active,
            created_at=now,
        )

        try:
            self.uow.departments.add(department)
            self.uow.commit()
        except Exception:
            logger.exception("Failed to create department")
            self.uow.rollback()
            raise

        logger.info("Created department", extra={"department_id": department.id})
        return ServiceResult.ok(self._to_dict(department), "Department created successfully")

    def update_department(self, department_id: int, dto: DepartmentUpdate) -> ServiceResult:
        validation = self.validator.validate_update(department_id, dto)
        if not validation.is_valid:
            logger.warning(
                "Department update validation failed",
                extra={"department_id": department_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        department = self.uow.departments.get_by_id(department_id)
        department.name = dto.name
        department.code = dto.code
        department.description = dto.description
        department.is_active = dto.is_active
        department.updated_at = self.clock.now()

        try:
            self.uow.commit()
        except Exception:
            logger.exception("Failed to update department")
            self.uow.rollback()
            raise

        logger.info("Updated department", extra={"department_id": department_id})
        return ServiceResult.ok(self._to_dict(department), "Department updated successfully")

    def delete_department(self, department_id: int) -> ServiceResult:
        validation = self.validator.validate_delete(department_id)
        if not validation.is_valid:
            logger.warning(
                "Department deletion validation failed",
                extra={"department_id": department_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        department = self.uow.departments.get_by_id(department_id)
        try:
            # Only non-active employees can remain at this point.
            self.uow.employees.detach_from_department(department_id)
            self.uow.departments.delete(department)
            self.uow.commit()
        except Exception:
            logger.exception("Failed to delete department")
            self.uow.rollback()
            raise

        logger.info("Deleted department", extra={"department_id": department_id})
        return ServiceResult.ok(True, "Department deleted successfully")
