from payroll_api.repositories.base import Repository
from payroll_api.repositories.department_repository import DepartmentRepository
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.repositories.payroll_repository import (
    PayrollItemRepository,
    PayrollItemTypeRepository,
    PayrollRepository,
)
from payroll_api.repositories.unit_of_work import UnitOfWork

__all__ = [
    "DepartmentRepository",
    "EmployeeRepository",
    "PayrollItemRepository",
    "PayrollItemTypeRepository",
    "PayrollRepository",
    "Repository",
    "UnitOfWork",
]
