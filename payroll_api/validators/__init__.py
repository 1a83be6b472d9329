from payroll_api.validators.department_validator import DepartmentValidator
from payroll_api.validators.employee_validator import EmployeeValidator
from payroll_api.validators.payroll_validator import PayrollValidator
from payroll_api.validators.result import ValidationResult

__all__ = [
    "DepartmentValidator",
    "EmployeeValidator",
    "PayrollValidator",
    "ValidationResult",
]
