from payroll_api.models.department import Department
from payroll_api.models.employee import Employee, EmployeeStatus
from payroll_api.models.payroll import InvalidPayrollState, Payroll, PayrollStatus
from payroll_api.models.payroll_item import PayrollItem
from payroll_api.models.payroll_item_type import PayrollItemType

__all__ = [
    "Department",
    "Employee",
    "EmployeeStatus",
    "InvalidPayrollState",
    "Payroll",
    "PayrollItem",
    "PayrollItemType",
    "PayrollStatus",
]
