import math
from typing import Dict, Iterable, List, Optional

from payroll_api.models.department import Department
from payroll_api.models.employee import Employee
from payroll_api.models.payroll import Payroll
from payroll_api.models.payroll_item import PayrollItem
from payroll_api.models.payroll_item_type import PayrollItemType


def department_to_dict(department: Department, employee_count: int = 0) -> dict:
    return {
        "id": department.id,
        "name": department.name,
        "code": department.code,
        "description": department.description,
        "is_active": bool(department.is_active),
        "created_at": department.created_at,
        "updated_at": department.updated_at,
        "employee_count": int(employee_count or 0),
    }


def employee_to_dict(employee: Employee, department_name: str = "") -> dict:
    return {
        "id": employee.id,
        "employee_code": employee.employee_code,
        "employee_number": employee.employee_number,
        "first_name": employee.first_name,
        "last_name": employee.last_name,
        "full_name": employee.full_name,
        "email": employee.email,
        "phone_number": employee.phone_number,
        "address": employee.address,
        "position": employee.position or "",
        "date_of_birth": employee.date_of_birth,
        "hire_date": employee.hire_date,
        "base_salary": employee.base_salary,
        "status": employee.status,
        "department_id": employee.department_id,
        "department_name": department_name or "",
        "created_at": employee.created_at,
        "updated_at": employee.updated_at,
    }


def payroll_item_to_dict(item: PayrollItem, type_name: str = "") -> dict:
    return {
        "id": item.id,
        "payroll_item_type_id": item.payroll_item_type_id,
        "payroll_item_type_name": type_name or "",
        "description": item.description,
        "amount": item.amount,
        "is_deduction": bool(item.is_deduction),
        "created_at": item.created_at,
    }


def payroll_item_type_to_dict(item_type: PayrollItemType) -> dict:
    return {
        "id": item_type.id,
        "name": item_type.name,
        "code": item_type.code,
        "description": item_type.description,
        "is_earning": bool(item_type.is_earning),
        "is_deduction": bool(item_type.is_deduction),
        "is_active": bool(item_type.is_active),
    }


def payroll_to_dict(
    payroll: Payroll,
    employee: Optional[Employee] = None,
    department_name: str = "",
    items: Iterable[PayrollItem] = (),
    item_type_names: Optional[Dict[int, str]] = None,
) -> dict:
    item_type_names = item_type_names or {}
    return {
        "id": payroll.id,
        "employee_id": payroll.employee_id,
        "employee_name": employee.full_name if employee is not None else "",
        "employee_code": employee.employee_code if employee is not None else "",
        "department_name": department_name or "",
        "pay_period_month": payroll.pay_period_month,
        "pay_period_year": payroll.pay_period_year,
        "pay_period": payroll.pay_period,
        "base_salary": payroll.base_salary,
        "overtime": payroll.overtime,
        "bonus": payroll.bonus,
        "allowances": payroll.allowances,
        "deductions": payroll.deductions,
        "tax_deduction": payroll.tax_deduction,
        "gross_pay": payroll.gross_pay,
        "net_pay": payroll.net_pay,
        "status": payroll.status,
        "processed_date": payroll.processed_date,
        "paid_date": payroll.paid_date,
        "notes": payroll.notes,
        "created_at": payroll.created_at,
        "updated_at": payroll.updated_at,
        "payroll_items": [
            payroll_item_to_dict(i, item_type_names.get(i.payroll_item_type_id, "")) for i in items
        ],
    }


def paged(items: List[dict], total_count: int, page_number: int, page_size: int) -> dict:
    total_pages = math.ceil(total_count / page_size) if page_size else 0
    return {
        "items": items,
        "total_count": int(total_count),
        "page_number": int(page_number),
        "page_size": int(page_size),
        "total_pages": int(total_pages),
        "has_previous_page": page_number > 1,
        "has_next_page": page_number < total_pages,
    }
