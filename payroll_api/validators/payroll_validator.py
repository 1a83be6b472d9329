from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence

from payroll_api.core.clock import Clock
from payroll_api.core.dates import add_months, first_of_month
from payroll_api.models.employee import EmployeeStatus
from payroll_api.models.payroll import PayrollStatus, month_name
from payroll_api.repositories.unit_of_work import UnitOfWork
from payroll_api.schemas.payroll import PayrollCreate, PayrollItemCreate, PayrollUpdate
from payroll_api.validators.result import ValidationResult

MAX_BASE_SALARY = Decimal("10000000")
MAX_OVERTIME = Decimal("1000000")
MAX_BONUS = Decimal("10000000")
MAX_ALLOWANCES = Decimal("1000000")
MAX_ITEM_AMOUNT = Decimal("1000000")
NOTES_MAX_LENGTH = 1000
ITEM_DESCRIPTION_MAX_LENGTH = 255


def _amount(value: Optional[Decimal]) -> Decimal:
    return Decimal("0") if value is None else value


class PayrollValidator:
    """
    Business-rule gate for payroll mutations.

    Every applicable rule runs and contributes its message; a missing payroll
    short-circuits because no other rule can be evaluated without it.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    def validate_create(self, dto: PayrollCreate) -> ValidationResult:
        errors: List[str] = []

        self._check_employee_and_period(dto, errors)
        self._check_amounts(dto, errors)

        if dto.employee_id and dto.employee_id > 0:
            employee = self.uow.employees.get_by_id(dto.employee_id)
            if employee is None:
                errors.append("Selected employee does not exist")
            elif employee.status != EmployeeStatus.ACTIVE.value:
                errors.append("Cannot create payroll for inactive employee")

            existing = self.uow.payrolls.get_by_employee_and_period(
                dto.employee_id, dto.pay_period_month, dto.pay_period_year
            )
            if existing is not None:
                errors.append(
                    "Payroll for this employee already exists for "
                    f"{month_name(dto.pay_period_month)} {dto.pay_period_year}"
                )

        self._check_items(dto.payroll_items, errors)

        return ValidationResult.from_errors(errors)

    def validate_update(self, payroll_id: int, dto: PayrollUpdate) -> ValidationResult:
        payroll = self.uow.payrolls.get_by_id(payroll_id)
        if payroll is None:
            return ValidationResult.missing("Payroll")

        if payroll.status == PayrollStatus.PAID.value:
            return ValidationResult.failure("Cannot update paid payroll")

        errors: List[str] = []
        self._check_amounts(dto, errors)
        self._check_items(dto.payroll_items, errors)

        return ValidationResult.from_errors(errors)

    def validate_delete(self, payroll_id: int) -> ValidationResult:
        payroll = self.uow.payrolls.get_by_id(payroll_id)
        if payroll is None:
            return ValidationResult.missing("Payroll")

        errors: List[str] = []
        if payroll.status in (PayrollStatus.PROCESSED.value, PayrollStatus.PAID.value):
            errors.append("Cannot delete processed or paid payroll")

        return ValidationResult.from_errors(errors)

    def validate_process(self, payroll_id: int) -> ValidationResult:
        payroll = self.uow.payrolls.get_by_id(payroll_id)
        if payroll is None:
            return ValidationResult.missing("Payroll")

        errors: List[str] = []
        if payroll.status != PayrollStatus.DRAFT.value:
            errors.append("Only draft payrolls can be processed")

        employee = self.uow.employees.get_by_id(payroll.employee_id)
        if employee is None or employee.status != EmployeeStatus.ACTIVE.value:
            errors.append("Cannot process payroll for inactive employee")

        return ValidationResult.from_errors(errors)

    def validate_mark_paid(self, payroll_id: int) -> ValidationResult:
        payroll = self.uow.payrolls.get_by_id(payroll_id)
        if payroll is None:
            return ValidationResult.missing("Payroll")

        errors: List[str] = []
        if payroll.status != PayrollStatus.PROCESSED.value:
            errors.append("Only processed payrolls can be marked as paid")

        return ValidationResult.from_errors(errors)

    def _check_employee_and_period(self, dto: PayrollCreate, errors: List[str]) -> None:
        if not dto.employee_id or dto.employee_id <= 0:
            errors.append("Employee is required")

        month_ok = 1 <= dto.pay_period_month <= 12
        year_ok = 2000 <= dto.pay_period_year <= 3000

        if not month_ok:
            errors.append("Pay period month must be between 1 and 12")

        if not year_ok:
            errors.append("Pay period year must be between 2000 and 3000")

        if month_ok and year_ok:
            period_start = date(dto.pay_period_year, dto.pay_period_month, 1)
            max_allowed = add_months(first_of_month(self.clock.today()), 1)
            if period_start > max_allowed:
                errors.append("Cannot create payroll more than one month in advance")

    @staticmethod
    def _check_amounts(dto: PayrollUpdate, errors: List[str]) -> None:
        base_salary = _amount(dto.base_salary)
        overtime = _amount(dto.overtime)
        bonus = _amount(dto.bonus)
        allowances = _amount(dto.allowances)
        deductions = _amount(dto.deductions)
        tax_deduction = _amount(dto.tax_deduction)

        if base_salary < 0:
            errors.append("Base salary cannot be negative")
        elif base_salary > MAX_BASE_SALARY:
            errors.append("Base salary cannot exceed 10,000,000")

        if overtime < 0:
            errors.append("Overtime cannot be negative")
        elif overtime > MAX_OVERTIME:
            errors.append("Overtime amount is unreasonably high")

        if bonus < 0:
            errors.append("Bonus cannot be negative")
        elif bonus > MAX_BONUS:
            errors.append("Bonus amount is unreasonably high")

        if allowances < 0:
            errors.append("Allowances cannot be negative")
        elif allowances > MAX_ALLOWANCES:
            errors.append("Allowances amount is unreasonably high")

        if deductions < 0:
            errors.append("Deductions cannot be negative")

        if tax_deduction < 0:
            errors.append("Tax deduction cannot be negative")

        gross_pay = base_salary + overtime + bonus + allowances
        if deductions + tax_deduction > gross_pay:
            errors.append("Total deductions cannot exceed gross pay")

        if dto.notes and len(dto.notes) > NOTES_MAX_LENGTH:
            errors.append(f"Notes cannot exceed {NOTES_MAX_LENGTH} characters")

    def _check_items(self, items: Sequence[PayrollItemCreate], errors: List[str]) -> None:
        for index, item in enumerate(items or [], start=1):
            prefix = f"Payroll item {index}: "

            if not item.payroll_item_type_id or item.payroll_item_type_id <= 0:
                errors.append(f"{prefix}Payroll item type is required")
            else:
                item_type = self.uow.payroll_item_types.get_by_id(item.payroll_item_type_id)
                if item_type is None:
                    errors.append(f"{prefix}Invalid payroll item type")
                elif not item_type.is_active:
                    errors.append(f"{prefix}Selected payroll item type is inactive")

            if not item.description or not item.description.strip():
                errors.append(f"{prefix}Description is required")
            elif len(item.description) > ITEM_DESCRIPTION_MAX_LENGTH:
                errors.append(f"{prefix}Description cannot exceed {ITEM_DESCRIPTION_MAX_LENGTH} characters")

            amount = _amount(item.amount)
            if amount < 0:
                errors.append(f"{prefix}Amount cannot be negative")
            elif amount > MAX_ITEM_AMOUNT:
                errors.append(f"{prefix}Amount is unreasonably high")
