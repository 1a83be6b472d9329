import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional

from payroll_api.core.clock import Clock
from payroll_api.mappings import paged, payroll_item_type_to_dict, payroll_to_dict
from payroll_api.models.employee import Employee
from payroll_api.models.payroll import InvalidPayrollState, Payroll, PayrollStatus, month_name
from payroll_api.models.payroll_item import PayrollItem
from payroll_api.repositories.unit_of_work import UnitOfWork
from payroll_api.schemas.payroll import PayrollCreate, PayrollItemCreate, PayrollUpdate
from payroll_api.services.result import VALIDATION_FAILED, ServiceResult
from payroll_api.validators.payroll_validator import MAX_BASE_SALARY, PayrollValidator

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class GenerationOutcome(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class EmployeeGenerationResult:
    employee_id: int
    employee_code: str
    outcome: GenerationOutcome
    payroll_id: Optional[int] = None
    reason: Optional[str] = None


@dataclass
class GenerationReport:
    pay_period_month: int
    pay_period_year: int
    outcomes: List[EmployeeGenerationResult] = field(default_factory=list)

    def _with(self, outcome: GenerationOutcome) -> List[EmployeeGenerationResult]:
        return [o for o in self.outcomes if o.outcome == outcome]

    @property
    def created_count(self) -> int:
        return len(self._with(GenerationOutcome.CREATED))

    @property
    def skipped_employee_ids(self) -> List[int]:
        return [o.employee_id for o in self._with(GenerationOutcome.SKIPPED)]

    @property
    def errors(self) -> List[str]:
        return [
            f"Failed to generate payroll for employee {o.employee_code}: {o.reason}"
            for o in self._with(GenerationOutcome.FAILED)
        ]

    def to_dict(self) -> dict:
        return {
            "pay_period_month": self.pay_period_month,
            "pay_period_year": self.pay_period_year,
            "created_count": self.created_count,
            "skipped_count": len(self.skipped_employee_ids),
            "failed_count": len(self.errors),
            "skipped_employee_ids": self.skipped_employee_ids,
            "errors": self.errors,
            "outcomes": [
                {
                    "employee_id": o.employee_id,
                    "employee_code": o.employee_code,
                    "outcome": o.outcome.value,
                    "payroll_id": o.payroll_id,
                    "reason": o.reason,
                }
                for o in self.outcomes
            ],
        }


def _period_errors(month: int, year: int) -> List[str]:
    errors = []
    if not 1 <= month <= 12:
        errors.append("Pay period month must be between 1 and 12")
    if not 2000 <= year <= 3000:
        errors.append("Pay period year must be between 2000 and 3000")
    return errors


class PayrollService:
    """
    Orchestrates payroll records: validation, persistence and state transitions.

    Validation failures come back as a failed ServiceResult; storage faults are
    rolled back and re-raised to the caller.
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock
        self.validator = PayrollValidator(uow, clock)

    def _to_dict(self, payroll: Payroll, with_items: bool = False) -> dict:
        employee = self.uow.employees.get_by_id(payroll.employee_id)
        department_name = ""
        if employee is not None and employee.department_id is not None:
            department = self.uow.departments.get_by_id(employee.department_id)
            department_name = department.name if department is not None else ""

        items: List[PayrollItem] = []
        type_names: Dict[int, str] = {}
        if with_items:
            items = self.uow.payroll_items.get_by_payroll(payroll.id)
            for item in items:
                if item.payroll_item_type_id not in type_names:
                    item_type = self.uow.payroll_item_types.get_by_id(item.payroll_item_type_id)
                    type_names[item.payroll_item_type_id] = item_type.name if item_type is not None else ""

        return payroll_to_dict(payroll, employee, department_name, items, type_names)

    def _items_for(self, payroll: Payroll, items: Iterable[PayrollItemCreate]) -> List[PayrollItem]:
        now = self.clock.now()
        return [
            PayrollItem(
                payroll_id=payroll.id,
                payroll_item_type_id=item.payroll_item_type_id,
                description=item.description.strip(),
                amount=item.amount,
                is_deduction=item.is_deduction,
                created_at=now,
            )
            for item in items
        ]

    @staticmethod
    def _apply_amounts(payroll: Payroll, dto: PayrollUpdate) -> None:
        payroll.base_salary = dto.base_salary
        payroll.overtime = dto.overtime
        payroll.bonus = dto.bonus
        payroll.allowances = dto.allowances
        payroll.deductions = dto.deductions
        payroll.tax_deduction = dto.tax_deduction
        payroll.notes = dto.notes
        payroll.compute_gross_pay()
        payroll.compute_net_pay()

    # Queries

    def search_payrolls(
        self,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        page_number: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> ServiceResult:
        page_number = max(int(page_number), 1)
        page_size = min(max(int(page_size), 1), MAX_PAGE_SIZE)

        rows, total = self.uow.payrolls.search(
            employee_id=employee_id,
            month=month,
            year=year,
            status=status,
            limit=page_size,
            offset=(page_number - 1) * page_size,
        )
        return ServiceResult.ok(paged([self._to_dict(p) for p in rows], total, page_number, page_size))

    def get_payroll(self, payroll_id: int) -> ServiceResult:
        payroll = self.uow.payrolls.get_by_id(payroll_id)
        if payroll is None:
            logger.warning("Payroll not found", extra={"payroll_id": payroll_id})
            return ServiceResult.missing("Payroll")
        return ServiceResult.ok(self._to_dict(payroll, with_items=True))

    def get_payrolls_by_employee(self, employee_id: int) -> ServiceResult:
        rows = self.uow.payrolls.get_by_employee(employee_id)
        return ServiceResult.ok([self._to_dict(p) for p in rows])

    def get_payrolls_by_period(self, month: int, year: int) -> ServiceResult:
        errors = _period_errors(month, year)
        if errors:
            return ServiceResult.fail(VALIDATION_FAILED, errors)
        rows = self.uow.payrolls.get_by_period(month, year)
        return ServiceResult.ok([self._to_dict(p) for p in rows])

    def get_total_payroll_amount(self, month: int, year: int) -> ServiceResult:
        errors = _period_errors(month, year)
        if errors:
            return ServiceResult.fail(VALIDATION_FAILED, errors)
        total = self.uow.payrolls.get_total_net_pay(month, year)
        return ServiceResult.ok(
            {"pay_period_month": month, "pay_period_year": year, "total_net_pay": total}
        )

    def list_payroll_item_types(self, active_only: bool = True) -> ServiceResult:
        if active_only:
            rows = self.uow.payroll_item_types.get_active()
        else:
            rows = self.uow.payroll_item_types.get_all()
        return ServiceResult.ok([payroll_item_type_to_dict(t) for t in rows])

    # Mutations

    def create_payroll(self, dto: PayrollCreate, message: str = "Payroll created successfully") -> ServiceResult:
        validation = self.validator.validate_create(dto)
        if not validation.is_valid:
            logger.warning(
                "Payroll creation validation failed",
                extra={"employee_id": dto.employee_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        now = self.clock.now()
        payroll = Payroll(
            employee_id=dto.employee_id,
            pay_period_month=dto.pay_period_month,
            pay_period_year=dto.pay_period_year,
            status=PayrollStatus.DRAFT.value,
            created_at=now,
        )
        self._apply_amounts(payroll, dto)

        try:
            self.uow.payrolls.add(payroll)
            self.uow.flush()
            self.uow.payroll_items.add_all(self._items_for(payroll, dto.payroll_items))
            self.uow.commit()
        except Exception:
            logger.exception("Failed to create payroll")
            self.uow.rollback()
            raise

        logger.info(
            "Created payroll",
            extra={
                "payroll_id": payroll.id,
                "employee_id": payroll.employee_id,
                "pay_period": payroll.pay_period,
            },
        )
        return ServiceResult.ok(self._to_dict(payroll, with_items=True), message)

    def update_payroll(self, payroll_id: int, dto: PayrollUpdate) -> ServiceResult:
        validation = self.validator.validate_update(payroll_id, dto)
        if not validation.is_valid:
            logger.warning(
                "Payroll update validation failed",
                extra={"payroll_id": payroll_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        payroll = self.uow.payrolls.get_by_id(payroll_id)
        self._apply_amounts(payroll, dto)
        payroll.updated_at = self.clock.now()

        try:
            # Items are replaced as a whole.
            self.uow.payroll_items.delete_by_payroll(payroll.id)
            self.uow.payroll_items.add_all(self._items_for(payroll, dto.payroll_items))
            self.uow.commit()
        except Exception:
            logger.exception("Failed to update payroll")
            self.uow.rollback()
            raise

        logger.info("Updated payroll", extra={"payroll_id": payroll_id})
        return ServiceResult.ok(self._to_dict(payroll, with_items=True), "Payroll updated successfully")

    def delete_payroll(self, payroll_id: int) -> ServiceResult:
        validation = self.validator.validate_delete(payroll_id)
        if not validation.is_valid:
            logger.warning(
                "Payroll deletion validation failed",
                extra={"payroll_id": payroll_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        payroll = self.uow.payrolls.get_by_id(payroll_id)
        try:
            self.uow.payroll_items.delete_by_payroll(payroll.id)
            self.uow.payrolls.delete(payroll)
            self.uow.commit()
        except Exception:
            logger.exception("Failed to delete payroll")
            self.uow.rollback()
            raise

        logger.info("Deleted payroll", extra={"payroll_id": payroll_id})
        return ServiceResult.ok(True, "Payroll deleted successfully")

    def process_payroll(self, payroll_id: int) -> ServiceResult:
        validation = self.validator.validate_process(payroll_id)
        if not validation.is_valid:
            logger.warning(
                "Payroll processing validation failed",
                extra={"payroll_id": payroll_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        payroll = self.uow.payrolls.get_by_id(payroll_id)
        try:
            payroll.process(self.clock.now())
        except InvalidPayrollState as exc:
            return ServiceResult.fail(VALIDATION_FAILED, [str(exc)])

        try:
            self.uow.commit()
        except Exception:
            logger.exception("Failed to process payroll")
            self.uow.rollback()
            raise

        logger.info("Processed payroll", extra={"payroll_id": payroll_id, "net_pay": str(payroll.net_pay)})
        return ServiceResult.ok(self._to_dict(payroll, with_items=True), "Payroll processed successfully")

    def mark_payroll_paid(self, payroll_id: int) -> ServiceResult:
        validation = self.validator.validate_mark_paid(payroll_id)
        if not validation.is_valid:
            logger.warning(
                "Payroll payment validation failed",
                extra={"payroll_id": payroll_id, "errors": validation.errors},
            )
            return ServiceResult.invalid(validation)

        payroll = self.uow.payrolls.get_by_id(payroll_id)
        try:
            payroll.mark_paid(self.clock.now())
        except InvalidPayrollState as exc:
            return ServiceResult.fail(VALIDATION_FAILED, [str(exc)])

        try:
            self.uow.commit()
        except Exception:
            logger.exception("Failed to mark payroll paid")
            self.uow.rollback()
            raise

        logger.info("Marked payroll as paid", extra={"payroll_id": payroll_id})
        return ServiceResult.ok(self._to_dict(payroll, with_items=True), "Payroll marked as paid successfully")

    # Generation

    def generate_payroll_for_employee(self, employee_id: int, month: int, year: int) -> ServiceResult:
        employee = self.uow.employees.get_by_id(employee_id)
        if employee is None:
            logger.warning("Employee not found for payroll generation", extra={"employee_id": employee_id})
            return ServiceResult.missing("Employee")

        dto = PayrollCreate(
            employee_id=employee.id,
            pay_period_month=month,
            pay_period_year=year,
            base_salary=employee.base_salary,
        )
        return self.create_payroll(dto, "Payroll generated successfully")

    def _build_generated_payroll(self, employee: Employee, month: int, year: int) -> Payroll:
        if employee.base_salary is None:
            raise ValueError("Base salary is missing")

        base_salary = Decimal(str(employee.base_salary))
        if base_salary < 0:
            raise ValueError("Base salary cannot be negative")
        if base_salary > MAX_BASE_SALARY:
            raise ValueError("Base salary cannot exceed 10,000,000")

        payroll = Payroll(
            employee_id=employee.id,
            pay_period_month=month,
            pay_period_year=year,
            base_salary=base_salary,
            overtime=Decimal("0"),
            bonus=Decimal("0"),
            allowances=Decimal("0"),
            deductions=Decimal("0"),
            tax_deduction=Decimal("0"),
            status=PayrollStatus.DRAFT.value,
            created_at=self.clock.now(),
        )
        payroll.compute_gross_pay()
        payroll.compute_net_pay()
        return payroll

    def generate_payrolls_for_period(self, month: int, year: int) -> ServiceResult:
        errors = _period_errors(month, year)
        if errors:
            return ServiceResult.fail(VALIDATION_FAILED, errors)

        period = f"{month_name(month)} {year}"
        report = GenerationReport(pay_period_month=month, pay_period_year=year)
        created = []

        try:
            with self.uow.transaction():
                with_payroll = {p.employee_id for p in self.uow.payrolls.get_by_period(month, year)}

                for employee in self.uow.employees.get_active():
                    if employee.id in with_payroll:
                        report.outcomes.append(
                            EmployeeGenerationResult(employee.id, employee.employee_code, GenerationOutcome.SKIPPED)
                        )
                        continue

                    try:
                        payroll = self._build_generated_payroll(employee, month, year)
                    except ValueError as exc:
                        report.outcomes.append(
                            EmployeeGenerationResult(
                                employee.id,
                                employee.employee_code,
                                GenerationOutcome.FAILED,
                                reason=str(exc),
                            )
                        )
                        continue

                    self.uow.payrolls.add(payroll)
                    outcome = EmployeeGenerationResult(employee.id, employee.employee_code, GenerationOutcome.CREATED)
                    report.outcomes.append(outcome)
                    created.append((outcome, payroll))

                self.uow.flush()
        except Exception:
            logger.exception("Failed to generate payrolls for period", extra={"pay_period": period})
            raise

        for outcome, payroll in created:
            outcome.payroll_id = payroll.id

        for message in report.errors:
            logger.error(message, extra={"pay_period": period})

        logger.info(
            "Generated payrolls for period",
            extra={
                "pay_period": period,
                "created_count": report.created_count,
                "skipped_count": len(report.skipped_employee_ids),
                "failed_count": len(report.errors),
            },
        )
        return ServiceResult.ok(
            report.to_dict(),
            f"Generated {report.created_count} payrolls for {period}",
        )
