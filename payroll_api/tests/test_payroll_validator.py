from decimal import Decimal

import pytest

from payroll_api.models.employee import EmployeeStatus
from payroll_api.models.payroll import PayrollStatus
from payroll_api.schemas.payroll import PayrollCreate, PayrollItemCreate, PayrollUpdate
from payroll_api.validators.payroll_validator import PayrollValidator


@pytest.fixture
def validator(uow, clock):
    return PayrollValidator(uow, clock)


def _create_dto(employee_id: int, month: int = 7, year: int = 2025, **overrides) -> PayrollCreate:
    values = {
        "employee_id": employee_id,
        "pay_period_month": month,
        "pay_period_year": year,
        "base_salary": Decimal("5000"),
        "overtime": Decimal("100"),
        "deductions": Decimal("250"),
        "tax_deduction": Decimal("500"),
    }
    values.update(overrides)
    return PayrollCreate(**values)


def test_valid_payroll_passes(validator, make_employee):
    employee = make_employee()

    result = validator.validate_create(_create_dto(employee.id))

    assert result.is_valid, result.errors


def test_duplicate_period_is_rejected_with_period_label(validator, make_employee, make_payroll):
    employee = make_employee(id=5)
    make_payroll(employee, month=7, year=2025)

    result = validator.validate_create(_create_dto(5, month=7, year=2025))

    assert result.errors == ["Payroll for this employee already exists for July 2025"]


def test_deductions_cannot_exceed_gross(validator, make_employee):
    employee = make_employee()

    result = validator.validate_create(
        _create_dto(
            employee.id,
            base_salary=Decimal("1000"),
            overtime=Decimal("0"),
            deductions=Decimal("800"),
            tax_deduction=Decimal("300"),
        )
    )

    assert result.errors == ["Total deductions cannot exceed gross pay"]


def test_period_more_than_one_month_ahead(validator, make_employee):
    employee = make_employee()

    next_month = validator.validate_create(_create_dto(employee.id, month=8, year=2025))
    two_ahead = validator.validate_create(_create_dto(employee.id, month=9, year=2025))

    assert next_month.is_valid, next_month.errors
    assert two_ahead.errors == ["Cannot create payroll more than one month in advance"]


def test_out_of_range_period_skips_advance_check(validator, make_employee):
    employee = make_employee()

    result = validator.validate_create(_create_dto(employee.id, month=13, year=3001))

    assert "Pay period month must be between 1 and 12" in result.errors
    assert "Pay period year must be between 2000 and 3000" in result.errors
    assert "Cannot create payroll more than one month in advance" not in result.errors


def test_employee_must_exist_and_be_active(validator, make_employee):
    inactive = make_employee(status=EmployeeStatus.INACTIVE.value)

    missing = validator.validate_create(_create_dto(9999))
    not_active = validator.validate_create(_create_dto(inactive.id))
    absent = validator.validate_create(_create_dto(0))

    assert missing.errors == ["Selected employee does not exist"]
    assert not_active.errors == ["Cannot create payroll for inactive employee"]
    assert absent.errors == ["Employee is required"]


def test_amount_ceilings_and_notes(validator, make_employee):
    employee = make_employee()

    result = validator.validate_create(
        _create_dto(
            employee.id,
            base_salary=Decimal("10000001"),
            overtime=Decimal("1000001"),
            bonus=Decimal("-1"),
            notes="x" * 1001,
        )
    )

    assert "Base salary cannot exceed 10,000,000" in result.errors
    assert "Overtime amount is unreasonably high" in result.errors
    assert "Bonus cannot be negative" in result.errors
    assert "Notes cannot exceed 1000 characters" in result.errors


def test_item_errors_are_prefixed_with_position(validator, uow, make_employee):
    employee = make_employee()
    bonus_type = uow.payroll_item_types.get_by_code("BONUS")

    result = validator.validate_create(
        _create_dto(
            employee.id,
            payroll_items=[
                PayrollItemCreate(payroll_item_type_id=bonus_type.id, description="Q2 bonus", amount=Decimal("50")),
                PayrollItemCreate(payroll_item_type_id=0, description="", amount=Decimal("-5")),
                PayrollItemCreate(payroll_item_type_id=9999, description="Ghost", amount=Decimal("1")),
            ],
        )
    )

    assert result.errors == [
        "Payroll item 2: Payroll item type is required",
        "Payroll item 2: Description is required",
        "Payroll item 2: Amount cannot be negative",
        "Payroll item 3: Invalid payroll item type",
    ]


def test_inactive_item_type_is_rejected(validator, db, uow, make_employee):
    employee = make_employee()
    loan_type = uow.payroll_item_types.get_by_code("LOAN")
    loan_type.is_active = False
    db.commit()

    result = validator.validate_create(
        _create_dto(
            employee.id,
            payroll_items=[PayrollItemCreate(payroll_item_type_id=loan_type.id, description="Loan", amount=Decimal("10"))],
        )
    )

    assert result.errors == ["Payroll item 1: Selected payroll item type is inactive"]


def test_paid_payroll_is_frozen(validator, make_employee, make_payroll):
    payroll = make_payroll(make_employee(), status=PayrollStatus.PAID.value)

    result = validator.validate_update(payroll.id, PayrollUpdate(base_salary=Decimal("1")))

    assert result.errors == ["Cannot update paid payroll"]


def test_processed_payroll_can_still_be_updated(validator, make_employee, make_payroll):
    payroll = make_payroll(make_employee(), status=PayrollStatus.PROCESSED.value)

    result = validator.validate_update(payroll.id, PayrollUpdate(base_salary=Decimal("4000")))

    assert result.is_valid


def test_delete_rules(validator, make_employee, make_payroll):
    employee = make_employee()
    draft = make_payroll(employee, month=5)
    processed = make_payroll(employee, month=6, status=PayrollStatus.PROCESSED.value)

    assert validator.validate_delete(draft.id).is_valid
    assert validator.validate_delete(processed.id).errors == ["Cannot delete processed or paid payroll"]
    assert validator.validate_delete(12345).errors == ["Payroll not found"]


def test_draft_cannot_be_marked_paid(validator, make_employee, make_payroll):
    payroll = make_payroll(make_employee())

    result = validator.validate_mark_paid(payroll.id)

    assert result.errors == ["Only processed payrolls can be marked as paid"]


def test_process_requires_draft_and_active_employee(validator, db, make_employee, make_payroll):
    employee = make_employee()
    paid = make_payroll(employee, month=5, status=PayrollStatus.PAID.value)
    draft = make_payroll(employee, month=6)

    assert validator.validate_process(paid.id).errors == ["Only draft payrolls can be processed"]
    assert validator.validate_process(draft.id).is_valid

    employee.status = EmployeeStatus.ON_LEAVE.value
    db.commit()

    assert validator.validate_process(draft.id).errors == ["Cannot process payroll for inactive employee"]
