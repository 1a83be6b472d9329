from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from payroll_api.database import SessionLocal
from payroll_api.models.employee import Employee
from payroll_api.models.payroll import Payroll
from payroll_api.models.payroll_item import PayrollItem


def _employee(db, code: str = "CK-1") -> Employee:
    employee = Employee(
        employee_code=code,
        employee_number=code,
        first_name="Check",
        last_name="Constraint",
        email=f"{code.lower()}@example.com",
        date_of_birth=date(1990, 1, 1),
        hire_date=date(2020, 1, 1),
        base_salary=Decimal("1000"),
    )
    db.add(employee)
    db.flush()
    return employee


def test_unique_constraint_blocks_second_payroll_for_period():
    db = SessionLocal()
    try:
        employee = _employee(db)
        db.add(Payroll(employee_id=employee.id, pay_period_month=7, pay_period_year=2025))
        db.flush()

        db.add(Payroll(employee_id=employee.id, pay_period_month=7, pay_period_year=2025))

        with pytest.raises(IntegrityError):
            db.commit()
    finally:
        db.rollback()
        db.close()


def test_check_constraint_blocks_out_of_range_month():
    db = SessionLocal()
    try:
        employee = _employee(db)
        db.add(Payroll(employee_id=employee.id, pay_period_month=13, pay_period_year=2025))

        with pytest.raises(IntegrityError):
            db.commit()
    finally:
        db.rollback()
        db.close()


def test_check_constraint_blocks_negative_amounts():
    db = SessionLocal()
    try:
        employee = _employee(db)
        db.add(
            Payroll(
                employee_id=employee.id,
                pay_period_month=7,
                pay_period_year=2025,
                bonus=Decimal("-1"),  # should fail ck_payrolls_amounts_nonnegative
            )
        )

        with pytest.raises(IntegrityError):
            db.commit()
    finally:
        db.rollback()
        db.close()


def test_check_constraint_blocks_unknown_status():
    db = SessionLocal()
    try:
        employee = _employee(db)
        employee.status = "Retired"

        with pytest.raises(IntegrityError):
            db.commit()
    finally:
        db.rollback()
        db.close()


def test_check_constraint_blocks_negative_item_amount():
    db = SessionLocal()
    try:
        employee = _employee(db)
        payroll = Payroll(employee_id=employee.id, pay_period_month=7, pay_period_year=2025)
        db.add(payroll)
        db.flush()

        db.add(
            PayrollItem(
                payroll_id=payroll.id,
                payroll_item_type_id=1,
                description="Negative",
                amount=Decimal("-0.01"),
            )
        )

        with pytest.raises(IntegrityError):
            db.commit()
    finally:
        db.rollback()
        db.close()
