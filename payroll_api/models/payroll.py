from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, UniqueConstraint

from payroll_api.database import Base

MONTH_NAMES = {
    1: "January",
    2: "February",
    3: "March",
    4: "April",
    5: "May",
    6: "June",
    7: "July",
    8: "August",
    9: "September",
    10: "October",
    11: "November",
    12: "December",
}


def month_name(month: int) -> str:
    return MONTH_NAMES.get(month, "Unknown")


class PayrollStatus(str, Enum):
    DRAFT = "Draft"
    PROCESSED = "Processed"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class InvalidPayrollState(ValueError):
    pass


def _money(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class Payroll(Base):
    __tablename__ = "payrolls"

    __table_args__ = (
        # Backstop for the existence pre-check done before inserts.
        UniqueConstraint(
            "employee_id",
            "pay_period_month",
            "pay_period_year",
            name="uq_payrolls_employee_period",
        ),
        CheckConstraint("pay_period_month BETWEEN 1 AND 12", name="ck_payrolls_month_range"),
        CheckConstraint("pay_period_year BETWEEN 2000 AND 3000", name="ck_payrolls_year_range"),
        CheckConstraint(
            "base_salary >= 0 AND overtime >= 0 AND bonus >= 0 AND allowances >= 0 "
            "AND deductions >= 0 AND tax_deduction >= 0",
            name="ck_payrolls_amounts_nonnegative",
        ),
        CheckConstraint(
            "status in ('Draft','Processed','Paid','Cancelled')",
            name="ck_payrolls_status_valid",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    pay_period_month = Column(Integer, nullable=False)
    pay_period_year = Column(Integer, nullable=False)

    base_salary = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    overtime = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    bonus = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    allowances = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    deductions = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    tax_deduction = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    gross_pay = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))
    net_pay = Column(Numeric(18, 2), nullable=False, default=Decimal("0"))

    status = Column(String(20), nullable=False, default=PayrollStatus.DRAFT.value, index=True)
    processed_date = Column(DateTime, nullable=True)
    paid_date = Column(DateTime, nullable=True)
    notes = Column(String(1000), nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    @property
    def pay_period(self) -> str:
        return f"{month_name(self.pay_period_month)} {self.pay_period_year}"

    @property
    def total_deductions(self) -> Decimal:
        return _money(self.deductions) + _money(self.tax_deduction)

    def compute_gross_pay(self) -> Decimal:
        self.gross_pay = (
            _money(self.base_salary)
            + _money(self.overtime)
            + _money(self.bonus)
            + _money(self.allowances)
        )
        return self.gross_pay

    def compute_net_pay(self) -> Decimal:
        """Uses the gross_pay currently assigned; call compute_gross_pay() first."""
        self.net_pay = _money(self.gross_pay) - _money(self.deductions) - _money(self.tax_deduction)
        return self.net_pay

    def process(self, now: datetime) -> None:
        if self.status != PayrollStatus.DRAFT.value:
            raise InvalidPayrollState("Only draft payrolls can be processed")

        self.compute_gross_pay()
        self.compute_net_pay()
        self.status = PayrollStatus.PROCESSED.value
        self.processed_date = now
        self.updated_at = now

    def mark_paid(self, now: datetime) -> None:
        if self.status != PayrollStatus.PROCESSED.value:
            raise InvalidPayrollState("Only processed payrolls can be marked as paid")

        self.status = PayrollStatus.PAID.value
        self.paid_date = now
        self.updated_at = now
