from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String

from payroll_api.database import Base


class PayrollItem(Base):
    __tablename__ = "payroll_items"

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payroll_items_amount_nonnegative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    payroll_id = Column(
        Integer,
        ForeignKey("payrolls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    payroll_item_type_id = Column(
        Integer,
        ForeignKey("payroll_item_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    description = Column(String(255), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    is_deduction = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
