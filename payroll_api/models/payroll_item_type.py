from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from payroll_api.database import Base


class PayrollItemType(Base):
    __tablename__ = "payroll_item_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    code = Column(String(50), nullable=False, unique=True)
    description = Column(String(500), nullable=True)
    is_earning = Column(Boolean, nullable=False, default=True)
    is_deduction = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
