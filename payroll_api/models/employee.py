from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, Numeric, String

from payroll_api.database import Base


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    TERMINATED = "Terminated"
    ON_LEAVE = "OnLeave"


class Employee(Base):
    __tablename__ = "employees"

    __table_args__ = (
        CheckConstraint("base_salary >= 0", name="ck_employees_base_salary_nonnegative"),
        CheckConstraint(
            "status in ('Active','Inactive','Terminated','OnLeave')",
            name="ck_employees_status_valid",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    employee_code = Column(String(50), nullable=False, unique=True)
    employee_number = Column(String(20), nullable=False, unique=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone_number = Column(String(20), nullable=True)
    address = Column(String(500), nullable=True)
    position = Column(String(100), nullable=False, default="")
    date_of_birth = Column(Date, nullable=False)
    hire_date = Column(Date, nullable=False)
    base_salary = Column(Numeric(18, 2), nullable=False)
    status = Column(String(20), nullable=False, default=EmployeeStatus.ACTIVE.value, index=True)
    # Required by EmployeeValidator; nullable only so that deleting a department
    # keeps the records of its former (non-active) employees.
    department_id = Column(
        Integer,
        ForeignKey("departments.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE.value
