from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from payroll_api.models.employee import EmployeeStatus
from payroll_api.schemas.common import Money, strip_text


class EmployeeUpdate(BaseModel):
    # Fields are lenient on purpose; EmployeeValidator reports every problem at once.
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: Optional[str] = None
    address: Optional[str] = None
    position: str = ""
    date_of_birth: Optional[date] = None
    hire_date: Optional[date] = None
    base_salary: Money = Decimal("0")
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    department_id: int = 0

    @field_validator("first_name", "last_name", "email", "position")
    @classmethod
    def strip_names(cls, value: str) -> str:
        return strip_text(value)


class EmployeeCreate(EmployeeUpdate):
    employee_code: str = ""
    employee_number: Optional[str] = None

    @field_validator("employee_code", "employee_number")
    @classmethod
    def strip_identifiers(cls, value: Optional[str]) -> Optional[str]:
        return strip_text(value)


class EmployeeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_code: str
    employee_number: str
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: Optional[str]
    address: Optional[str]
    position: str
    date_of_birth: date
    hire_date: date
    base_salary: Decimal
    status: str
    department_id: Optional[int]
    department_name: str = ""
    created_at: datetime
    updated_at: Optional[datetime]
