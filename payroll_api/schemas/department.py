from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from payroll_api.schemas.common import strip_text


class DepartmentCreate(BaseModel):
    name: str = ""
    code: str = ""
    description: Optional[str] = None
    is_active: bool = True

    @field_validator("name", "code")
    @classmethod
    def strip_identifiers(cls, value: str) -> str:
        return strip_text(value)


class DepartmentUpdate(DepartmentCreate):
    pass


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    description: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime]
    employee_count: int = 0
