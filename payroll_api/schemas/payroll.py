from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from payroll_api.schemas.common import Money


class PayrollItemCreate(BaseModel):
    payroll_item_type_id: int = 0
    description: str = ""
    amount: Money = Decimal("0")
    is_deduction: bool = False


class PayrollUpdate(BaseModel):
    base_salary: Money = Decimal("0")
    overtime: Money = Decimal("0")
    bonus: Money = Decimal("0")
    allowances: Money = Decimal("0")
    deductions: Money = Decimal("0")
    tax_deduction: Money = Decimal("0")
    notes: Optional[str] = None
    payroll_items: List[PayrollItemCreate] = Field(default_factory=list)


class PayrollCreate(PayrollUpdate):
    employee_id: int = 0
    pay_period_month: int = 0
    pay_period_year: int = 0


class PayrollItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    payroll_item_type_id: int
    payroll_item_type_name: str = ""
    description: str
    amount: Decimal
    is_deduction: bool
    created_at: datetime


class PayrollResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: int
    employee_name: str = ""
    employee_code: str = ""
    department_name: str = ""
    pay_period_month: int
    pay_period_year: int
    pay_period: str
    base_salary: Decimal
    overtime: Decimal
    bonus: Decimal
    allowances: Decimal
    deductions: Decimal
    tax_deduction: Decimal
    gross_pay: Decimal
    net_pay: Decimal
    status: str
    processed_date: Optional[datetime]
    paid_date: Optional[datetime]
    notes: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime]
    payroll_items: List[PayrollItemResponse] = Field(default_factory=list)


class PayrollItemTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    description: Optional[str]
    is_earning: bool
    is_deduction: bool
    is_active: bool


class GenerationOutcomeResponse(BaseModel):
    employee_id: int
    employee_code: str
    outcome: str
    payroll_id: Optional[int] = None
    reason: Optional[str] = None


class GenerationReportResponse(BaseModel):
    pay_period_month: int
    pay_period_year: int
    created_count: int
    skipped_count: int
    failed_count: int
    skipped_employee_ids: List[int] = Field(default_factory=list)
    errors: List[str]
    outcomes: List[GenerationOutcomeResponse]


class PayrollTotalResponse(BaseModel):
    pay_period_month: int
    pay_period_year: int
    total_net_pay: Decimal
