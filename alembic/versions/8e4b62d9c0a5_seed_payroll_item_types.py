"""seed payroll item types

Revision ID: 8e4b62d9c0a5
Revises: 3c1f0a7d2b91
Create Date: 2026-10-18 09:30:02.481907

"""
from datetime import datetime
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8e4b62d9c0a5"
down_revision: Union[str, Sequence[str], None] = "3c1f0a7d2b91"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ITEM_TYPES = [
    # (code, name, description, is_earning, is_deduction)
    ("BASIC", "Basic Salary", "Regular monthly salary", True, False),
    ("OVERTIME", "Overtime Pay", "Pay for hours beyond the regular schedule", True, False),
    ("BONUS", "Bonus", "Performance or discretionary bonus", True, False),
    ("ALLOWANCE", "Allowance", "Transport, meal or housing allowance", True, False),
    ("TAX", "Income Tax", "Withholding tax", False, True),
    ("INSURANCE", "Insurance", "Health or social insurance contribution", False, True),
    ("LOAN", "Loan Repayment", "Repayment of an employee loan", False, True),
    ("OTHER_DEDUCTION", "Other Deduction", "Any other deduction", False, True),
]

payroll_item_types = sa.table(
    "payroll_item_types",
    sa.column("code", sa.String),
    sa.column("name", sa.String),
    sa.column("description", sa.String),
    sa.column("is_earning", sa.Boolean),
    sa.column("is_deduction", sa.Boolean),
    sa.column("is_active", sa.Boolean),
    sa.column("created_at", sa.DateTime),
)


def upgrade() -> None:
    """Upgrade schema."""
    created_at = datetime(2026, 1, 1)
    op.bulk_insert(
        payroll_item_types,
        [
            {
                "code": code,
                "name": name,
                "description": description,
                "is_earning": is_earning,
                "is_deduction": is_deduction,
                "is_active": True,
                "created_at": created_at,
            }
            for code, name, description, is_earning, is_deduction in ITEM_TYPES
        ],
    )


def downgrade() -> None:
    """Downgrade schema."""
    codes = ", ".join(f"'{code}'" for code, *_ in ITEM_TYPES)
    op.execute(f"DELETE FROM payroll_item_types WHERE code IN ({codes})")
