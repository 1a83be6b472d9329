"""create payroll admin schema

Revision ID: 3c1f0a7d2b91
Revises:
Create Date: 2026-10-18 09:12:44.120311

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f0a7d2b91"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

NOW = sa.text("CURRENT_TIMESTAMP")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "departments",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=NOW),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("name", name="uq_departments_name"),
        sa.UniqueConstraint("code", name="uq_departments_code"),
    )
    op.create_index("ix_departments_id", "departments", ["id"], unique=False)

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("employee_code", sa.String(length=50), nullable=False),
        sa.Column("employee_number", sa.String(length=20), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone_number", sa.String(length=20), nullable=True),
        sa.Column("address", sa.String(length=500), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=False, server_default=""),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("hire_date", sa.Date(), nullable=False),
        sa.Column("base_salary", sa.Numeric(18, 2), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Active"),
        sa.Column("department_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=NOW),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ["department_id"],
            ["departments.id"],
            name="fk_employees_department_id",
            ondelete="SET NULL",
        ),
        sa.UniqueConstraint("employee_code", name="uq_employees_employee_code"),
        sa.UniqueConstraint("employee_number", name="uq_employees_employee_number"),
        sa.UniqueConstraint("email", name="uq_employees_email"),
        sa.CheckConstraint("base_salary >= 0", name="ck_employees_base_salary_nonnegative"),
        sa.CheckConstraint(
            "status in ('Active','Inactive','Terminated','OnLeave')",
            name="ck_employees_status_valid",
        ),
    )
    op.create_index("ix_employees_id", "employees", ["id"], unique=False)
    op.create_index("ix_employees_status", "employees", ["status"], unique=False)
    op.create_index("ix_employees_department_id", "employees", ["department_id"], unique=False)

    op.create_table(
        "payroll_item_types",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("is_earning", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_deduction", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=NOW),
        sa.UniqueConstraint("code", name="uq_payroll_item_types_code"),
    )
    op.create_index("ix_payroll_item_types_id", "payroll_item_types", ["id"], unique=False)

    op.create_table(
        "payrolls",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("pay_period_month", sa.Integer(), nullable=False),
        sa.Column("pay_period_year", sa.Integer(), nullable=False),
        sa.Column("base_salary", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("overtime", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("bonus", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("allowances", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("deductions", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("tax_deduction", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("gross_pay", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("net_pay", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="Draft"),
        sa.Column("processed_date", sa.DateTime(), nullable=True),
        sa.Column("paid_date", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.String(length=1000), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=NOW),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(
            ["employee_id"],
            ["employees.id"],
            name="fk_payrolls_employee_id",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "employee_id",
            "pay_period_month",
            "pay_period_year",
            name="uq_payrolls_employee_period",
        ),
        sa.CheckConstraint("pay_period_month BETWEEN 1 AND 12", name="ck_payrolls_month_range"),
        sa.CheckConstraint("pay_period_year BETWEEN 2000 AND 3000", name="ck_payrolls_year_range"),
        sa.CheckConstraint(
            "base_salary >= 0 AND overtime >= 0 AND bonus >= 0 AND allowances >= 0 "
            "AND deductions >= 0 AND tax_deduction >= 0",
            name="ck_payrolls_amounts_nonnegative",
        ),
        sa.CheckConstraint(
            "status in ('Draft','Processed','Paid','Cancelled')",
            name="ck_payrolls_status_valid",
        ),
    )
    op.create_index("ix_payrolls_id", "payrolls", ["id"], unique=False)
    op.create_index("ix_payrolls_employee_id", "payrolls", ["employee_id"], unique=False)
    op.create_index("ix_payrolls_status", "payrolls", ["status"], unique=False)
    op.create_index(
        "ix_payrolls_period",
        "payrolls",
        ["pay_period_year", "pay_period_month"],
        unique=False,
    )

    op.create_table(
        "payroll_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("payroll_id", sa.Integer(), nullable=False),
        sa.Column("payroll_item_type_id", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=False),
        sa.Column("amount", sa.Numeric(18, 2), nullable=False),
        sa.Column("is_deduction", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=NOW),
        sa.ForeignKeyConstraint(
            ["payroll_id"],
            ["payrolls.id"],
            name="fk_payroll_items_payroll_id",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["payroll_item_type_id"],
            ["payroll_item_types.id"],
            name="fk_payroll_items_payroll_item_type_id",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint("amount >= 0", name="ck_payroll_items_amount_nonnegative"),
    )
    op.create_index("ix_payroll_items_payroll_id", "payroll_items", ["payroll_id"], unique=False)
    op.create_index(
        "ix_payroll_items_payroll_item_type_id",
        "payroll_items",
        ["payroll_item_type_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_payroll_items_payroll_item_type_id", table_name="payroll_items")
    op.drop_index("ix_payroll_items_payroll_id", table_name="payroll_items")
    op.drop_table("payroll_items")

    op.drop_index("ix_payrolls_period", table_name="payrolls")
    op.drop_index("ix_payrolls_status", table_name="payrolls")
    op.drop_index("ix_payrolls_employee_id", table_name="payrolls")
    op.drop_index("ix_payrolls_id", table_name="payrolls")
    op.drop_table("payrolls")

    op.drop_index("ix_payroll_item_types_id", table_name="payroll_item_types")
    op.drop_table("payroll_item_types")

    op.drop_index("ix_employees_department_id", table_name="employees")
    op.drop_index("ix_employees_status", table_name="employees")
    op.drop_index("ix_employees_id", table_name="employees")
    op.drop_table("employees")

    op.drop_index("ix_departments_id", table_name="departments")
    op.drop_table("departments")
