import os
_default_test_secret = "test-jwt-secret-for-pytest-only-0000000000000000"
if len(os.environ.get("JWT_SECRET", "")) < 32:
    os.environ["JWT_SECRET"] = _default_test_secret
os.environ.setdefault("ENV", "test")

import subprocess
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url

PROJECT_ROOT = Path(__file__).resolve().parents[2]
_default_sqlite_path = PROJECT_ROOT / ".pytest_payroll_admin.db"

TEST_DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{_default_sqlite_path}")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from payroll_api import database  # noqa: E402
from payroll_api.core.clock import FixedClock, get_clock  # noqa: E402
from payroll_api.models.department import Department  # noqa: E402
from payroll_api.models.employee import Employee, EmployeeStatus  # noqa: E402
from payroll_api.models.payroll import Payroll, PayrollStatus  # noqa: E402
from payroll_api.repositories.unit_of_work import UnitOfWork  # noqa: E402

SEEDED_ITEM_TYPE_CODES = (
    "BASIC", "OVERTIME", "BONUS", "ALLOWANCE", "TAX", "INSURANCE", "LOAN", "OTHER_DEDUCTION",
)

# Children first, so foreign keys never block the cleanup.
_DATA_TABLES = ("payroll_items", "payrolls", "employees", "departments")

FIXED_NOW = datetime(2025, 7, 15, 9, 0, 0)


def _get_access_token(client, roles=("ADMINISTRATOR",), user_id: str = "test") -> str:
    resp = client.post("/auth/token", json={"user_id": user_id, "roles": list(roles)})
    assert resp.status_code == 200, f"token request failed: {resp.status_code} {resp.text}"
    data = resp.json()
    assert isinstance(data, dict), f"token response not a JSON object: {data}"
    assert "access_token" in data, f"token response missing access_token: {data}"
    return data["access_token"]


def _ensure_database_exists(database_url: str) -> None:
    url = make_url(database_url)

    if url.drivername.startswith("sqlite"):
        if url.database and os.path.exists(url.database):
            os.remove(url.database)
        return

    if not url.drivername.startswith("postgresql"):
        return

    db_name = url.database
    admin_url = url.set(database="postgres")
    admin_engine = create_engine(admin_url, isolation_level="AUTOCOMMIT")

    try:
        with admin_engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM pg_database WHERE datname = :name"),
                {"name": db_name},
            ).scalar()
            if not exists:
                safe_db_name = db_name.replace('"', '""')
                conn.execute(text(f'CREATE DATABASE "{safe_db_name}"'))
    finally:
        admin_engine.dispose()


def _clear_tables() -> None:
    with database.engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            quoted = ", ".join(f'"{name}"' for name in _DATA_TABLES)
            conn.execute(text(f"TRUNCATE TABLE {quoted} RESTART IDENTITY CASCADE"))
        else:
            for name in _DATA_TABLES:
                conn.execute(text(f"DELETE FROM {name}"))

        # Reference item types survive; anything a test added does not.
        placeholders = ", ".join(f":c{i}" for i in range(len(SEEDED_ITEM_TYPE_CODES)))
        conn.execute(
            text(f"DELETE FROM payroll_item_types WHERE code NOT IN ({placeholders})"),
            {f"c{i}": code for i, code in enumerate(SEEDED_ITEM_TYPE_CODES)},
        )
        conn.execute(text("UPDATE payroll_item_types SET is_active = :active"), {"active": True})


@pytest.fixture(scope="session", autouse=True)
def _prepare_test_database() -> None:
    _ensure_database_exists(TEST_DATABASE_URL)

    env = os.environ.copy()
    env["DATABASE_URL"] = TEST_DATABASE_URL

    subprocess.run(
        ["alembic", "upgrade", "head"],
        check=True,
        cwd=PROJECT_ROOT,
        env=env,
    )

    database.configure_database()


@pytest.fixture(scope="function", autouse=True)
def _clear_tables_between_tests():
    _clear_tables()
    yield
    _clear_tables()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(FIXED_NOW)


@pytest.fixture
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def uow(db) -> UnitOfWork:
    return UnitOfWork(db)


@pytest.fixture
def client(clock):
    from payroll_api.main import app

    app.dependency_overrides[get_clock] = lambda: clock
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def auth_headers(client):
    def _headers(*roles: str) -> dict:
        token = _get_access_token(client, roles=roles or ("ADMINISTRATOR",))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def make_department(db):
    counter = {"n": 0}

    def _make(**overrides) -> Department:
        counter["n"] += 1
        n = counter["n"]
        values = {
            "name": f"Department {n}",
            "code": f"DEP{n:03d}",
            "description": None,
            "is_active": True,
            "created_at": FIXED_NOW,
        }
        values.update(overrides)
        department = Department(**values)
        db.add(department)
        db.commit()
        return department

    return _make


@pytest.fixture
def make_employee(db, make_department):
    counter = {"n": 0}

    def _make(department: Department = None, **overrides) -> Employee:
        counter["n"] += 1
        n = counter["n"]
        if department is None and "department_id" not in overrides:
            department = make_department()
        values = {
            "employee_code": f"EMP{n:03d}",
            "employee_number": f"N{n:03d}",
            "first_name": "Ada",
            "last_name": f"Worker{n}",
            "email": f"employee{n}@example.com",
            "phone_number": "+15550100",
            "position": "Analyst",
            "date_of_birth": date(1990, 5, 1),
            "hire_date": date(2020, 1, 15),
            "base_salary": Decimal("5000.00"),
            "status": EmployeeStatus.ACTIVE.value,
            "created_at": FIXED_NOW,
        }
        if department is not None:
            values["department_id"] = department.id
        values.update(overrides)
        employee = Employee(**values)
        db.add(employee)
        db.commit()
        return employee

    return _make


@pytest.fixture
def make_payroll(db):
    def _make(employee: Employee, month: int = 7, year: int = 2025, **overrides) -> Payroll:
        values = {
            "employee_id": employee.id,
            "pay_period_month": month,
            "pay_period_year": year,
            "base_salary": Decimal(str(employee.base_salary)),
            "status": PayrollStatus.DRAFT.value,
            "created_at": FIXED_NOW,
        }
        values.update(overrides)
        payroll = Payroll(**values)
        payroll.compute_gross_pay()
        payroll.compute_net_pay()
        db.add(payroll)
        db.commit()
        return payroll

    return _make
