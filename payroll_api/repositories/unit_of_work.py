from contextlib import contextmanager

from sqlalchemy.orm import Session

from payroll_api.repositories.department_repository import DepartmentRepository
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.repositories.payroll_repository import (
    PayrollItemRepository,
    PayrollItemTypeRepository,
    PayrollRepository,
)


class UnitOfWork:
    """
    Groups the repositories over one session.

    The caller owns the session lifecycle (open/close); the unit of work only
    controls transaction boundaries.
    """

    def __init__(self, db: Session):
        self.db = db
        self.departments = DepartmentRepository(db)
        self.employees = EmployeeRepository(db)
        self.payrolls = PayrollRepository(db)
        self.payroll_items = PayrollItemRepository(db)
        self.payroll_item_types = PayrollItemTypeRepository(db)

    def begin(self) -> None:
        # The session autobegins on first use; reads earlier in the request
        # already opened the transaction.
        if not self.db.in_transaction():
            self.db.begin()

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    @contextmanager
    def transaction(self):
        self.begin()
        try:
            yield self
            self.commit()
        except Exception:
            self.rollback()
            raise
