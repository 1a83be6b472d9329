from typing import List, Optional, Tuple

from sqlalchemy import func, or_

from payroll_api.models.employee import Employee, EmployeeStatus
from payroll_api.repositories.base import Repository


class EmployeeRepository(Repository[Employee]):
    model = Employee

    def _ordered(self, q):
        return q.order_by(Employee.first_name.asc(), Employee.last_name.asc(), Employee.id.asc())

    def get_all(self) -> List[Employee]:
        return self._ordered(self._query()).all()

    def get_by_employee_code(self, employee_code: str) -> Optional[Employee]:
        return self._query().filter(Employee.employee_code == employee_code).first()

    def get_by_employee_number(self, employee_number: str) -> Optional[Employee]:
        return self._query().filter(Employee.employee_number == employee_number).first()

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._query().filter(func.lower(Employee.email) == email.lower()).first()

    def get_by_department(self, department_id: int) -> List[Employee]:
        return self._ordered(
            self._query().filter(Employee.department_id == int(department_id))
        ).all()

    def get_by_status(self, status: EmployeeStatus) -> List[Employee]:
        return self._ordered(self._query().filter(Employee.status == EmployeeStatus(status).value)).all()

    def get_active(self) -> List[Employee]:
        return self.get_by_status(EmployeeStatus.ACTIVE)

    def has_active_in_department(self, department_id: int) -> bool:
        return self.exists(
            Employee.department_id == int(department_id),
            Employee.status == EmployeeStatus.ACTIVE.value,
        )

    def search(self, term: str) -> List[Employee]:
        return self._ordered(self._matching(self._query(), term)).all()

    def search_paged(
        self,
        *,
        term: Optional[str] = None,
        department_id: Optional[int] = None,
        status: Optional[EmployeeStatus] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Employee], int]:
        q = self._query()

        if term and term.strip():
            q = self._matching(q, term)

        if department_id is not None:
            q = q.filter(Employee.department_id == int(department_id))

        if status is not None:
            q = q.filter(Employee.status == EmployeeStatus(status).value)

        total = q.count()
        rows = self._ordered(q).limit(int(limit)).offset(int(offset)).all()
        return rows, total

    @staticmethod
    def _matching(q, term: str):
        pattern = f"%{term.strip().lower()}%"
        return q.filter(
            or_(
                func.lower(Employee.first_name).like(pattern),
                func.lower(Employee.last_name).like(pattern),
                func.lower(Employee.email).like(pattern),
                func.lower(Employee.employee_code).like(pattern),
            )
        )

    def detach_from_department(self, department_id: int) -> int:
        return (
            self._query()
            .filter(Employee.department_id == int(department_id))
            .update({Employee.department_id: None}, synchronize_session=False)
        )
