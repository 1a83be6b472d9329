from typing import List, Optional

from sqlalchemy import func

from payroll_api.models.department import Department
from payroll_api.models.employee import Employee
from payroll_api.repositories.base import Repository


class DepartmentRepository(Repository[Department]):
    model = Department

    def get_all(self) -> List[Department]:
        return self._query().order_by(Department.name.asc()).all()

    def get_active(self) -> List[Department]:
        return (
            self._query()
            .filter(Department.is_active.is_(True))
            .order_by(Department.name.asc())
            .all()
        )

    def get_by_name(self, name: str, exclude_id: Optional[int] = None) -> Optional[Department]:
        q = self._query().filter(func.lower(Department.name) == name.lower())
        if exclude_id is not None:
            q = q.filter(Department.id != int(exclude_id))
        return q.first()

    def get_by_code(self, code: str, exclude_id: Optional[int] = None) -> Optional[Department]:
        q = self._query().filter(func.lower(Department.code) == code.lower())
        if exclude_id is not None:
            q = q.filter(Department.id != int(exclude_id))
        return q.first()

    def is_active_department(self, department_id: int) -> bool:
        return self.exists(Department.id == int(department_id), Department.is_active.is_(True))

    def count_employees(self, department_id: int) -> int:
        return (
            self.db.query(func.count(Employee.id))
            .filter(Employee.department_id == int(department_id))
            .scalar()
        )
