from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func

from payroll_api.models.payroll import Payroll, PayrollStatus
from payroll_api.models.payroll_item import PayrollItem
from payroll_api.models.payroll_item_type import PayrollItemType
from payroll_api.repositories.base import Repository

_SETTLED_STATUSES = (PayrollStatus.PROCESSED.value, PayrollStatus.PAID.value)


class PayrollRepository(Repository[Payroll]):
    model = Payroll

    def _newest_first(self, q):
        return q.order_by(
            Payroll.pay_period_year.desc(),
            Payroll.pay_period_month.desc(),
            Payroll.id.asc(),
        )

    def get_all(self) -> List[Payroll]:
        return self._newest_first(self._query()).all()

    def get_by_employee_and_period(self, employee_id: int, month: int, year: int) -> Optional[Payroll]:
        return (
            self._query()
            .filter(
                Payroll.employee_id == int(employee_id),
                Payroll.pay_period_month == int(month),
                Payroll.pay_period_year == int(year),
            )
            .first()
        )

    def has_payroll_for_period(self, employee_id: int, month: int, year: int) -> bool:
        return self.exists(
            Payroll.employee_id == int(employee_id),
            Payroll.pay_period_month == int(month),
            Payroll.pay_period_year == int(year),
        )

    def get_by_employee(self, employee_id: int) -> List[Payroll]:
        return self._newest_first(self._query().filter(Payroll.employee_id == int(employee_id))).all()

    def get_by_period(self, month: int, year: int) -> List[Payroll]:
        return (
            self._query()
            .filter(Payroll.pay_period_month == int(month), Payroll.pay_period_year == int(year))
            .order_by(Payroll.employee_id.asc())
            .all()
        )

    def get_by_status(self, status: PayrollStatus) -> List[Payroll]:
        return self._newest_first(self._query().filter(Payroll.status == PayrollStatus(status).value)).all()

    def has_processed_for_employee(self, employee_id: int) -> bool:
        return self.exists(
            Payroll.employee_id == int(employee_id),
            Payroll.status.in_(_SETTLED_STATUSES),
        )

    def get_total_net_pay(self, month: int, year: int) -> Decimal:
        total = (
            self.db.query(func.coalesce(func.sum(Payroll.net_pay), 0))
            .filter(Payroll.pay_period_month == int(month))
            .filter(Payroll.pay_period_year == int(year))
            .filter(Payroll.status.in_(_SETTLED_STATUSES))
            .scalar()
        )
        return Decimal(str(total or 0)).quantize(Decimal("0.01"))

    def search(
        self,
        *,
        employee_id: Optional[int] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[PayrollStatus] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Payroll], int]:
        q = self._query()

        if employee_id is not None:
            q = q.filter(Payroll.employee_id == int(employee_id))

        if month is not None:
            q = q.filter(Payroll.pay_period_month == int(month))

        if year is not None:
            q = q.filter(Payroll.pay_period_year == int(year))

        if status is not None:
            q = q.filter(Payroll.status == PayrollStatus(status).value)

        total = q.count()
        rows = self._newest_first(q).limit(int(limit)).offset(int(offset)).all()
        return rows, total


class PayrollItemRepository(Repository[PayrollItem]):
    model = PayrollItem

    def get_by_payroll(self, payroll_id: int) -> List[PayrollItem]:
        return self.find(PayrollItem.payroll_id == int(payroll_id))

    def delete_by_payroll(self, payroll_id: int) -> int:
        return (
            self._query()
            .filter(PayrollItem.payroll_id == int(payroll_id))
            .delete(synchronize_session=False)
        )

    def delete_by_payrolls(self, payroll_ids: List[int]) -> int:
        if not payroll_ids:
            return 0
        return (
            self._query()
            .filter(PayrollItem.payroll_id.in_([int(i) for i in payroll_ids]))
            .delete(synchronize_session=False)
        )


class PayrollItemTypeRepository(Repository[PayrollItemType]):
    model = PayrollItemType

    def get_active(self) -> List[PayrollItemType]:
        return self.find(PayrollItemType.is_active.is_(True))

    def get_by_code(self, code: str) -> Optional[PayrollItemType]:
        return self._query().filter(PayrollItemType.code == code).first()
