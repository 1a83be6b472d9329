from typing import Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from payroll_api.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """
    Generic data access over one mapped table.

    Repositories never commit; the owning UnitOfWork decides when to.
    """

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(self.model)

    def get_by_id(self, id_: int) -> Optional[ModelT]:
        return self.db.get(self.model, int(id_))

    def get_all(self) -> List[ModelT]:
        return self._query().order_by(self.model.id.asc()).all()

    def find(self, *criteria) -> List[ModelT]:
        return self._query().filter(*criteria).order_by(self.model.id.asc()).all()

    def first(self, *criteria) -> Optional[ModelT]:
        return self._query().filter(*criteria).order_by(self.model.id.asc()).first()

    def exists(self, *criteria) -> bool:
        return self.db.query(self._query().filter(*criteria).exists()).scalar()

    def count(self, *criteria) -> int:
        return self._query().filter(*criteria).count()

    def add(self, row: ModelT) -> ModelT:
        self.db.add(row)
        return row

    def add_all(self, rows: Iterable[ModelT]) -> None:
        self.db.add_all(list(rows))

    def update(self, row: ModelT) -> ModelT:
        # Rows are attached to the session; merge covers detached instances.
        return self.db.merge(row)

    def delete(self, row: ModelT) -> None:
        self.db.delete(row)

    def delete_all(self, rows: Iterable[ModelT]) -> None:
        for row in rows:
            self.db.delete(row)
