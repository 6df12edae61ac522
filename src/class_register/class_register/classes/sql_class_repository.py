from __future__ import annotations

from typing import Callable, Optional, Sequence

from sqlalchemy import delete, select

from ..common.observable import Subscription, TableNotifier
from ..database.base import session_scope
from ..database.connection import Database
from ..database.schema import ATTENDANCE, CLASSES, STUDENTS, ClassRow
from .model import SchoolClass
from .repository import ClassRepository


def _to_model(row: ClassRow) -> SchoolClass:
    return SchoolClass(class_id=int(row.id), name=row.name)


class SqlClassRepository(ClassRepository):
    def __init__(self, db: Database, notifier: TableNotifier):
        self._db = db
        self._notifier = notifier

    def create(self, name: str) -> SchoolClass:
        with session_scope(self._db) as s:
            row = ClassRow(name=name)
            s.add(row)
            s.flush()
            created = _to_model(row)
        self._notifier.notify(CLASSES)
        return created

    def delete(self, class_id: int) -> bool:
        with session_scope(self._db) as s:
            result = s.execute(delete(ClassRow).where(ClassRow.id == int(class_id)))
            deleted = result.rowcount > 0
        if deleted:
            self._notifier.notify(CLASSES, STUDENTS, ATTENDANCE)
        return deleted

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        with session_scope(self._db) as s:
            row = s.get(ClassRow, int(class_id))
            return _to_model(row) if row else None

    def list_all(self) -> Sequence[SchoolClass]:
        with session_scope(self._db) as s:
            rows = s.scalars(select(ClassRow).order_by(ClassRow.name.asc(), ClassRow.id.asc()))
            return [_to_model(r) for r in rows]

    def observe_all(self, callback: Callable[[Sequence[SchoolClass]], None]) -> Subscription:
        return self._notifier.subscribe([CLASSES], self.list_all, callback)
