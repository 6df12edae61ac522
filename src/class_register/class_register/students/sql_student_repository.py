from __future__ import annotations

from typing import Callable, Optional, Sequence

from sqlalchemy import delete, func, select

from ..common.observable import Subscription, TableNotifier
from ..database.base import session_scope
from ..database.connection import Database
from ..database.schema import ATTENDANCE, STUDENTS, StudentRow
from .model import Student
from .repository import StudentRepository


def _to_model(row: StudentRow) -> Student:
    return Student(
        student_id=int(row.id),
        class_id=int(row.class_id),
        name=row.name,
        roll_identifier=row.roll_identifier,
    )


class SqlStudentRepository(StudentRepository):
    def __init__(self, db: Database, notifier: TableNotifier):
        self._db = db
        self._notifier = notifier

    def create(self, *, class_id: int, name: str, roll_identifier: Optional[str] = None) -> Student:
        with session_scope(self._db) as s:
            row = StudentRow(class_id=int(class_id), name=name, roll_identifier=roll_identifier)
            s.add(row)
            s.flush()
            created = _to_model(row)
        self._notifier.notify(STUDENTS)
        return created

    def delete(self, student_id: int) -> bool:
        with session_scope(self._db) as s:
            result = s.execute(delete(StudentRow).where(StudentRow.id == int(student_id)))
            deleted = result.rowcount > 0
        if deleted:
            self._notifier.notify(STUDENTS, ATTENDANCE)
        return deleted

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with session_scope(self._db) as s:
            row = s.get(StudentRow, int(student_id))
            return _to_model(row) if row else None

    def list_for_class(self, class_id: int) -> Sequence[Student]:
        with session_scope(self._db) as s:
            rows = s.scalars(
                select(StudentRow)
                .where(StudentRow.class_id == int(class_id))
                .order_by(StudentRow.name.asc(), StudentRow.id.asc())
            )
            return [_to_model(r) for r in rows]

    def count_for_class(self, class_id: int) -> int:
        with session_scope(self._db) as s:
            return int(
                s.scalar(select(func.count()).select_from(StudentRow).where(StudentRow.class_id == int(class_id)))
                or 0
            )

    def observe_for_class(self, class_id: int, callback: Callable[[Sequence[Student]], None]) -> Subscription:
        return self._notifier.subscribe([STUDENTS], lambda: self.list_for_class(class_id), callback)
