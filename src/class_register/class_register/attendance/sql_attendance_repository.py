from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional, Sequence

from sqlalchemy import distinct, func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ..common.datetime_utils import DayLike, to_day
from ..common.observable import TableNotifier
from ..core.enums import AttendanceFilter
from ..database.base import session_scope
from ..database.connection import Database
from ..database.schema import ATTENDANCE, AttendanceRow, StudentRow
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _to_model(row: AttendanceRow) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row.id),
        student_id=int(row.student_id),
        date=row.date,
        is_present=bool(row.is_present),
    )


def _flag_clause(flt: AttendanceFilter):
    flt = AttendanceFilter(flt)
    if flt is AttendanceFilter.ALL:
        return None
    return AttendanceRow.is_present.is_(flt is AttendanceFilter.PRESENT)


def _upsert(session: Session, student_id: int, day: date, is_present: bool) -> None:
    stmt = sqlite_insert(AttendanceRow).values(student_id=int(student_id), date=day, is_present=bool(is_present))
    stmt = stmt.on_conflict_do_update(
        index_elements=[AttendanceRow.student_id, AttendanceRow.date],
        set_={"is_present": stmt.excluded.is_present},
    )
    session.execute(stmt)


class SqlAttendanceRepository(AttendanceRepository):
    """Attendance storage on sqlite.

    Every write is an INSERT ... ON CONFLICT(student_id, date) DO UPDATE, so
    callers never branch between insert and update and the unique
    (student_id, date) constraint can never be hit by a second row.
    """

    def __init__(self, db: Database, notifier: TableNotifier):
        self._db = db
        self._notifier = notifier

    def upsert(self, *, student_id: int, day: DayLike, is_present: bool) -> AttendanceRecord:
        day = to_day(day)
        with session_scope(self._db) as s:
            _upsert(s, student_id, day, is_present)
            row = s.scalars(
                select(AttendanceRow).where(AttendanceRow.student_id == int(student_id), AttendanceRow.date == day)
            ).one()
            record = _to_model(row)
        logger.debug("attendance upsert student=%s date=%s present=%s", student_id, day, is_present)
        self._notifier.notify(ATTENDANCE)
        return record

    def save_many(self, *, day: DayLike, marks: Mapping[int, bool]) -> int:
        day = to_day(day)
        if not marks:
            return 0
        with session_scope(self._db) as s:
            for student_id, is_present in marks.items():
                _upsert(s, student_id, day, is_present)
        logger.debug("attendance batch saved date=%s rows=%d", day, len(marks))
        self._notifier.notify(ATTENDANCE)
        return len(marks)

    def get_for_student_and_date(self, student_id: int, day: DayLike) -> Optional[AttendanceRecord]:
        day = to_day(day)
        with session_scope(self._db) as s:
            row = s.scalars(
                select(AttendanceRow)
                .where(AttendanceRow.student_id == int(student_id), AttendanceRow.date == day)
                .limit(1)
            ).first()
            return _to_model(row) if row else None

    def get_for_class_and_date(self, class_id: int, day: DayLike) -> Sequence[AttendanceRecord]:
        day = to_day(day)
        with session_scope(self._db) as s:
            rows = s.scalars(
                select(AttendanceRow)
                .join(StudentRow, StudentRow.id == AttendanceRow.student_id)
                .where(StudentRow.class_id == int(class_id), AttendanceRow.date == day)
                .order_by(AttendanceRow.student_id.asc())
            )
            return [_to_model(r) for r in rows]

    def count_for_student(self, student_id: int, flt: AttendanceFilter = AttendanceFilter.ALL) -> int:
        stmt = select(func.count()).select_from(AttendanceRow).where(AttendanceRow.student_id == int(student_id))
        clause = _flag_clause(flt)
        if clause is not None:
            stmt = stmt.where(clause)
        return self._scalar_int(stmt)

    def count_for_class_on_date(
        self, class_id: int, day: DayLike, flt: AttendanceFilter = AttendanceFilter.ALL
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(AttendanceRow)
            .join(StudentRow, StudentRow.id == AttendanceRow.student_id)
            .where(StudentRow.class_id == int(class_id), AttendanceRow.date == to_day(day))
        )
        clause = _flag_clause(flt)
        if clause is not None:
            stmt = stmt.where(clause)
        return self._scalar_int(stmt)

    def count_in_range(
        self, student_id: int, start: DayLike, end: DayLike, flt: AttendanceFilter = AttendanceFilter.ALL
    ) -> int:
        start, end = to_day(start), to_day(end)
        if start > end:
            return 0

        clause = _flag_clause(flt)
        counted = func.count(distinct(AttendanceRow.date)) if clause is None else func.count()
        stmt = (
            select(counted)
            .select_from(AttendanceRow)
            .where(
                AttendanceRow.student_id == int(student_id),
                AttendanceRow.date >= start,
                AttendanceRow.date <= end,
            )
        )
        if clause is not None:
            stmt = stmt.where(clause)
        return self._scalar_int(stmt)

    def list_in_range_for_student(self, student_id: int, start: DayLike, end: DayLike) -> Sequence[AttendanceRecord]:
        start, end = to_day(start), to_day(end)
        if start > end:
            return []
        with session_scope(self._db) as s:
            rows = s.scalars(
                select(AttendanceRow)
                .where(
                    AttendanceRow.student_id == int(student_id),
                    AttendanceRow.date >= start,
                    AttendanceRow.date <= end,
                )
                .order_by(AttendanceRow.date.asc())
            )
            return [_to_model(r) for r in rows]

    def list_in_range_for_class(self, class_id: int, start: DayLike, end: DayLike) -> Sequence[AttendanceRecord]:
        start, end = to_day(start), to_day(end)
        if start > end:
            return []
        with session_scope(self._db) as s:
            rows = s.scalars(
                select(AttendanceRow)
                .join(StudentRow, StudentRow.id == AttendanceRow.student_id)
                .where(
                    StudentRow.class_id == int(class_id),
                    AttendanceRow.date >= start,
                    AttendanceRow.date <= end,
                )
                .order_by(AttendanceRow.date.asc(), AttendanceRow.student_id.asc())
            )
            return [_to_model(r) for r in rows]

    def distinct_dates_for_class(self, class_id: int, start: DayLike, end: DayLike) -> Sequence[date]:
        start, end = to_day(start), to_day(end)
        if start > end:
            return []
        with session_scope(self._db) as s:
            dates = s.scalars(
                select(distinct(AttendanceRow.date))
                .join(StudentRow, StudentRow.id == AttendanceRow.student_id)
                .where(
                    StudentRow.class_id == int(class_id),
                    AttendanceRow.date >= start,
                    AttendanceRow.date <= end,
                )
                .order_by(AttendanceRow.date.asc())
            )
            return list(dates)

    def _scalar_int(self, stmt) -> int:
        with session_scope(self._db) as s:
            return int(s.scalar(stmt) or 0)
