from __future__ import annotations

from datetime import date
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceFilter
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert(self, *, student_id: int, day: date, is_present: bool) -> AttendanceRecord:
        """Insert or overwrite the single record for (student_id, day)."""

        raise NotImplementedError

    def save_many(self, *, day: date, marks: Mapping[int, bool]) -> int:
        """Upsert a batch of marks for one day inside one transaction."""

        raise NotImplementedError

    def get_for_student_and_date(self, student_id: int, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_class_and_date(self, class_id: int, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_student(self, student_id: int, flt: AttendanceFilter = AttendanceFilter.ALL) -> int:
        raise NotImplementedError

    def count_for_class_on_date(self, class_id: int, day: date, flt: AttendanceFilter = AttendanceFilter.ALL) -> int:
        raise NotImplementedError

    def count_in_range(
        self, student_id: int, start: date, end: date, flt: AttendanceFilter = AttendanceFilter.ALL
    ) -> int:
        raise NotImplementedError

    def list_in_range_for_student(self, student_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_in_range_for_class(self, class_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def distinct_dates_for_class(self, class_id: int, start: date, end: date) -> Sequence[date]:
        raise NotImplementedError
