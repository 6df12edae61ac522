from __future__ import annotations

from typing import Mapping, Optional

from ..classes.repository import ClassRepository
from ..common.datetime_utils import DayLike, to_day
from ..core.enums import AttendanceFilter
from ..core.exceptions import NotFound, ValidationError
from ..monetization.gate import NullGate, PostSaveGate
from ..students.repository import StudentRepository
from .model import AttendanceRecord, AttendanceSheet, SaveResult, SheetRow
from .repository import AttendanceRepository


class AttendanceService:
    """Single write path for attendance marks."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        students: StudentRepository,
        classes: ClassRepository,
        *,
        post_save_gate: Optional[PostSaveGate] = None,
    ):
        self._attendance = attendance
        self._students = students
        self._classes = classes
        self._gate = post_save_gate or NullGate()

    def record_attendance(self, student_id: int, day: DayLike, is_present: bool) -> AttendanceRecord:
        if not self._students.get_by_id(student_id):
            raise NotFound(f"Student {student_id} not found")
        return self._attendance.upsert(student_id=student_id, day=to_day(day), is_present=bool(is_present))

    def get_attendance(self, student_id: int, day: DayLike) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_student_and_date(student_id, to_day(day))

    def load_sheet(self, class_id: int, day: DayLike) -> AttendanceSheet:
        """Roster for one day with existing marks; unmarked students show as absent."""
        day = to_day(day)
        school_class = self._classes.get_by_id(class_id)
        if not school_class:
            raise NotFound(f"Class {class_id} not found")

        existing = {r.student_id: r for r in self._attendance.get_for_class_and_date(class_id, day)}
        rows = [
            SheetRow(
                student=st,
                is_present=existing[st.student_id].is_present if st.student_id in existing else False,
                recorded=st.student_id in existing,
            )
            for st in self._students.list_for_class(class_id)
        ]
        return AttendanceSheet(
            class_id=school_class.class_id,
            class_name=school_class.name,
            date=day,
            rows=rows,
            attendance_exists=bool(existing),
        )

    def save_class_attendance(
        self,
        class_id: int,
        day: DayLike,
        marks: Mapping[int, bool],
        *,
        default: bool = False,
    ) -> SaveResult:
        """Write one mark per student of the class for `day`, all or nothing.

        Students missing from `marks` get `default`. Ids that are not on the
        class roster are rejected before anything is written.
        """
        day = to_day(day)
        if not self._classes.get_by_id(class_id):
            raise NotFound(f"Class {class_id} not found")

        roster = [st.student_id for st in self._students.list_for_class(class_id)]
        unknown = sorted(set(marks) - set(roster))
        if unknown:
            raise ValidationError(f"Students {unknown} are not in class {class_id}")

        batch = {sid: bool(marks.get(sid, default)) for sid in roster}
        updated_existing = self._attendance.count_for_class_on_date(class_id, day, AttendanceFilter.ALL) > 0
        saved = self._attendance.save_many(day=day, marks=batch)

        shown = self._gate.allow_post_save_effect() if saved else False
        return SaveResult(
            class_id=class_id,
            date=day,
            saved_count=saved,
            present_count=sum(1 for v in batch.values() if v),
            interstitial_shown=shown,
            updated_existing=updated_existing,
        )

    def mark_all(self, class_id: int, day: DayLike, is_present: bool) -> SaveResult:
        return self.save_class_attendance(class_id, day, {}, default=is_present)
