from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..students.model import Student


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's mark for one calendar day."""

    attendance_id: int
    student_id: int
    date: date
    is_present: bool


@dataclass(frozen=True)
class SheetRow:
    student: Student
    is_present: bool
    recorded: bool


@dataclass(frozen=True)
class AttendanceSheet:
    """Read-model for the mark-attendance view of a class on one day."""

    class_id: int
    class_name: str
    date: date
    rows: list[SheetRow] = field(default_factory=list)
    attendance_exists: bool = False

    @property
    def total_count(self) -> int:
        return len(self.rows)

    @property
    def present_count(self) -> int:
        return sum(1 for r in self.rows if r.is_present)

    @property
    def absent_count(self) -> int:
        return self.total_count - self.present_count

    @property
    def percentage(self) -> float:
        if not self.rows:
            return 0.0
        return self.present_count / self.total_count * 100


@dataclass(frozen=True)
class SaveResult:
    class_id: int
    date: date
    saved_count: int
    present_count: int
    interstitial_shown: bool = False
    updated_existing: bool = False
