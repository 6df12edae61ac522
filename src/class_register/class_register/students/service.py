from __future__ import annotations

from typing import Callable, Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.observable import Subscription
from ..common.validators import optional_text, require_non_empty
from ..core.exceptions import NotFound
from .model import Student
from .repository import StudentRepository


class StudentService:
    def __init__(self, students: StudentRepository, classes: ClassRepository):
        self._students = students
        self._classes = classes

    def create_student(self, class_id: int, name: str, roll_identifier: Optional[str] = None) -> Student:
        name = require_non_empty(name, "Student name")
        if not self._classes.get_by_id(class_id):
            raise NotFound(f"Class {class_id} not found")
        return self._students.create(class_id=class_id, name=name, roll_identifier=optional_text(roll_identifier))

    def delete_student(self, student_id: int) -> None:
        if not self._students.delete(student_id):
            raise NotFound(f"Student {student_id} not found")

    def list_students(self, class_id: int) -> Sequence[Student]:
        return self._students.list_for_class(class_id)

    def count_students(self, class_id: int) -> int:
        return self._students.count_for_class(class_id)

    def observe_students(self, class_id: int, callback: Callable[[Sequence[Student]], None]) -> Subscription:
        return self._students.observe_for_class(class_id, callback)
