from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from ..common.observable import Subscription
from .model import Student


class StudentRepository(Protocol):
    def create(self, *, class_id: int, name: str, roll_identifier: Optional[str] = None) -> Student:
        raise NotImplementedError

    def delete(self, student_id: int) -> bool:
        raise NotImplementedError

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_for_class(self, class_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def count_for_class(self, class_id: int) -> int:
        raise NotImplementedError

    def observe_for_class(self, class_id: int, callback: Callable[[Sequence[Student]], None]) -> Subscription:
        raise NotImplementedError
