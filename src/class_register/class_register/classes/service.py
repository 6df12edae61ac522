from __future__ import annotations

from typing import Callable, Sequence

from ..common.observable import Subscription
from ..common.validators import require_non_empty
from ..core.exceptions import NotFound
from .model import SchoolClass
from .repository import ClassRepository


class ClassService:
    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def create_class(self, name: str) -> SchoolClass:
        return self._classes.create(require_non_empty(name, "Class name"))

    def delete_class(self, class_id: int) -> None:
        if not self._classes.delete(class_id):
            raise NotFound(f"Class {class_id} not found")

    def get_class(self, class_id: int) -> SchoolClass:
        found = self._classes.get_by_id(class_id)
        if not found:
            raise NotFound(f"Class {class_id} not found")
        return found

    def list_classes(self) -> Sequence[SchoolClass]:
        return self._classes.list_all()

    def observe_classes(self, callback: Callable[[Sequence[SchoolClass]], None]) -> Subscription:
        return self._classes.observe_all(callback)
