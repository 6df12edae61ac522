from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence

from ..common.observable import Subscription
from .model import SchoolClass


class ClassRepository(Protocol):
    def create(self, name: str) -> SchoolClass:
        raise NotImplementedError

    def delete(self, class_id: int) -> bool:
        """Delete a class; students and their attendance go with it."""

        raise NotImplementedError

    def get_by_id(self, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def list_all(self) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def observe_all(self, callback: Callable[[Sequence[SchoolClass]], None]) -> Subscription:
        raise NotImplementedError
