from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a class (section) with its own roster and daily register."""

    class_id: int
    name: str
