from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on a class roster."""

    student_id: int
    class_id: int
    name: str
    roll_identifier: Optional[str] = None
