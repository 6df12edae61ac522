from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy import func, inspect, select

from .base import session_scope
from .connection import Database
from .schema import AttendanceRow, Base, ClassRow, StudentRow

logger = logging.getLogger(__name__)

DEMO_ROSTER: dict[str, list[tuple[str, Optional[str]]]] = {
    "Grade 5 - A": [
        ("Aarav Sharma", "5A-01"),
        ("Doe, Jane", "5A-02"),
        ("Meera Iyer", "5A-03"),
        ("Rohan Gupta", None),
    ],
    "Grade 6 - B": [
        ("Ishaan Verma", "6B-01"),
        ("Kavya Nair", "6B-02"),
        ("Zoya Khan", "6B-03"),
    ],
}


def create_schema(db: Database) -> None:
    """Create all tables (idempotent: CREATE IF NOT EXISTS)."""
    Base.metadata.create_all(db.engine)
    logger.info("schema ready (tables=%d)", len(list_tables(db)))


def list_tables(db: Database) -> list[str]:
    return sorted(inspect(db.engine).get_table_names())


def seed_demo_data(db: Database, *, today: Optional[date] = None, days: int = 10) -> bool:
    """Insert a demo roster with `days` of attendance history.

    Does nothing when any class already exists. Returns True if data was added.
    """
    today = today or date.today()

    with session_scope(db) as s:
        if s.scalar(select(func.count()).select_from(ClassRow)):
            logger.info("demo seed skipped: classes already present")
            return False

        for class_name, roster in DEMO_ROSTER.items():
            class_row = ClassRow(name=class_name)
            s.add(class_row)
            s.flush()

            for idx, (student_name, roll) in enumerate(roster):
                student = StudentRow(class_id=class_row.id, name=student_name, roll_identifier=roll)
                s.add(student)
                s.flush()

                for offset in range(days):
                    # Deterministic pattern: every student misses some days, at different rates.
                    present = (offset + idx) % (idx + 3) != 0
                    s.add(AttendanceRow(student_id=student.id, date=today - timedelta(days=offset), is_present=present))

    logger.info("demo seed ready (%d classes)", len(DEMO_ROSTER))
    return True
