from __future__ import annotations

from datetime import date, datetime

import pytest

from class_register.container import build_container
from class_register.database.bootstrap import create_schema


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 14, 9, 30, 0)


@pytest.fixture
def today(fixed_now) -> date:
    return fixed_now.date()


@pytest.fixture
def container():
    c = build_container(database_url="sqlite://", use_worker=False)
    create_schema(c.db)
    yield c
    c.close()


@pytest.fixture
def db(container):
    return container.db


@pytest.fixture
def school_class(container):
    return container.class_service.create_class("Grade 5 - A")


@pytest.fixture
def roster(container, school_class):
    """Three students, returned in name order."""
    names = [("Aarav", "01"), ("Bela", "02"), ("Chirag", None)]
    return [container.student_service.create_student(school_class.class_id, n, r) for n, r in names]
