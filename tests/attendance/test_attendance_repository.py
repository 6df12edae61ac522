from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import func, select

from class_register.core.enums import AttendanceFilter
from class_register.core.exceptions import ConstraintViolation
from class_register.database.base import session_scope
from class_register.database.schema import AttendanceRow


def _row_count(db, student_id: int, day: date) -> int:
    with session_scope(db) as s:
        return s.scalar(
            select(func.count())
            .select_from(AttendanceRow)
            .where(AttendanceRow.student_id == student_id, AttendanceRow.date == day)
        )


def test_repeated_upserts_keep_one_row_per_student_and_day(container, roster, today):
    repo = container.attendance_repo
    sid = roster[0].student_id

    for flag in (True, False, True, True):
        repo.upsert(student_id=sid, day=today, is_present=flag)

    assert _row_count(container.db, sid, today) == 1


def test_upsert_is_idempotent(container, roster, today):
    repo = container.attendance_repo
    sid = roster[0].student_id

    first = repo.upsert(student_id=sid, day=today, is_present=True)
    second = repo.upsert(student_id=sid, day=today, is_present=True)

    assert first == second
    assert repo.count_for_student(sid) == 1


def test_upsert_overwrites_flag_in_place(container, roster, today):
    repo = container.attendance_repo
    sid = roster[0].student_id

    first = repo.upsert(student_id=sid, day=today, is_present=True)
    second = repo.upsert(student_id=sid, day=today, is_present=False)

    assert second.attendance_id == first.attendance_id
    assert second.is_present is False
    assert repo.get_for_student_and_date(sid, today).is_present is False


def test_same_calendar_day_addresses_same_record(container, roster):
    repo = container.attendance_repo
    sid = roster[0].student_id

    repo.upsert(student_id=sid, day=datetime(2025, 3, 14, 7, 5), is_present=True)
    found = repo.get_for_student_and_date(sid, datetime(2025, 3, 14, 23, 59, 59))

    assert found is not None
    assert found.date == date(2025, 3, 14)
    assert found.is_present is True
    assert _row_count(container.db, sid, date(2025, 3, 14)) == 1


def test_range_queries_include_both_endpoints(container, roster):
    repo = container.attendance_repo
    sid = roster[0].student_id
    start, end = date(2025, 3, 1), date(2025, 3, 10)

    repo.upsert(student_id=sid, day=start, is_present=True)
    repo.upsert(student_id=sid, day=end, is_present=False)
    repo.upsert(student_id=sid, day=end + timedelta(days=1), is_present=True)
    repo.upsert(student_id=sid, day=start - timedelta(days=1), is_present=True)

    assert repo.count_in_range(sid, start, end, AttendanceFilter.ALL) == 2
    assert repo.count_in_range(sid, start, end, AttendanceFilter.PRESENT) == 1
    assert repo.count_in_range(sid, start, end, AttendanceFilter.ABSENT) == 1
    assert [r.date for r in repo.list_in_range_for_student(sid, start, end)] == [start, end]


def test_inverted_range_is_empty_not_an_error(container, roster, today):
    repo = container.attendance_repo
    sid = roster[0].student_id
    repo.upsert(student_id=sid, day=today, is_present=True)

    later, earlier = today + timedelta(days=1), today - timedelta(days=1)

    assert repo.count_in_range(sid, later, earlier) == 0
    assert repo.list_in_range_for_student(sid, later, earlier) == []
    assert repo.list_in_range_for_class(roster[0].class_id, later, earlier) == []
    assert repo.distinct_dates_for_class(roster[0].class_id, later, earlier) == []


def test_class_queries_join_through_students(container, school_class, roster, today):
    repo = container.attendance_repo
    other = container.class_service.create_class("Other")
    outsider = container.student_service.create_student(other.class_id, "Zed")

    repo.upsert(student_id=roster[0].student_id, day=today, is_present=True)
    repo.upsert(student_id=roster[1].student_id, day=today, is_present=False)
    repo.upsert(student_id=outsider.student_id, day=today, is_present=True)

    records = repo.get_for_class_and_date(school_class.class_id, today)
    assert {r.student_id for r in records} == {roster[0].student_id, roster[1].student_id}
    assert repo.count_for_class_on_date(school_class.class_id, today, AttendanceFilter.ALL) == 2
    assert repo.count_for_class_on_date(school_class.class_id, today, AttendanceFilter.PRESENT) == 1
    assert repo.count_for_class_on_date(school_class.class_id, today, AttendanceFilter.ABSENT) == 1


def test_class_range_listing_is_ordered_by_date(container, school_class, roster):
    repo = container.attendance_repo
    days = [date(2025, 3, 5), date(2025, 3, 2), date(2025, 3, 3)]
    for d in days:
        repo.upsert(student_id=roster[1].student_id, day=d, is_present=True)
        repo.upsert(student_id=roster[0].student_id, day=d, is_present=False)

    listed = repo.list_in_range_for_class(school_class.class_id, date(2025, 3, 1), date(2025, 3, 31))

    assert [r.date for r in listed] == sorted(d for d in days for _ in range(2))
    assert repo.distinct_dates_for_class(school_class.class_id, date(2025, 3, 1), date(2025, 3, 31)) == sorted(days)


def test_lifetime_counts(container, roster):
    repo = container.attendance_repo
    sid = roster[0].student_id
    for offset, flag in enumerate([True, True, False, True, False]):
        repo.upsert(student_id=sid, day=date(2025, 1, 1) + timedelta(days=offset), is_present=flag)

    assert repo.count_for_student(sid, AttendanceFilter.PRESENT) == 3
    assert repo.count_for_student(sid, AttendanceFilter.ABSENT) == 2


def test_upsert_for_missing_student_is_a_constraint_violation(container, today):
    with pytest.raises(ConstraintViolation):
        container.attendance_repo.upsert(student_id=999, day=today, is_present=True)


def test_batch_save_is_all_or_nothing(container, roster, today):
    repo = container.attendance_repo
    marks = {roster[0].student_id: True, roster[1].student_id: False, 999: True}

    with pytest.raises(ConstraintViolation):
        repo.save_many(day=today, marks=marks)

    assert repo.get_for_student_and_date(roster[0].student_id, today) is None
    assert repo.get_for_student_and_date(roster[1].student_id, today) is None


def test_batch_save_writes_every_mark(container, school_class, roster, today):
    repo = container.attendance_repo
    saved = repo.save_many(day=today, marks={st.student_id: True for st in roster})

    assert saved == len(roster)
    assert repo.count_for_class_on_date(school_class.class_id, today, AttendanceFilter.PRESENT) == len(roster)
