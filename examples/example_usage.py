"""Example: using the service layer without Flask.

Controllers are a thin layer; everything below works as plain Python.
"""

from datetime import date, timedelta

from class_register.container import build_container
from class_register.database.bootstrap import create_schema


def main():
    container = build_container(database_url="sqlite://", use_worker=False)
    create_schema(container.db)

    school_class = container.class_service.create_class("Grade 5 - A")
    for name in ("Aarav Sharma", "Doe, Jane", "Meera Iyer"):
        container.student_service.create_student(school_class.class_id, name)

    today = date.today()
    for offset in range(5):
        container.attendance_service.mark_all(school_class.class_id, today - timedelta(days=offset), True)

    print(container.summary_service.class_overview(today))
    print(container.summary_service.class_analytics(school_class.class_id, today - timedelta(days=7), today))
    print(container.summary_service.export_student_report(school_class.class_id, today - timedelta(days=7), today).content)


if __name__ == "__main__":
    main()
