from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .analytics.service import AggregationService
from .attendance.service import AttendanceService
from .attendance.sql_attendance_repository import SqlAttendanceRepository
from .classes.service import ClassService
from .classes.sql_class_repository import SqlClassRepository
from .common.observable import TableNotifier
from .common.worker import BackgroundWorker
from .core.constants import INTERSTITIAL_COOLDOWN_SECONDS, MAX_INTERSTITIALS_PER_SESSION
from .database.connection import Database, DBConfig
from .monetization.gate import NullGate, PostSaveGate
from .monetization.session import AdSession
from .students.service import StudentService
from .students.sql_student_repository import SqlStudentRepository
from .summary.service import SummaryService


@dataclass(frozen=True)
class Container:
    db: Database
    worker: Optional[BackgroundWorker]
    notifier: TableNotifier
    ad_session: Optional[AdSession]
    post_save_gate: PostSaveGate

    classes_repo: SqlClassRepository
    students_repo: SqlStudentRepository
    attendance_repo: SqlAttendanceRepository

    class_service: ClassService
    student_service: StudentService
    attendance_service: AttendanceService
    aggregation_service: AggregationService
    summary_service: SummaryService

    def close(self) -> None:
        if self.worker is not None:
            self.worker.shutdown()
        self.db.dispose()


def build_container(
    *,
    database_url: str,
    echo: bool = False,
    use_worker: bool = True,
    ads_enabled: bool = False,
    interstitial_cooldown_seconds: int = INTERSTITIAL_COOLDOWN_SECONDS,
    max_interstitials_per_session: int = MAX_INTERSTITIALS_PER_SESSION,
) -> Container:
    db = Database(DBConfig(url=database_url, echo=echo))

    worker = BackgroundWorker() if use_worker else None
    notifier = TableNotifier(dispatch=worker.submit if worker else None)

    ad_session: Optional[AdSession] = None
    post_save_gate: PostSaveGate = NullGate()
    if ads_enabled:
        ad_session = AdSession(
            cooldown_seconds=interstitial_cooldown_seconds,
            max_per_session=max_interstitials_per_session,
        )
        post_save_gate = ad_session

    classes_repo = SqlClassRepository(db, notifier)
    students_repo = SqlStudentRepository(db, notifier)
    attendance_repo = SqlAttendanceRepository(db, notifier)

    class_service = ClassService(classes_repo)
    student_service = StudentService(students_repo, classes_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        students_repo,
        classes_repo,
        post_save_gate=post_save_gate,
    )
    aggregation_service = AggregationService(attendance_repo, students_repo)
    summary_service = SummaryService(classes_repo, aggregation_service)

    return Container(
        db=db,
        worker=worker,
        notifier=notifier,
        ad_session=ad_session,
        post_save_gate=post_save_gate,
        classes_repo=classes_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        class_service=class_service,
        student_service=student_service,
        attendance_service=attendance_service,
        aggregation_service=aggregation_service,
        summary_service=summary_service,
    )
