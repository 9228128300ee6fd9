from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.recorder import EventRecorder
from .attendance.repository import AttendanceEventRepository
from .core.engine_config import EngineConfig
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import RecapService
from .students.importer import ImportReconciler
from .students.lifecycle import LifecycleEngine
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    config: EngineConfig

    students_repo: StudentRepository
    events_repo: AttendanceEventRepository

    student_service: StudentService
    lifecycle: LifecycleEngine
    importer: ImportReconciler
    recorder: EventRecorder
    recap_service: RecapService


def wire(
    *,
    students_repo: StudentRepository,
    events_repo: AttendanceEventRepository,
    config: EngineConfig | None = None,
) -> Container:
    """Build every service on top of the given repositories."""
    config = config or EngineConfig()
    return Container(
        config=config,
        students_repo=students_repo,
        events_repo=events_repo,
        student_service=StudentService(students_repo),
        lifecycle=LifecycleEngine(students_repo, config),
        importer=ImportReconciler(students_repo, config),
        recorder=EventRecorder(events_repo, students_repo, config),
        recap_service=RecapService(events_repo, config),
    )


def build_container(*, db_config: dict, config: EngineConfig | None = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        students_repo=MySQLStudentRepository(conn),
        events_repo=MySQLAttendanceRepository(conn),
        config=config,
    )
