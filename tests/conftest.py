from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

import pytest

from tardiness_tracker.attendance.model import AttendanceEvent, StudentSnapshot
from tardiness_tracker.core.engine_config import EngineConfig
from tardiness_tracker.core.enums import StudentStatus
from tardiness_tracker.core.exceptions import StoreError
from tardiness_tracker.students.model import RosterRow, Student


class InMemoryStudents:
    def __init__(self, students: Sequence[Student] = ()):
        self.by_id: dict[int, Student] = {s.student_id: s for s in students}
        self._id = max(self.by_id, default=0)
        self.upsert_calls: list[int] = []
        self.fail_on_upsert_call: Optional[int] = None

    def add(self, nis: str, nama: str, kelas: str, status: StudentStatus = StudentStatus.ACTIVE) -> Student:
        sid = self.create_student(nis=nis, nama=nama, kelas=kelas, status=status)
        return self.by_id[sid]

    def get_by_id(self, student_id: int) -> Optional[Student]:
        return self.by_id.get(student_id)

    def get_by_nis(self, nis: str) -> Optional[Student]:
        return next((s for s in self.by_id.values() if s.nis == nis), None)

    def create_student(self, *, nis, nama, kelas, status) -> int:
        self._id += 1
        self.by_id[self._id] = Student(student_id=self._id, nis=nis, nama=nama, kelas=kelas, status=status)
        return self._id

    def list_students(self, *, kelas=None, status=None, limit=800):
        rows = [s for s in self.by_id.values() if (kelas is None or s.kelas == kelas) and (status is None or s.status == status)]
        rows.sort(key=lambda s: (s.kelas, s.nama))
        return rows[:limit]

    def list_class_labels(self, *, status=None):
        return [s.kelas for s in self.by_id.values() if status is None or s.status == status]

    def _replace(self, student: Student, **changes) -> None:
        data = {"student_id": student.student_id, "nis": student.nis, "nama": student.nama, "kelas": student.kelas, "status": student.status}
        data.update(changes)
        self.by_id[student.student_id] = Student(**data)

    def set_status(self, student_id, status) -> int:
        student = self.by_id.get(student_id)
        if not student:
            return 0
        self._replace(student, status=status)
        return 1

    def reassign_class(self, *, from_class, to_class, where_status) -> int:
        matched = [s for s in self.by_id.values() if s.kelas == from_class and s.status == where_status]
        for s in matched:
            self._replace(s, kelas=to_class)
        return len(matched)

    def set_status_for_classes(self, *, classes, status, where_status) -> int:
        matched = [s for s in self.by_id.values() if s.kelas in classes and s.status == where_status]
        for s in matched:
            self._replace(s, status=status)
        return len(matched)

    def upsert_by_nis(self, rows: Sequence[RosterRow]) -> int:
        self.upsert_calls.append(len(rows))
        if self.fail_on_upsert_call == len(self.upsert_calls):
            raise StoreError("payload too large")
        for r in rows:
            existing = self.get_by_nis(r.nis)
            if existing:
                self._replace(existing, nama=r.nama, kelas=r.kelas, status=r.status)
            else:
                self.create_student(nis=r.nis, nama=r.nama, kelas=r.kelas, status=r.status)
        return len(rows)


class InMemoryEvents:
    def __init__(self):
        self.events: list[AttendanceEvent] = []
        self.fail_count = False

    def create_event(self, *, event_date, arrival_time, student, reason=None, note=None, recorded_by=None) -> AttendanceEvent:
        event = AttendanceEvent(
            event_id=len(self.events) + 1,
            event_date=event_date,
            arrival_time=arrival_time,
            student=student,
            reason=reason,
            note=note,
            recorded_by=recorded_by,
        )
        self.events.append(event)
        return event

    def count_for_student(self, student_id: int) -> int:
        if self.fail_count:
            raise StoreError("count failed")
        return sum(1 for e in self.events if e.student_id == student_id)

    def list_between(self, *, start_date, end_date, kelas=None):
        rows = [
            e
            for e in self.events
            if start_date <= e.event_date <= end_date and (kelas is None or e.student.kelas == kelas)
        ]
        rows.sort(key=lambda e: (e.event_date, e.arrival_time), reverse=True)
        return rows


def make_event(event_id: int, student: StudentSnapshot, *, on: date = date(2026, 1, 5), at: str = "06:45") -> AttendanceEvent:
    return AttendanceEvent(event_id=event_id, event_date=on, arrival_time=at, student=student)


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents()


@pytest.fixture
def events_repo() -> InMemoryEvents:
    return InMemoryEvents()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()
