from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class StudentSnapshot:
    """Student fields copied onto an event at write time.

    Never re-synced: a report row keeps the name and class the student had
    on the day the event was recorded.
    """

    student_id: Optional[int]
    nis: Optional[str]
    nama: str
    kelas: str


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one late arrival. Immutable once inserted."""

    event_id: int
    event_date: date
    arrival_time: str
    student: StudentSnapshot
    reason: Optional[str] = None
    note: Optional[str] = None
    recorded_by: Optional[str] = None

    @property
    def student_id(self) -> Optional[int]:
        return self.student.student_id


@dataclass(frozen=True)
class NewAttendanceEvent:
    """Input for recording an event, as submitted by the entry form."""

    kelas: str
    student_id: Optional[int]
    arrival_time: str = ""
    event_date: Optional[date] = None
    reason: Optional[str] = None
    note: Optional[str] = None
    recorded_by: Optional[str] = None


@dataclass(frozen=True)
class RecordedEvent:
    """Result of a successful insert plus the advisory warning, if any."""

    event: AttendanceEvent
    late_minutes: int
    total_occurrences: Optional[int]
    warning: Optional[str] = None

    @property
    def hard_warning(self) -> bool:
        return self.warning is not None
