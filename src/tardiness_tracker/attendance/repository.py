from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceEvent, StudentSnapshot


class AttendanceEventRepository(Protocol):
    """Store interface for the late_attendance collection.

    Events are only ever inserted and read; there is no update or delete.
    """

    def create_event(
        self,
        *,
        event_date: date,
        arrival_time: str,
        student: StudentSnapshot,
        reason: Optional[str] = None,
        note: Optional[str] = None,
        recorded_by: Optional[str] = None,
    ) -> AttendanceEvent:
        raise NotImplementedError

    def count_for_student(self, student_id: int) -> int:
        """All-time number of events referencing this student."""

        raise NotImplementedError

    def list_between(
        self,
        *,
        start_date: date,
        end_date: date,
        kelas: Optional[str] = None,
    ) -> Sequence[AttendanceEvent]:
        """Events with start_date <= date <= end_date, newest first."""

        raise NotImplementedError
