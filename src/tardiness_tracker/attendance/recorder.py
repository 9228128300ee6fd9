from __future__ import annotations

import logging
from typing import Optional

from ..common.class_labels import same_class
from ..common.datetime_utils import format_clock, now_local, parse_clock
from ..common.validators import optional_text, require_non_empty
from ..core.engine_config import EngineConfig
from ..core.exceptions import StoreError, ValidationError
from ..students.repository import StudentRepository
from .aggregation import OffenseTally, classify
from .model import NewAttendanceEvent, RecordedEvent, StudentSnapshot
from .repository import AttendanceEventRepository
from .time_rules import late_minutes

logger = logging.getLogger(__name__)


class EventRecorder:
    """Use case: record one late arrival, then check the hard-warning threshold."""

    def __init__(
        self,
        events: AttendanceEventRepository,
        students: StudentRepository,
        config: EngineConfig | None = None,
    ):
        self._events = events
        self._students = students
        self._config = config or EngineConfig()

    def record(self, data: NewAttendanceEvent) -> RecordedEvent:
        kelas = require_non_empty(data.kelas, "Class")
        if data.student_id in (None, ""):
            raise ValidationError("Student is required")

        student = self._students.get_by_id(int(data.student_id))
        if not student or not student.is_active or not same_class(student.kelas, kelas):
            raise ValidationError("Student not found in the selected class. Pick again.")

        # Blank date/time fall back to the moment of submission.
        now = now_local()
        event_date = data.event_date or now.date()
        raw_time = optional_text(data.arrival_time, "Arrival time")
        arrival_time = parse_clock(raw_time) if raw_time else format_clock(now)

        event = self._events.create_event(
            event_date=event_date,
            arrival_time=arrival_time,
            student=StudentSnapshot(
                student_id=student.student_id,
                nis=student.nis or None,
                nama=student.nama,
                kelas=student.kelas,
            ),
            reason=optional_text(data.reason, "Reason"),
            note=optional_text(data.note, "Note"),
            recorded_by=optional_text(data.recorded_by, "Recorded by"),
        )
        minutes = late_minutes(event.arrival_time, self._config.late_cutoff)
        logger.info("Recorded late arrival %s for student %s (%s min)", event.event_id, student.student_id, minutes)

        total = self._historic_count(student.student_id)
        warning = None
        if total is not None:
            warning = self._hard_warning(event.student, total)

        return RecordedEvent(event=event, late_minutes=minutes, total_occurrences=total, warning=warning)

    def _historic_count(self, student_id: int) -> Optional[int]:
        # The event is already saved; a failed count only loses the advisory check.
        try:
            return self._events.count_for_student(student_id)
        except StoreError as exc:
            logger.warning("Could not count late arrivals for student %s: %s", student_id, exc)
            return None

    def _hard_warning(self, student: StudentSnapshot, total: int) -> Optional[str]:
        offenses = OffenseTally()
        offenses.add(student, times=total)
        flagged = classify(offenses, self._config.hard_warning_threshold)
        if not flagged:
            return None

        logger.warning("Student %s reached %s late arrivals", student.student_id, total)
        return f"Warning: {student.nama} has been late {total} times (>= {self._config.hard_warning_threshold})."
