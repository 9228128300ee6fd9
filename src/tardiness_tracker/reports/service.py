from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..attendance.aggregation import TallyEntry, classify, tally
from ..attendance.model import AttendanceEvent
from ..attendance.repository import AttendanceEventRepository
from ..attendance.time_rules import format_duration, late_minutes
from ..common.class_labels import normalize_class_label
from ..common.datetime_utils import format_date_id, month_bounds
from ..core.engine_config import EngineConfig
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class RecapRow:
    event: AttendanceEvent
    late_minutes: int
    late_label: str


@dataclass(frozen=True)
class RecapReport:
    """Read-model for the recap screen and its export."""

    start: date
    end: date
    kelas: Optional[str]
    rows: List[RecapRow]
    unique_students: int
    period_label: str
    candidates: List[TallyEntry]

    @property
    def total(self) -> int:
        return len(self.rows)


class RecapService:
    def __init__(self, events: AttendanceEventRepository, config: EngineConfig | None = None):
        self._events = events
        self._config = config or EngineConfig()

    def build_recap(self, *, start: date, end: date, kelas: Optional[str] = None) -> RecapReport:
        if start > end:
            raise ValidationError("Start date must not be after end date")

        kelas = normalize_class_label(kelas) or None
        events = list(self._events.list_between(start_date=start, end_date=end, kelas=kelas))

        rows = []
        for e in events:
            minutes = late_minutes(e.arrival_time, self._config.late_cutoff)
            rows.append(RecapRow(event=e, late_minutes=minutes, late_label=format_duration(minutes)))

        offenses = tally(events)
        return RecapReport(
            start=start,
            end=end,
            kelas=kelas,
            rows=rows,
            unique_students=len(offenses),
            period_label=self._period_label(events),
            candidates=classify(offenses, self._config.candidate_threshold),
        )

    def build_monthly_recap(self, *, year: int, month: int, kelas: Optional[str] = None) -> RecapReport:
        start, end = month_bounds(year, month)
        return self.build_recap(start=start, end=end, kelas=kelas)

    @staticmethod
    def _period_label(events: List[AttendanceEvent]) -> str:
        # Rows come newest first.
        if not events:
            return "-"
        return f"{format_date_id(events[-1].event_date)} s/d {format_date_id(events[0].event_date)}"
