"""Repeat-offense counting over an already-fetched set of events.

No I/O here: callers decide which events (one student's history, one
month of the recap) are counted.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

from .model import AttendanceEvent, StudentSnapshot

Identity = Tuple[Hashable, ...]


def identity_of(student: StudentSnapshot) -> Identity:
    """Live student reference when present, else (nis, nama, kelas).

    The fallback keeps historic rows without a student_id countable.
    """
    if student.student_id is not None:
        return ("id", student.student_id)
    return ("snapshot", student.nis or "", student.nama, student.kelas)


@dataclass(frozen=True)
class TallyEntry:
    identity: Identity
    nis: Optional[str]
    nama: str
    kelas: str
    count: int


class OffenseTally:
    """Per-student event counts, enumerated in order of first appearance."""

    def __init__(self) -> None:
        self._entries: Dict[Identity, TallyEntry] = {}

    def add(self, student: StudentSnapshot, times: int = 1) -> None:
        key = identity_of(student)
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = TallyEntry(key, student.nis, student.nama, student.kelas, int(times))
        else:
            self._entries[key] = replace(entry, count=entry.count + int(times))

    def count_for(self, student: StudentSnapshot) -> int:
        entry = self._entries.get(identity_of(student))
        return entry.count if entry else 0

    def entries(self) -> List[TallyEntry]:
        return list(self._entries.values())

    def ranked(self) -> List[TallyEntry]:
        # sorted() is stable: equal counts keep first-appearance order.
        return sorted(self._entries.values(), key=lambda e: e.count, reverse=True)

    def __len__(self) -> int:
        return len(self._entries)


def tally(events: Iterable[AttendanceEvent]) -> OffenseTally:
    result = OffenseTally()
    for event in events:
        result.add(event.student)
    return result


def classify(offenses: OffenseTally, threshold: int) -> List[TallyEntry]:
    """Entries with count >= threshold, highest count first."""
    return [e for e in offenses.ranked() if e.count >= int(threshold)]
