from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import StudentStatus


@dataclass(frozen=True)
class Student:
    """Domain entity: a student on the roster.

    `nis` is unique across all students whatever their status; `kelas` is a
    free-text class label compared by exact (trimmed) match.
    """

    student_id: int
    nis: str
    nama: str
    kelas: str
    status: StudentStatus = StudentStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE


@dataclass(frozen=True)
class RosterRow:
    """One accepted row of a roster import, keyed by nis."""

    nis: str
    nama: str
    kelas: str
    status: StudentStatus = StudentStatus.ACTIVE
