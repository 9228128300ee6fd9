from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import StudentStatus
from .model import RosterRow, Student


class StudentRepository(Protocol):
    """Store interface for the students collection.

    Note: services depend on this interface, never on a concrete database.
    Bulk updates return the number of rows their predicate matched.
    """

    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_nis(self, nis: str) -> Optional[Student]:
        raise NotImplementedError

    def create_student(self, *, nis: str, nama: str, kelas: str, status: StudentStatus) -> int:
        raise NotImplementedError

    def list_students(
        self,
        *,
        kelas: Optional[str] = None,
        status: Optional[StudentStatus] = None,
        limit: int = 800,
    ) -> Sequence[Student]:
        """Ordered by class, then name."""

        raise NotImplementedError

    def list_class_labels(self, *, status: Optional[StudentStatus] = None) -> Sequence[Optional[str]]:
        """Raw class labels of matching students (may repeat)."""

        raise NotImplementedError

    def set_status(self, student_id: int, status: StudentStatus) -> int:
        raise NotImplementedError

    def reassign_class(self, *, from_class: str, to_class: str, where_status: StudentStatus) -> int:
        raise NotImplementedError

    def set_status_for_classes(
        self,
        *,
        classes: Sequence[str],
        status: StudentStatus,
        where_status: StudentStatus,
    ) -> int:
        raise NotImplementedError

    def upsert_by_nis(self, rows: Sequence[RosterRow]) -> int:
        """Insert new nis values, overwrite nama/kelas/status of existing ones."""

        raise NotImplementedError
