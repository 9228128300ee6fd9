from __future__ import annotations

import logging
from typing import List, Optional

from ..common.class_labels import distinct_labels, normalize_class_label
from ..common.validators import require_non_empty, require_status
from ..core.constants import DEFAULT_STUDENT_LIST_LIMIT
from ..core.enums import StudentStatus
from ..core.exceptions import ValidationError
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: manage the roster by hand (add, browse, class options)."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def create_student(
        self,
        *,
        nis: str,
        nama: str,
        kelas: str,
        status: StudentStatus | str = StudentStatus.ACTIVE,
    ) -> int:
        nis = require_non_empty(nis, "NIS")
        nama = require_non_empty(nama, "Name")
        kelas = require_non_empty(kelas, "Class")
        status = require_status(status)

        # Checked before insert, not a transaction: two concurrent inserts
        # of the same nis are left to the store's unique index.
        if self._students.get_by_nis(nis):
            raise ValidationError(f"NIS {nis} already exists")

        student_id = self._students.create_student(nis=nis, nama=nama, kelas=kelas, status=status)
        logger.info("Created student %s (nis=%s, kelas=%s)", student_id, nis, kelas)
        return student_id

    def list_students(
        self,
        *,
        keyword: str = "",
        kelas: Optional[str] = None,
        status: Optional[StudentStatus | str] = None,
        limit: int = DEFAULT_STUDENT_LIST_LIMIT,
    ) -> List[Student]:
        rows = self._students.list_students(
            kelas=normalize_class_label(kelas) or None,
            status=require_status(status) if status else None,
            limit=int(limit),
        )

        needle = (keyword or "").strip().lower()
        if not needle:
            return list(rows)
        return [r for r in rows if needle in (r.nama or "").lower() or needle in (r.nis or "").lower()]

    def class_options(self, *, active_only: bool = False) -> List[str]:
        status = StudentStatus.ACTIVE if active_only else None
        return distinct_labels(self._students.list_class_labels(status=status))

    def students_in_class(self, kelas: str) -> List[Student]:
        """Active students of one class, for the entry form's name picker."""
        kelas = require_non_empty(kelas, "Class")
        return list(self._students.list_students(kelas=kelas, status=StudentStatus.ACTIVE, limit=1000))
