from __future__ import annotations

from enum import Enum


class StudentStatus(str, Enum):
    """Lifecycle status of a student, stored with the school's own labels."""

    ACTIVE = "AKTIF"
    INACTIVE = "NONAKTIF"
    GRADUATED = "LULUS"

    @classmethod
    def from_label(cls, value: str) -> "StudentStatus":
        """Map a free-text roster value to a status.

        Only the exact labels LULUS and NONAKTIF (case-insensitive) select
        GRADUATED and INACTIVE; anything else, blank included, is ACTIVE.
        """
        label = (value or "").strip().upper()
        if label == cls.GRADUATED.value:
            return cls.GRADUATED
        if label == cls.INACTIVE.value:
            return cls.INACTIVE
        return cls.ACTIVE
