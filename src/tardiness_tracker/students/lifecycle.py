"""Student status changes, one at a time or a whole class at once.

Transitions are deliberately unrestricted: an operator may set any status
from any other (e.g. back to ACTIVE after a mistaken graduation). The bulk
operations only ever touch ACTIVE students, which makes a repeated run a
no-op.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..common.class_labels import distinct_labels, has_prefix, normalize_class_label
from ..common.validators import require_non_empty, require_status
from ..core.engine_config import EngineConfig
from ..core.enums import StudentStatus
from ..core.exceptions import ValidationError
from .repository import StudentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraduationResult:
    classes: Tuple[str, ...]
    affected: int

    @property
    def classes_found(self) -> int:
        return len(self.classes)


class LifecycleEngine:
    def __init__(self, students: StudentRepository, config: EngineConfig | None = None):
        self._students = students
        self._config = config or EngineConfig()

    def set_status(self, student_id: int, new_status: StudentStatus | str) -> int:
        status = require_status(new_status)
        affected = self._students.set_status(int(student_id), status)
        logger.info("Student %s set to %s (affected=%s)", student_id, status.value, affected)
        return affected

    def promote_class(self, from_class: str, to_class: str) -> int:
        from_class = require_non_empty(normalize_class_label(from_class), "Source class")
        to_class = require_non_empty(normalize_class_label(to_class), "Target class")
        if from_class == to_class:
            raise ValidationError("Source and target class must differ")

        affected = self._students.reassign_class(
            from_class=from_class,
            to_class=to_class,
            where_status=StudentStatus.ACTIVE,
        )
        logger.info("Promoted %s active students from %s to %s", affected, from_class, to_class)
        return affected

    def graduate_class(self, target_class: str) -> int:
        target_class = require_non_empty(normalize_class_label(target_class), "Class")
        affected = self._students.set_status_for_classes(
            classes=[target_class],
            status=StudentStatus.GRADUATED,
            where_status=StudentStatus.ACTIVE,
        )
        logger.info("Graduated %s active students of %s", affected, target_class)
        return affected

    def senior_classes(self, match_prefix: str | None = None) -> List[str]:
        """Distinct labels of ACTIVE students starting with the prefix (any case)."""
        prefix = require_non_empty(match_prefix or self._config.graduation_prefix, "Class prefix")
        labels = distinct_labels(self._students.list_class_labels(status=StudentStatus.ACTIVE))
        return [label for label in labels if has_prefix(label, prefix)]

    def graduate_all_senior_classes(self, match_prefix: str | None = None) -> GraduationResult:
        classes = self.senior_classes(match_prefix)
        if not classes:
            logger.info("No active classes match %r; nothing to graduate", match_prefix or self._config.graduation_prefix)
            return GraduationResult(classes=(), affected=0)

        affected = self._students.set_status_for_classes(
            classes=classes,
            status=StudentStatus.GRADUATED,
            where_status=StudentStatus.ACTIVE,
        )
        logger.info("Graduated %s active students across %s", affected, ", ".join(classes))
        return GraduationResult(classes=tuple(classes), affected=affected)
