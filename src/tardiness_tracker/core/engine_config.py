from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .constants import (
    DEFAULT_CANDIDATE_THRESHOLD,
    DEFAULT_GRADUATION_PREFIX,
    DEFAULT_HARD_WARNING_THRESHOLD,
    DEFAULT_IMPORT_BATCH_SIZE,
    DEFAULT_LATE_CUTOFF,
)
from .exceptions import ValidationError


@dataclass(frozen=True)
class EngineConfig:
    """Rules shared by the engine components.

    Handed to each service at construction so tests can vary thresholds
    without touching module globals.
    """

    late_cutoff: str = DEFAULT_LATE_CUTOFF
    hard_warning_threshold: int = DEFAULT_HARD_WARNING_THRESHOLD
    candidate_threshold: int = DEFAULT_CANDIDATE_THRESHOLD
    import_batch_size: int = DEFAULT_IMPORT_BATCH_SIZE
    graduation_prefix: str = DEFAULT_GRADUATION_PREFIX

    def __post_init__(self) -> None:
        cutoff = (self.late_cutoff or "").strip()
        if len(cutoff) < 5 or cutoff[2] != ":" or not (cutoff[:2] + cutoff[3:5]).isdigit():
            raise ValidationError(f"Cutoff must be HH:MM, got {self.late_cutoff!r}")
        if self.hard_warning_threshold < 1 or self.candidate_threshold < 1:
            raise ValidationError("Thresholds must be at least 1")
        if self.import_batch_size < 1:
            raise ValidationError("Import batch size must be at least 1")
        if not (self.graduation_prefix or "").strip():
            raise ValidationError("Graduation prefix must not be empty")

    @classmethod
    def from_settings(cls, settings: ModuleType) -> "EngineConfig":
        return cls(
            late_cutoff=str(getattr(settings, "LATE_CUTOFF", DEFAULT_LATE_CUTOFF)),
            hard_warning_threshold=int(getattr(settings, "HARD_WARNING_THRESHOLD", DEFAULT_HARD_WARNING_THRESHOLD)),
            candidate_threshold=int(getattr(settings, "CANDIDATE_THRESHOLD", DEFAULT_CANDIDATE_THRESHOLD)),
            import_batch_size=int(getattr(settings, "IMPORT_BATCH_SIZE", DEFAULT_IMPORT_BATCH_SIZE)),
            graduation_prefix=str(getattr(settings, "GRADUATION_PREFIX", DEFAULT_GRADUATION_PREFIX)),
        )
