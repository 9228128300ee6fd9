"""Class labels (kelas) are free text, not foreign keys.

Every component compares them through these helpers so filters,
promotion and graduation agree on what "the same class" means:
surrounding whitespace is ignored, case is significant.
"""
from __future__ import annotations

from typing import Iterable, List, Optional

from .validators import require_text


def normalize_class_label(value: Optional[str]) -> str:
    return (require_text(value, "Class") or "").strip()


def same_class(a: Optional[str], b: Optional[str]) -> bool:
    return normalize_class_label(a) == normalize_class_label(b)


def has_prefix(label: Optional[str], prefix: str) -> bool:
    """Case-insensitive prefix test, e.g. XII matches "xii ipa 1"."""
    return normalize_class_label(label).upper().startswith(normalize_class_label(prefix).upper())


def distinct_labels(values: Iterable[Optional[str]]) -> List[str]:
    """Unique, non-empty, sorted labels."""
    return sorted({label for label in map(normalize_class_label, values) if label})
