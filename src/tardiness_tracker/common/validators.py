from __future__ import annotations

from typing import Optional

from ..core.enums import StudentStatus
from ..core.exceptions import ValidationError


def require_text(value, field_name: str) -> Optional[str]:
    """None or a str; anything else (numbers, lists from JSON) is rejected."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def require_non_empty(value: Optional[str], field_name: str) -> str:
    value = require_text(value, field_name)
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Optional[str], field_name: str = "Text field") -> Optional[str]:
    """Blank free text is stored as NULL."""
    text = (require_text(value, field_name) or "").strip()
    return text or None


def require_status(value) -> StudentStatus:
    if isinstance(value, StudentStatus):
        return value
    try:
        return StudentStatus(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown student status: {value!r}")
