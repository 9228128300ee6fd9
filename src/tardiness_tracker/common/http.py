from __future__ import annotations

from flask import request

from ..core.exceptions import ValidationError


def json_object() -> dict:
    """Request JSON body; missing or unparsable counts as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data
