"""Request input checks shared by handlers and services."""

from __future__ import annotations

import re
from typing import Any

from ..errors import ValidationError

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# BSON stores integers as signed 64-bit values.
_MIN_ID = -(2**63)
_MAX_ID = 2**63 - 1


def is_missing(value: Any) -> bool:
    """Return True when a required field value counts as not supplied.

    ``None`` and blank strings are missing; ``False`` and ``0`` are not.
    """

    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def parse_student_id(raw_value: str | None) -> int:
    """Parse a path segment as a student id or raise ValidationError."""

    text = (raw_value or "").strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ValidationError("Invalid student ID")

    value = int(text)
    if not _MIN_ID <= value <= _MAX_ID:
        raise ValidationError("Invalid student ID")
    return value
