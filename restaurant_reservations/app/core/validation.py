"""
Input checks used by the workflow services.

The collection services accept whatever they are given; the workflows
call these helpers first and stop with ``ValidationError`` naming the
offending field.
"""

from typing import Any, Optional

from .errors import ValidationError


def require_text(value: Optional[str], field: str) -> str:
    """Return ``value`` stripped, or raise if it is missing or blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    return str(value).strip()


def require_email(value: Optional[str], field: str = "email") -> str:
    email = require_text(value, field)
    if "@" not in email:
        raise ValidationError(f"{field} is not a valid email address", field=field)
    return email


def require_positive_int(value: Any, field: str) -> int:
    """Accept ints or numeric strings greater than zero."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a positive integer", field=field)
    try:
        number = int(str(value).strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a positive integer", field=field)
    if number <= 0:
        raise ValidationError(f"{field} must be a positive integer", field=field)
    return number
