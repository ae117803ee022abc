from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str, *, error=ValidationError) -> str:
    if value is not None and not isinstance(value, str):
        raise error(f"{field_name} must be text")
    if not value or not value.strip():
        raise error(f"{field_name} is required")
    return value.strip()


def _finite_number(value: Any, field_name: str, error) -> float:
    """NaN and infinities are rejected; they cannot be stored as JSON."""
    if isinstance(value, bool):
        raise error(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise error(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise error(f"{field_name} must be a finite number")
    return number


def require_positive(value: Any, field_name: str, *, error=ValidationError) -> float:
    number = _finite_number(value, field_name, error)
    if number <= 0:
        raise error(f"{field_name} must be greater than 0")
    return number


def require_non_negative(value: Any, field_name: str) -> float:
    number = _finite_number(value, field_name, ValidationError)
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def optional_text(value: Any, field_name: str = "Comment") -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return (value or "").strip() or None
