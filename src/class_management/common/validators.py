from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_number(
    value: Any,
    field_name: str,
    *,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    exclusive_minimum: bool = False,
) -> float:
    """Coerce a JSON number and check its bounds.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """

    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number != number or number in (float("inf"), float("-inf")):
        raise ValidationError(f"{field_name} must be a finite number")

    if minimum is not None:
        if exclusive_minimum and number <= minimum:
            raise ValidationError(f"{field_name} must be greater than {minimum:g}")
        if not exclusive_minimum and number < minimum:
            raise ValidationError(f"{field_name} must be at least {minimum:g}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field_name} must be at most {maximum:g}")

    return int(number) if number.is_integer() and not isinstance(value, float) else number


def require_int(value: Any, field_name: str, *, minimum: Optional[int] = None) -> int:
    number = require_number(value, field_name, minimum=minimum)
    if float(number) != int(number):
        raise ValidationError(f"{field_name} must be a whole number")
    return int(number)


def require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value


def parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")
