from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional

from ..core.exceptions import ValidationError


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (what pymongo hands back).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_iso_datetime(value: Any, field_name: str = "date") -> datetime:
    """Parse ``YYYY-MM-DD`` or a full ISO-8601 timestamp into naive UTC."""

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"{field_name} is not a valid ISO date")
    else:
        raise ValidationError(f"{field_name} is required")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None
