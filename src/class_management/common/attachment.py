from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.exceptions import ValidationError
from .datetime_utils import isoformat, parse_iso_datetime


@dataclass(frozen=True)
class Attachment:
    """File metadata attached to assignments, submissions and sessions.

    Only the reference is stored; file bytes live elsewhere.
    """

    name: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = None
    uploaded_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        data = {"name": self.name, "fileUrl": self.file_url, "fileType": self.file_type}
        if self.uploaded_at:
            data["uploadedAt"] = isoformat(self.uploaded_at)
        return data


def parse_attachments(raw: Any, field_name: str = "attachments") -> tuple[Attachment, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        raise ValidationError(f"{field_name} must be a list")

    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValidationError(f"{field_name} entries must be objects")
        uploaded_at = entry.get("uploadedAt")
        items.append(
            Attachment(
                name=entry.get("name"),
                file_url=entry.get("fileUrl"),
                file_type=entry.get("fileType"),
                uploaded_at=parse_iso_datetime(uploaded_at, "uploadedAt") if uploaded_at else None,
            )
        )
    return tuple(items)
