"""Data models for the store module."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

__all__ = ["CodeRecord", "CodeSummary"]


@dataclass
class CodeRecord:
    """
    Persistent record of one saved base64 code.

    Fields
    ──────
    owner_id           — Discord user id of the saver (stringified snowflake)
    owner_display_name — username at the time of the last save (may be stale)
    name               — user-chosen label, unique per owner
    payload            — base64 text exactly as submitted
    created_at         — UTC timestamp of the first save (None until stored)
    """
    owner_id:           str
    owner_display_name: str
    name:               str
    payload:            str
    created_at:         Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "CodeRecord":
        """Build a record from a MongoDB document of the ``codes`` collection."""
        return cls(
            owner_id=doc["userId"],
            owner_display_name=doc.get("username", ""),
            name=doc["name"],
            payload=doc.get("code", ""),
            created_at=doc.get("createdAt"),
        )

    def __str__(self) -> str:
        return (
            f"CodeRecord(owner={self.owner_id}, name={self.name!r}, "
            f"size={len(self.payload)})"
        )


@dataclass
class CodeSummary:
    """One line of an owner's code listing."""
    name:       str
    created_at: Optional[datetime] = None

    def created_on(self) -> str:
        """Creation date as ``YYYY-MM-DD`` (``unknown`` when missing)."""
        return self.created_at.strftime("%Y-%m-%d") if self.created_at else "unknown"
