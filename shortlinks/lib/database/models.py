"""Data models for the short link store."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


def _parse_timestamp(value) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass
class ShortLink:
    """Represents a short link record."""

    original_url: str
    short_code: str
    id: Optional[int] = None
    clicks: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "original_url": self.original_url,
            "short_code": self.short_code,
            "clicks": self.clicks,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ShortLink":
        """Create from dictionary."""
        return cls(
            id=data.get("id"),
            original_url=data["original_url"],
            short_code=data["short_code"],
            clicks=data.get("clicks", 0),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
            expires_at=_parse_timestamp(data.get("expires_at")),
        )
