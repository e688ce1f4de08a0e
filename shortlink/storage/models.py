"""Data models for shortlink."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _as_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if not isinstance(value, datetime):
        value = datetime.fromisoformat(value)
    # Naive values are stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class Link:
    """A short code mapped to a long URL plus its usage counters."""

    code: str
    long_url: str
    created_at: datetime
    updated_at: datetime
    hit_count: int = 0
    last_access_at: Optional[datetime] = None

    def with_hit(self, accessed_at: datetime) -> "Link":
        """Return a copy with the counter bumped and access times advanced.

        Timestamps only move forward, so a hit stamped slightly earlier but
        applied later does not roll last_access_at back.
        """
        last_access_at = accessed_at
        if self.last_access_at is not None:
            last_access_at = max(self.last_access_at, accessed_at)
        return replace(
            self,
            hit_count=self.hit_count + 1,
            last_access_at=last_access_at,
            updated_at=max(self.updated_at, accessed_at),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "long_url": self.long_url,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "hit_count": self.hit_count,
            "last_access_at": self.last_access_at.isoformat() if self.last_access_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Link":
        """Create from dictionary (ISO strings or datetimes)."""
        created_at = _as_datetime(data["created_at"])
        return cls(
            code=data["code"],
            long_url=data["long_url"],
            created_at=created_at,
            updated_at=_as_datetime(data.get("updated_at")) or created_at,
            hit_count=int(data.get("hit_count") or 0),
            last_access_at=_as_datetime(data.get("last_access_at")),
        )
