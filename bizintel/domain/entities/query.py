"""Explicit query options handed to repositories."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from .errors import ValidationError


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True, slots=True)
class DateRange:
    """Half-open ``[start, end)`` window; either bound may be open."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.start is not None:
            object.__setattr__(self, "start", ensure_utc(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", ensure_utc(self.end))
        if self.start and self.end and self.start >= self.end:
            raise ValidationError(
                "start_date must be earlier than end_date",
                {"start_date": self.start.isoformat(), "end_date": self.end.isoformat()},
            )


@dataclass(frozen=True, slots=True)
class OrderQuery:
    """Every optional order filter, as a named nullable field."""

    date_range: DateRange = field(default_factory=DateRange)
    client_id: Optional[str] = None
