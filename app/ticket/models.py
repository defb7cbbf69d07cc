# app/ticket/models.py
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, field_validator


class TicketStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    CLOSED = "closed"


STATUSES = frozenset(s.value for s in TicketStatus)

DEFAULT_DESCRIPTION = ""
DEFAULT_TYPE = "General Inquiry"
DEFAULT_AREA = "IT Support"


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 in UTC with milliseconds and a Z suffix, e.g. 2024-05-01T12:00:00.123Z"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; one without an offset is taken as UTC."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class Ticket(BaseModel):
    """A ticket as stored in the collection."""

    id: int
    title: str
    description: str = DEFAULT_DESCRIPTION
    type: str = DEFAULT_TYPE
    area: str = DEFAULT_AREA
    status: TicketStatus = TicketStatus.OPEN
    created_at: str

    model_config = {"extra": "ignore"}

    @field_validator("created_at")
    @classmethod
    def _parseable_created_at(cls, value: str) -> str:
        # stored text is kept as is so untouched records save back unchanged
        parse_timestamp(value)
        return value

    @property
    def created(self) -> datetime:
        return parse_timestamp(self.created_at)
