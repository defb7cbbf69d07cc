# app/ticket/schemas.py
from pydantic import BaseModel, Field

from app.ticket.models import TicketStatus


class TicketCreate(BaseModel):
    # title is checked by the service so a missing one reads "Title is required"
    title: str | None = None
    description: str | None = None
    type: str | None = None
    area: str | None = None

    model_config = {"extra": "forbid"}


class TicketUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    type: str | None = None
    area: str | None = None
    # not an enum: unknown values are dropped by the service instead of rejected
    status: str | None = None

    model_config = {"extra": "forbid"}


class TicketOut(BaseModel):
    id: int
    title: str
    description: str
    type: str
    area: str
    status: TicketStatus
    created_at: str

    model_config = {"from_attributes": True}


class MessageOut(BaseModel):
    message: str
