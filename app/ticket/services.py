# app/ticket/services.py
"""
Ticket operations over the stored collection.

Every operation loads the whole collection, changes it in memory and writes
the whole collection back. The load and the save are separate store calls,
so concurrent writers can overwrite each other's changes.
"""
import logging
import time

from pydantic import ValidationError as PydanticValidationError

from app.core.errors import NotFound, StoreError, ValidationError
from app.core.store import TicketStore
from app.ticket.models import (
    DEFAULT_AREA,
    DEFAULT_DESCRIPTION,
    DEFAULT_TYPE,
    STATUSES,
    Ticket,
    TicketStatus,
    utc_timestamp,
)
from app.ticket.schemas import TicketCreate, TicketUpdate

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Ticket deleted successfully"


def _load(store: TicketStore) -> list[Ticket]:
    try:
        return [Ticket.model_validate(item) for item in store.get_tickets()]
    except PydanticValidationError as exc:
        raise StoreError(f"Stored ticket collection is malformed: {exc.error_count()} invalid field(s)") from exc


def _save(store: TicketStore, tickets: list[Ticket]) -> None:
    store.save_tickets([t.model_dump(mode="json") for t in tickets])


def _find_index(tickets: list[Ticket], ticket_id: int) -> int:
    for i, ticket in enumerate(tickets):
        if ticket.id == ticket_id:
            return i
    raise NotFound("Ticket not found")


def next_ticket_id(tickets: list[Ticket], now_ms: int | None = None) -> int:
    """Current time in milliseconds, bumped past the highest existing id."""
    candidate = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    highest = max((t.id for t in tickets), default=0)
    return max(candidate, highest + 1)


def get_all_tickets(store: TicketStore) -> list[Ticket]:
    tickets = _load(store)
    return sorted(tickets, key=lambda t: (t.created, t.id), reverse=True)


def create_ticket(store: TicketStore, payload: TicketCreate) -> Ticket:
    if not payload.title:
        raise ValidationError("Title is required")

    tickets = _load(store)
    ticket = Ticket(
        id=next_ticket_id(tickets),
        title=payload.title,
        description=payload.description or DEFAULT_DESCRIPTION,
        type=payload.type or DEFAULT_TYPE,
        area=payload.area or DEFAULT_AREA,
        status=TicketStatus.OPEN,
        created_at=utc_timestamp(),
    )
    tickets.append(ticket)
    _save(store, tickets)
    logger.info("Created ticket %s", ticket.id)
    return ticket


def update_ticket(store: TicketStore, ticket_id: int, payload: TicketUpdate) -> Ticket:
    tickets = _load(store)
    index = _find_index(tickets, ticket_id)

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    status = changes.pop("status", None)
    if status is not None:
        if status in STATUSES:
            changes["status"] = TicketStatus(status)
        else:
            # unknown statuses are dropped, not rejected
            logger.info("Ignoring invalid status %r for ticket %s", status, ticket_id)

    ticket = tickets[index].model_copy(update=changes)
    tickets[index] = ticket
    _save(store, tickets)
    logger.info("Updated ticket %s fields=%s", ticket_id, sorted(changes))
    return ticket


def delete_ticket(store: TicketStore, ticket_id: int) -> str:
    tickets = _load(store)
    _find_index(tickets, ticket_id)
    _save(store, [t for t in tickets if t.id != ticket_id])
    logger.info("Deleted ticket %s", ticket_id)
    return DELETED_MESSAGE
