# app/client/controller.py
"""
Client-side state for the ticket board.

``TicketBoard`` talks to the ticket API over an ``httpx.Client`` (FastAPI's
``TestClient`` works too), keeps the last fetched collection as a local
cache, filters it by status and routes form submissions to create or update.
The cache is patched from the records the server returns instead of being
refetched. Failures are reported through ``alert``; nothing is retried.
"""
import logging
from datetime import datetime
from typing import Any, Callable

import httpx

from app.ticket.models import DEFAULT_AREA, DEFAULT_TYPE, STATUSES, parse_timestamp
from app.ticket.schemas import TicketCreate

logger = logging.getLogger(__name__)

API_PATH = "/api/tickets"
ALL = "all"

LOAD_ERROR = "Failed to load tickets. Please try again."
SAVE_ERROR = "Failed to save ticket"
DELETE_ERROR = "Failed to delete ticket"
DELETE_CONFIRM = "Are you sure you want to delete this ticket?"


def _log_alert(message: str) -> None:
    logger.warning(message)


def _always(message: str) -> bool:
    return True


class TicketBoard:
    def __init__(
        self,
        http: httpx.Client,
        alert: Callable[[str], None] = _log_alert,
        confirm: Callable[[str], bool] = _always,
        api_path: str = API_PATH,
    ):
        self.http = http
        self.alert = alert
        self.confirm = confirm
        self.api_path = api_path

        self.tickets: list[dict[str, Any]] = []
        self.current_filter = ALL
        self.editing_id: int | None = None
        self.load_error: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def refresh(self) -> list[dict[str, Any]]:
        try:
            response = self.http.get(self.api_path)
            response.raise_for_status()
            self.tickets = response.json()
            self.load_error = None
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Fetching tickets failed: %s", exc)
            self.load_error = LOAD_ERROR
        return self.tickets

    def set_filter(self, value: str) -> None:
        if value != ALL and value not in STATUSES:
            raise ValueError(f"Unknown filter {value!r}")
        self.current_filter = value

    def visible_tickets(self) -> list[dict[str, Any]]:
        if self.current_filter == ALL:
            return list(self.tickets)
        return [t for t in self.tickets if t.get("status") == self.current_filter]

    def find(self, ticket_id: int) -> dict[str, Any] | None:
        return next((t for t in self.tickets if t["id"] == ticket_id), None)

    def open_form(self, ticket_id: int | None = None) -> TicketCreate:
        if ticket_id is None:
            self.editing_id = None
            return TicketCreate(title="", description="", type=DEFAULT_TYPE, area=DEFAULT_AREA)

        self.editing_id = ticket_id
        ticket = self.find(ticket_id) or {}
        return TicketCreate(
            title=ticket.get("title", ""),
            description=ticket.get("description") or "",
            type=ticket.get("type") or DEFAULT_TYPE,
            area=ticket.get("area") or DEFAULT_AREA,
        )

    def close_form(self) -> None:
        self.editing_id = None

    def submit(self, form: TicketCreate) -> dict[str, Any] | None:
        body = {
            "title": form.title,
            "description": form.description,
            "type": form.type,
            "area": form.area,
        }
        try:
            if self.is_editing:
                response = self.http.put(f"{self.api_path}/{self.editing_id}", json=body)
            else:
                response = self.http.post(self.api_path, json=body)
            response.raise_for_status()
            saved = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Saving ticket failed: %s", exc)
            self.alert(SAVE_ERROR)
            return None

        if self.is_editing:
            for i, ticket in enumerate(self.tickets):
                if ticket["id"] == self.editing_id:
                    self.tickets[i] = saved
                    break
        else:
            self.tickets.insert(0, saved)

        self.close_form()
        return saved

    def delete(self, ticket_id: int) -> bool:
        if not self.confirm(DELETE_CONFIRM):
            return False
        try:
            response = self.http.delete(f"{self.api_path}/{ticket_id}")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("Deleting ticket %s failed: %s", ticket_id, exc)
            self.alert(DELETE_ERROR)
            return False

        self.tickets = [t for t in self.tickets if t["id"] != ticket_id]
        return True

    @staticmethod
    def card(ticket: dict[str, Any]) -> dict[str, Any]:
        """Display values for one ticket card."""
        created: datetime = parse_timestamp(ticket["created_at"])
        return {
            "short_id": f"#{str(ticket['id'])[-4:]}",
            "status": ticket["status"],
            "title": ticket["title"],
            "type": ticket.get("type") or "General",
            "area": ticket.get("area") or "General",
            "description": ticket.get("description") or "No description provided.",
            "date": created.strftime("%b %d, %H:%M"),
        }
