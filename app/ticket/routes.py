# app/ticket/routes.py
from fastapi import APIRouter, Depends
from app.core.store import TicketStore, get_store
from app.ticket.schemas import MessageOut, TicketCreate, TicketOut, TicketUpdate
from app.ticket import services as ticket_service

router = APIRouter(prefix="/api/tickets", tags=["Tickets"])

NOT_FOUND = {404: {"description": "The ticket was not found"}}


@router.get("", response_model=list[TicketOut], summary="Returns the list of all tickets")
def list_all(store: TicketStore = Depends(get_store)):
    return ticket_service.get_all_tickets(store)


@router.post("", response_model=TicketOut, status_code=201, summary="Create a new ticket")
def create(ticket: TicketCreate, store: TicketStore = Depends(get_store)):
    return ticket_service.create_ticket(store, ticket)


@router.put("/{ticket_id}", response_model=TicketOut, responses=NOT_FOUND, summary="Update a ticket")
def update(ticket_id: int, ticket: TicketUpdate, store: TicketStore = Depends(get_store)):
    return ticket_service.update_ticket(store, ticket_id, ticket)


@router.delete("/{ticket_id}", response_model=MessageOut, responses=NOT_FOUND, summary="Remove the ticket by id")
def delete(ticket_id: int, store: TicketStore = Depends(get_store)):
    return {"message": ticket_service.delete_ticket(store, ticket_id)}
