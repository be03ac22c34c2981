"""Ticket endpoints — intake + detail view."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from routedesk.adapters.persistence.database import get_session
from routedesk.adapters.persistence.repositories import SqlTicketRepository
from routedesk.domain.entities.ticket import Ticket
from routedesk.domain.value_objects.enums import Priority, RequestType
from routedesk.infrastructure.api.dependencies import get_ticket_repo

router = APIRouter(prefix="/tickets", tags=["tickets"])


class TicketIn(BaseModel):
    request_type: RequestType
    priority: Priority = Priority.NORMAL
    summary: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    data: dict = Field(default_factory=dict)


@router.post("", status_code=201)
async def create_ticket(
    body: TicketIn,
    ticket_repo: SqlTicketRepository = Depends(get_ticket_repo),
    session: AsyncSession = Depends(get_session),
):
    """Store a new open ticket; routing is triggered separately."""
    ticket = await ticket_repo.save(Ticket(id=None, **body.model_dump()))
    await session.commit()
    return _serialize_ticket(ticket)


@router.get("/{ticket_id}")
async def get_ticket(
    ticket_id: int,
    ticket_repo: SqlTicketRepository = Depends(get_ticket_repo),
):
    """Get a single ticket with its routing state."""
    ticket = await ticket_repo.get_by_id(ticket_id)
    if not ticket:
        raise HTTPException(status_code=404, detail="Ticket not found")
    return _serialize_ticket(ticket)


def _serialize_ticket(t: Ticket) -> dict:
    return {
        "id": t.id,
        "request_type": t.request_type.value,
        "status": t.status.value,
        "priority": t.priority.value,
        "summary": t.summary,
        "customer_email": t.customer_email,
        "customer_name": t.customer_name,
        "data": t.data,
        "assignee": t.assignee,
        "ai_routing_suggestion": t.ai_routing_suggestion,
    }
