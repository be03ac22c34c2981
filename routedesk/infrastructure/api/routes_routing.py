"""Routing endpoints — assign and classify a single ticket."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from routedesk.adapters.persistence.database import get_session
from routedesk.application.use_cases.assign_ticket import RoutingEngine
from routedesk.application.use_cases.classify_ticket import ClassifyTicketUseCase
from routedesk.domain.exceptions import PersistenceError, StoreUnavailable, TicketNotFound
from routedesk.infrastructure.api.dependencies import get_classify_ticket_uc, get_routing_engine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["routing"])


@router.post("/{ticket_id}/route")
async def route_ticket(
    ticket_id: int,
    enable_advisor: bool = False,
    engine: RoutingEngine = Depends(get_routing_engine),
    session: AsyncSession = Depends(get_session),
):
    """Evaluate routing rules (plus the AI advisor if enabled) and assign the ticket."""
    try:
        assignees = await engine.assign_ticket(ticket_id, enable_advisor=enable_advisor)
        await session.commit()
    except TicketNotFound:
        raise HTTPException(status_code=404, detail="Ticket not found")
    except (PersistenceError, StoreUnavailable, SQLAlchemyError):
        logger.exception("Failed to route ticket %s", ticket_id)
        await session.rollback()
        raise HTTPException(status_code=500, detail="Failed to route ticket")

    return {"success": True, "assignees": assignees}


@router.post("/{ticket_id}/classify")
async def classify_ticket(
    ticket_id: int,
    classify_uc: ClassifyTicketUseCase = Depends(get_classify_ticket_uc),
    session: AsyncSession = Depends(get_session),
):
    """Ask the advisor for the ticket's request type and priority."""
    try:
        result = await classify_uc.execute(ticket_id)
    except TicketNotFound:
        raise HTTPException(status_code=404, detail="Ticket not found")
    await session.commit()
    return result.to_dict()
