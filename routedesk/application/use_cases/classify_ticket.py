"""ClassifyTicketUseCase — ask the advisor for a ticket's category and priority."""

from __future__ import annotations

import logging
import time

from routedesk.application.ports.advisor_port import AdvisorPort
from routedesk.application.ports.audit_log import AuditLog
from routedesk.application.ports.ticket_repo import TicketRepository
from routedesk.domain.entities.advisor_suggestion import TicketClassification
from routedesk.domain.entities.audit_entry import AuditEntry
from routedesk.domain.exceptions import AdvisorFailure, StoreUnavailable, TicketNotFound
from routedesk.domain.value_objects.enums import Priority, RequestType

logger = logging.getLogger(__name__)

CLASSIFY_OPERATION = "classify"


def unclassified(reason: str) -> TicketClassification:
    return TicketClassification(
        request_type=RequestType.OTHER,
        priority=Priority.NORMAL,
        confidence=0.0,
        reasoning=reason,
    )


class ClassifyTicketUseCase:
    """Orchestrates advisor classification of a single ticket."""

    def __init__(self, advisor: AdvisorPort, ticket_repo: TicketRepository, audit_log: AuditLog):
        self._advisor = advisor
        self._tickets = ticket_repo
        self._audit = audit_log

    async def execute(self, ticket_id: int) -> TicketClassification:
        """Classify a stored ticket.

        Advisor failures are recorded and answered with a zero-confidence
        ``other`` classification rather than raised.

        Raises:
            TicketNotFound: no ticket with this id.
        """
        ticket = await self._tickets.get_by_id(ticket_id)
        if ticket is None:
            raise TicketNotFound(ticket_id)

        if not self._advisor.is_configured:
            logger.warning("Ticket %d: advisor not configured, skipping classification", ticket_id)
            return unclassified("Advisor not configured")

        context = ticket.to_context()
        request = {"summary": context.summary, "data": dict(context.data)}
        started = time.perf_counter()
        try:
            result = await self._advisor.classify(context)
        except AdvisorFailure as e:
            logger.warning("Ticket %d: classification failed: %s", ticket_id, e)
            await self._record(ticket_id, request, started, error=str(e))
            return unclassified("Failed to classify due to error")

        await self._record(ticket_id, request, started, output=result.to_dict())
        return result

    async def _record(
        self,
        ticket_id: int,
        request: dict,
        started: float,
        output: dict | None = None,
        error: str | None = None,
    ) -> None:
        entry = AuditEntry(
            operation=CLASSIFY_OPERATION,
            ticket_id=ticket_id,
            provider=self._advisor.provider_name,
            model=self._advisor.model_name,
            input=request,
            output=output,
            success=error is None,
            latency_ms=int((time.perf_counter() - started) * 1000),
            error_message=error,
        )
        try:
            await self._audit.append(entry)
        except StoreUnavailable:
            logger.warning("Audit log unavailable, dropped '%s' entry", entry.operation)
