"""Ticket entity — a customer request awaiting routing."""

from __future__ import annotations

from dataclasses import dataclass, field

from routedesk.domain.entities.ticket_context import TicketContext
from routedesk.domain.value_objects.enums import Priority, RequestType, TicketStatus


@dataclass
class Ticket:
    id: int | None
    request_type: RequestType
    status: TicketStatus = TicketStatus.OPEN
    priority: Priority = Priority.NORMAL
    summary: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    data: dict = field(default_factory=dict)
    assignee: str | None = None
    ai_routing_suggestion: dict | None = None

    def to_context(self) -> TicketContext:
        """Read-only snapshot used by the routing engine."""
        return TicketContext(
            request_type=self.request_type,
            priority=self.priority or Priority.NORMAL,
            customer_email=self.customer_email,
            summary=self.summary,
            data=dict(self.data or {}),
        )

    def is_routed(self) -> bool:
        return self.status == TicketStatus.ROUTED and self.assignee is not None
