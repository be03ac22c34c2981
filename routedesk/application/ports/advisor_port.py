"""Port interface for the AI routing advisor."""

from abc import ABC, abstractmethod

from routedesk.domain.entities.advisor_suggestion import (
    AdvisorSuggestion,
    TicketClassification,
)
from routedesk.domain.entities.historical_assignment import HistoricalAssignment
from routedesk.domain.entities.ticket_context import TicketContext


class AdvisorPort(ABC):
    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @property
    def model_name(self) -> str | None:
        return None

    @property
    def is_configured(self) -> bool:
        """False when the backend has no credentials; callers skip the advisor."""
        return True

    @abstractmethod
    async def classify(self, context: TicketContext) -> TicketClassification:
        ...

    @abstractmethod
    async def suggest_routing(
        self,
        request_type: str,
        priority: str,
        summary: str | None,
        customer_email: str | None,
        data: dict | None,
        historical_assignments: list[HistoricalAssignment],
    ) -> AdvisorSuggestion:
        """Suggest ranked assignees for a ticket.

        Implementations enforce their own timeout and raise AdvisorFailure on
        timeout, malformed output or upstream errors.
        """
        ...
