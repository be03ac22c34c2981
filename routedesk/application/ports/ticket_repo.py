"""Port interface for ticket persistence."""

from abc import ABC, abstractmethod

from routedesk.domain.entities.historical_assignment import HistoricalAssignment
from routedesk.domain.entities.ticket import Ticket
from routedesk.domain.value_objects.enums import RequestType


class TicketRepository(ABC):
    @abstractmethod
    async def save(self, ticket: Ticket) -> Ticket:
        ...

    @abstractmethod
    async def get_by_id(self, ticket_id: int) -> Ticket | None:
        """Raises StoreUnavailable if the store cannot be read."""
        ...

    @abstractmethod
    async def update_routing(self, ticket: Ticket) -> Ticket:
        """Write assignee, status and advisor suggestion for *ticket*.

        The store is expected to apply this as a single-row atomic update.
        """
        ...

    @abstractmethod
    async def get_resolved_history(
        self, request_type: RequestType, limit: int
    ) -> list[HistoricalAssignment]:
        """Return up to *limit* resolved tickets of this type that have an assignee."""
        ...
