"""Domain errors raised across the routing core."""

from __future__ import annotations


class RoutingError(Exception):
    """Base class for every routing failure."""


class TicketNotFound(RoutingError):
    def __init__(self, ticket_id: int):
        super().__init__(f"Ticket {ticket_id} not found")
        self.ticket_id = ticket_id


class StoreUnavailable(RoutingError):
    """The backing store (rules, tickets or audit) could not be reached."""

    def __init__(self, store: str, detail: str | None = None):
        message = f"{store} store unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.store = store


class AdvisorFailure(RoutingError):
    """Timeout, malformed response or upstream error from the advisor."""


class MergeAnomaly(AdvisorFailure):
    """Advisor output that cannot be merged (e.g. confidence outside [0, 1])."""


class PersistenceError(RoutingError):
    """Assignees were computed but writing them back to the ticket failed."""

    def __init__(self, ticket_id: int, assignees: list[str], detail: str | None = None):
        message = f"Failed to persist routing for ticket {ticket_id}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.ticket_id = ticket_id
        self.assignees = assignees


class InvalidRule(RoutingError):
    """A routing rule failed validation."""
