"""In-memory fakes for every routing port."""

from __future__ import annotations

from routedesk.application.ports.advisor_port import AdvisorPort
from routedesk.application.ports.audit_log import AuditLog
from routedesk.application.ports.rule_repo import RuleRepository
from routedesk.application.ports.ticket_repo import TicketRepository
from routedesk.domain.entities.advisor_suggestion import (
    AdvisorSuggestion,
    TicketClassification,
)
from routedesk.domain.entities.audit_entry import AuditEntry
from routedesk.domain.entities.historical_assignment import HistoricalAssignment
from routedesk.domain.entities.routing_rule import RoutingRule
from routedesk.domain.entities.ticket import Ticket
from routedesk.domain.exceptions import StoreUnavailable
from routedesk.domain.value_objects.enums import Priority, RequestType


class FakeRuleRepo(RuleRepository):
    def __init__(self, rules: list[RoutingRule] | None = None, unavailable: bool = False):
        self.rules: list[RoutingRule] = list(rules or [])
        self.unavailable = unavailable

    async def list_active(self):
        if self.unavailable:
            raise StoreUnavailable("rule", "connection refused")
        return [r for r in self.rules if r.active]

    async def list_all(self):
        return list(self.rules)

    async def get_by_id(self, rule_id):
        return next((r for r in self.rules if r.id == rule_id), None)

    async def save(self, rule):
        rule.id = len(self.rules) + 1
        self.rules.append(rule)
        return rule

    async def update(self, rule):
        self.rules = [rule if r.id == rule.id else r for r in self.rules]
        return rule


class FakeTicketRepo(TicketRepository):
    def __init__(
        self,
        tickets: list[Ticket] | None = None,
        history: list[HistoricalAssignment] | None = None,
        fail_reads: bool = False,
        fail_writes: bool = False,
    ):
        self.tickets: dict[int, Ticket] = {t.id: t for t in tickets or []}
        self.history = list(history or [])
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes
        self.updates: list[Ticket] = []
        self.history_requests: list[tuple[RequestType, int]] = []

    async def save(self, ticket):
        ticket.id = len(self.tickets) + 1
        self.tickets[ticket.id] = ticket
        return ticket

    async def get_by_id(self, ticket_id):
        if self.fail_reads:
            raise StoreUnavailable("ticket", "read timeout")
        return self.tickets.get(ticket_id)

    async def update_routing(self, ticket):
        if self.fail_writes:
            raise StoreUnavailable("ticket", "write failed")
        self.updates.append(ticket)
        self.tickets[ticket.id] = ticket
        return ticket

    async def get_resolved_history(self, request_type, limit):
        self.history_requests.append((request_type, limit))
        return [h for h in self.history if h.request_type == request_type.value][:limit]


class FakeAuditLog(AuditLog):
    def __init__(self, unavailable: bool = False):
        self.entries: list[AuditEntry] = []
        self.unavailable = unavailable

    async def append(self, entry):
        if self.unavailable:
            raise StoreUnavailable("audit", "disk full")
        self.entries.append(entry)


class FakeAdvisor(AdvisorPort):
    def __init__(
        self,
        suggestion: AdvisorSuggestion | None = None,
        error: Exception | None = None,
        configured: bool = True,
        classification: TicketClassification | None = None,
    ):
        self._suggestion = suggestion or AdvisorSuggestion()
        self._error = error
        self._configured = configured
        self._classification = classification
        self.calls: list[dict] = []

    @property
    def provider_name(self):
        return "fake"

    @property
    def model_name(self):
        return "fake-model"

    @property
    def is_configured(self):
        return self._configured

    async def classify(self, context):
        if self._error:
            raise self._error
        return self._classification or TicketClassification(
            request_type=RequestType.OTHER, priority=Priority.NORMAL, confidence=0.5,
        )

    async def suggest_routing(self, **kwargs):
        self.calls.append(kwargs)
        if self._error:
            raise self._error
        return self._suggestion
