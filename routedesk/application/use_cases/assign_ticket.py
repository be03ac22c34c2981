"""RoutingEngine — rules → defaults → advisor → merge → persist."""

from __future__ import annotations

import logging
import time
from typing import Callable, Collection

from routedesk.application.ports.advisor_port import AdvisorPort
from routedesk.application.ports.audit_log import AuditLog
from routedesk.application.ports.rule_repo import RuleRepository
from routedesk.application.ports.ticket_repo import TicketRepository
from routedesk.domain.entities.advisor_suggestion import AdvisorSuggestion
from routedesk.domain.entities.audit_entry import AuditEntry
from routedesk.domain.entities.historical_assignment import HistoricalAssignment
from routedesk.domain.entities.routing_decision import RoutingDecision
from routedesk.domain.entities.ticket_context import TicketContext
from routedesk.domain.exceptions import (
    PersistenceError,
    StoreUnavailable,
    TicketNotFound,
)
from routedesk.domain.policies.assignee_merge import (
    DEFAULT_VALID_ASSIGNEES,
    merge,
    should_merge,
    validate_suggestion,
)
from routedesk.domain.policies.default_assignment import (
    FALLBACK_QUEUE,
    default_assignees_for,
)
from routedesk.domain.policies.rule_selection import select_rule
from routedesk.domain.value_objects.enums import RoutingStage, TicketStatus

logger = logging.getLogger(__name__)

HISTORY_SAMPLE_LIMIT = 10
ROUTE_OPERATION = "route"


class RoutingEngine:
    """Decides and persists the assignees for a single ticket.

    The advisor is optional and never on the critical path: when it is
    missing, unconfigured, slow or broken the rule-based (or default)
    assignment is used. Only ``TicketNotFound``, a failed ticket read and a
    failed ticket write escape ``assign_ticket``.
    """

    def __init__(
        self,
        rule_repo: RuleRepository,
        ticket_repo: TicketRepository,
        audit_log: AuditLog,
        advisor: AdvisorPort | None = None,
        valid_assignees: Collection[str] = DEFAULT_VALID_ASSIGNEES,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._rules = rule_repo
        self._tickets = ticket_repo
        self._audit = audit_log
        self._advisor = advisor
        self._valid_assignees = frozenset(valid_assignees)
        self._clock = clock

    async def assign_ticket(self, ticket_id: int, enable_advisor: bool = False) -> list[str]:
        """Route a stored ticket and write the primary assignee back.

        Returns:
            Ordered, non-empty list of assignees (first = primary owner).

        Raises:
            TicketNotFound: no ticket with this id; nothing is persisted.
            StoreUnavailable: the ticket could not be read.
            PersistenceError: assignees were computed but could not be saved.
        """
        ticket = await self._tickets.get_by_id(ticket_id)
        if ticket is None:
            raise TicketNotFound(ticket_id)

        decision = await self.evaluate(
            ticket.to_context(), enable_advisor=enable_advisor, ticket_id=ticket_id
        )

        ticket.assignee = decision.primary_assignee
        ticket.status = TicketStatus.ROUTED
        ticket.ai_routing_suggestion = (
            decision.advisor_suggestion.to_dict() if decision.advisor_suggestion else None
        )
        try:
            await self._tickets.update_routing(ticket)
        except StoreUnavailable as e:
            logger.error("Ticket %s: failed to persist routing %s", ticket_id, decision.assignees)
            raise PersistenceError(ticket_id, decision.assignees, str(e)) from e

        logger.info(
            "Ticket %s → %s (stage=%s, rule=%s, fallback=%s, advisor=%s)",
            ticket_id, decision.assignees, RoutingStage.PERSISTED.value,
            decision.matched_rule_id, decision.fallback_used, decision.used_advisor,
        )
        return decision.assignees

    async def evaluate(
        self,
        context: TicketContext,
        enable_advisor: bool = False,
        ticket_id: int | None = None,
    ) -> RoutingDecision:
        """Compute a routing decision without persisting it."""
        self._trace(ticket_id, RoutingStage.PENDING)

        rule_assignees, matched_rule_id = await self._rule_assignees(context)
        decision = RoutingDecision(
            assignees=rule_assignees,
            matched_rule_id=matched_rule_id,
            fallback_used=matched_rule_id is None,
        )
        self._trace(ticket_id, RoutingStage.RULES_EVALUATED)

        if not self._advisor_enabled(enable_advisor):
            self._trace(ticket_id, RoutingStage.ADVISOR_SKIPPED)
            return decision

        suggestion = await self._consult_advisor(context, ticket_id)
        self._trace(ticket_id, RoutingStage.ADVISOR_CONSULTED)
        decision.advisor_suggestion = suggestion

        if should_merge(suggestion):
            decision.assignees = merge(
                rule_assignees,
                suggestion.suggested_assignees,
                suggestion.confidence,
                self._valid_assignees,
            )
            decision.used_advisor = True
            self._trace(ticket_id, RoutingStage.MERGED)

        if not decision.assignees:
            decision.assignees = [FALLBACK_QUEUE]
        return decision

    # ─── Steps ──────────────────────────────────────────────────────

    async def _rule_assignees(self, context: TicketContext) -> tuple[list[str], int | None]:
        try:
            rules = await self._rules.list_active()
        except StoreUnavailable:
            logger.warning(
                "Rule store unavailable, using default assignment for '%s'",
                context.request_type.value,
            )
            rules = []

        rule = select_rule(rules, context)
        if rule is None or not rule.assignees:
            return default_assignees_for(context.request_type), None
        return list(rule.assignees), rule.id

    def _advisor_enabled(self, requested: bool) -> bool:
        if not requested or self._advisor is None:
            return False
        if not self._advisor.is_configured:
            logger.info("Advisor requested but not configured, skipping")
            return False
        return True

    async def _consult_advisor(
        self, context: TicketContext, ticket_id: int | None
    ) -> AdvisorSuggestion | None:
        """Ask the advisor for a suggestion; record exactly one audit entry."""
        request = _request_snapshot(context)
        started = self._clock()
        try:
            history = await self._history(context)
            suggestion = await self._advisor.suggest_routing(
                request_type=context.request_type.value,
                priority=context.priority.value,
                summary=context.summary,
                customer_email=context.customer_email,
                data=dict(context.data),
                historical_assignments=history,
            )
            validate_suggestion(suggestion)
        except Exception as e:
            logger.exception("Ticket %s: advisor routing failed", ticket_id)
            await self._record(
                AuditEntry(
                    operation=ROUTE_OPERATION,
                    ticket_id=ticket_id,
                    provider=self._advisor.provider_name,
                    model=self._advisor.model_name,
                    input=request,
                    success=False,
                    latency_ms=self._elapsed_ms(started),
                    error_message=str(e) or type(e).__name__,
                )
            )
            return None

        await self._record(
            AuditEntry(
                operation=ROUTE_OPERATION,
                ticket_id=ticket_id,
                provider=self._advisor.provider_name,
                model=self._advisor.model_name,
                input=request,
                output=suggestion.to_dict(),
                success=True,
                latency_ms=self._elapsed_ms(started),
            )
        )
        logger.info(
            "Ticket %s: advisor suggested %s (confidence=%.2f)",
            ticket_id, suggestion.suggested_assignees, suggestion.confidence,
        )
        return suggestion

    async def _history(self, context: TicketContext) -> list[HistoricalAssignment]:
        try:
            return await self._tickets.get_resolved_history(
                context.request_type, HISTORY_SAMPLE_LIMIT
            )
        except StoreUnavailable:
            logger.warning("Could not load historical assignments, continuing without")
            return []

    async def _record(self, entry: AuditEntry) -> None:
        try:
            await self._audit.append(entry)
        except StoreUnavailable:
            logger.warning("Audit log unavailable, dropped '%s' entry", entry.operation)

    def _elapsed_ms(self, started: float) -> int:
        return int((self._clock() - started) * 1000)

    @staticmethod
    def _trace(ticket_id: int | None, stage: RoutingStage) -> None:
        logger.debug("Ticket %s: %s", ticket_id, stage.value)


def _request_snapshot(context: TicketContext) -> dict:
    return {
        "request_type": context.request_type.value,
        "priority": context.priority.value,
        "summary": context.summary,
        "customer_email": context.customer_email,
        "data": dict(context.data),
    }
