"""SQLAlchemy repository implementations."""

from __future__ import annotations

import functools
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from routedesk.adapters.persistence.models import (
    AiOperationModel,
    RoutingRuleModel,
    TicketModel,
)
from routedesk.application.ports.audit_log import AuditLog
from routedesk.application.ports.rule_repo import RuleRepository
from routedesk.application.ports.ticket_repo import TicketRepository
from routedesk.domain.entities.audit_entry import AuditEntry
from routedesk.domain.entities.historical_assignment import HistoricalAssignment
from routedesk.domain.entities.routing_rule import RoutingRule
from routedesk.domain.entities.ticket import Ticket
from routedesk.domain.exceptions import StoreUnavailable
from routedesk.domain.value_objects.enums import (
    Priority,
    RequestType,
    TicketStatus,
)

logger = logging.getLogger(__name__)


def _store_errors(store: str):
    """Translate driver / SQLAlchemy failures into StoreUnavailable."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except (SQLAlchemyError, OSError) as e:
                logger.error("%s store error in %s: %s", store, func.__name__, e)
                raise StoreUnavailable(store, str(e)) from e

        return wrapper

    return decorator


# ─── Mappers ─────────────────────────────────────────────────────────


def _ticket_to_domain(m: TicketModel) -> Ticket:
    return Ticket(
        id=m.id,
        request_type=RequestType(m.request_type),
        status=TicketStatus(m.status),
        priority=Priority(m.priority) if m.priority else Priority.NORMAL,
        summary=m.summary,
        customer_email=m.customer_email,
        customer_name=m.customer_name,
        data=dict(m.data) if m.data else {},
        assignee=m.assignee,
        ai_routing_suggestion=m.ai_routing_suggestion,
    )


def _rule_to_domain(m: RoutingRuleModel) -> RoutingRule:
    return RoutingRule(
        id=m.id,
        predicate=dict(m.predicate or {}),
        assignees=list(m.assignees or []),
        active=m.active,
        order=m.order,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlTicketRepository(TicketRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors("ticket")
    async def save(self, ticket: Ticket) -> Ticket:
        m = TicketModel(
            request_type=ticket.request_type.value,
            status=ticket.status.value,
            priority=ticket.priority.value,
            summary=ticket.summary,
            customer_email=ticket.customer_email,
            customer_name=ticket.customer_name,
            data=ticket.data or None,
            assignee=ticket.assignee,
            ai_routing_suggestion=ticket.ai_routing_suggestion,
        )
        self._s.add(m)
        await self._s.flush()
        ticket.id = m.id
        return ticket

    @_store_errors("ticket")
    async def get_by_id(self, ticket_id: int) -> Ticket | None:
        m = await self._s.get(TicketModel, ticket_id)
        return _ticket_to_domain(m) if m else None

    @_store_errors("ticket")
    async def update_routing(self, ticket: Ticket) -> Ticket:
        await self._s.execute(
            update(TicketModel)
            .where(TicketModel.id == ticket.id)
            .values(
                assignee=ticket.assignee,
                status=ticket.status.value,
                ai_routing_suggestion=ticket.ai_routing_suggestion,
            )
        )
        await self._s.flush()
        return ticket

    @_store_errors("ticket")
    async def get_resolved_history(
        self, request_type: RequestType, limit: int
    ) -> list[HistoricalAssignment]:
        # Savepoint: a failed lookup is tolerated and must not abort the
        # transaction that later writes the routing result.
        async with self._s.begin_nested():
            result = await self._s.execute(
                select(TicketModel.request_type, TicketModel.assignee)
                .where(
                    TicketModel.request_type == request_type.value,
                    TicketModel.status == TicketStatus.RESOLVED.value,
                    TicketModel.assignee.is_not(None),
                )
                .order_by(TicketModel.resolved_at.desc().nulls_last(), TicketModel.id.desc())
                .limit(limit)
            )
            return [
                HistoricalAssignment(request_type=row.request_type, assignee=row.assignee)
                for row in result
            ]


class SqlRuleRepository(RuleRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors("rule")
    async def list_active(self) -> list[RoutingRule]:
        # Savepoint: the engine falls back to defaults on failure and still
        # writes the ticket in the same transaction.
        async with self._s.begin_nested():
            result = await self._s.execute(
                select(RoutingRuleModel)
                .where(RoutingRuleModel.active.is_(True))
                .order_by(RoutingRuleModel.order, RoutingRuleModel.id)
            )
            return [_rule_to_domain(m) for m in result.scalars()]

    @_store_errors("rule")
    async def list_all(self) -> list[RoutingRule]:
        result = await self._s.execute(
            select(RoutingRuleModel).order_by(RoutingRuleModel.order, RoutingRuleModel.id)
        )
        return [_rule_to_domain(m) for m in result.scalars()]

    @_store_errors("rule")
    async def get_by_id(self, rule_id: int) -> RoutingRule | None:
        m = await self._s.get(RoutingRuleModel, rule_id)
        return _rule_to_domain(m) if m else None

    @_store_errors("rule")
    async def save(self, rule: RoutingRule) -> RoutingRule:
        m = RoutingRuleModel(
            predicate=rule.predicate,
            assignees=list(rule.assignees),
            active=rule.active,
            order=rule.order,
        )
        self._s.add(m)
        await self._s.flush()
        rule.id = m.id
        return rule

    @_store_errors("rule")
    async def update(self, rule: RoutingRule) -> RoutingRule:
        await self._s.execute(
            update(RoutingRuleModel)
            .where(RoutingRuleModel.id == rule.id)
            .values(
                predicate=rule.predicate,
                assignees=list(rule.assignees),
                active=rule.active,
                order=rule.order,
            )
        )
        await self._s.flush()
        return rule


class SqlAuditLog(AuditLog):
    def __init__(self, session: AsyncSession):
        self._s = session

    @_store_errors("audit")
    async def append(self, entry: AuditEntry) -> None:
        # Savepoint: a failed audit insert must not roll back the ticket update.
        async with self._s.begin_nested():
            self._s.add(
                AiOperationModel(
                    ticket_id=entry.ticket_id,
                    operation=entry.operation,
                    provider=entry.provider,
                    model=entry.model,
                    input=entry.input,
                    output=entry.output,
                    success=entry.success,
                    response_time_ms=entry.latency_ms,
                    error_message=entry.error_message,
                )
            )
