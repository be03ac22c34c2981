"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from routedesk.adapters.advisor.openai_adapter import OpenAIAdvisor
from routedesk.adapters.persistence.database import get_session
from routedesk.adapters.persistence.repositories import (
    SqlAuditLog,
    SqlRuleRepository,
    SqlTicketRepository,
)
from routedesk.application.ports.advisor_port import AdvisorPort
from routedesk.application.use_cases.assign_ticket import RoutingEngine
from routedesk.application.use_cases.classify_ticket import ClassifyTicketUseCase
from routedesk.application.use_cases.manage_rules import ManageRulesUseCase
from routedesk.config import settings

# Re-export session dependency
get_db_session = get_session

# Stateless apart from its optional response cache; shared across requests.
_advisor = OpenAIAdvisor()


def get_advisor() -> AdvisorPort:
    return _advisor


def get_ticket_repo(session: AsyncSession = Depends(get_session)) -> SqlTicketRepository:
    return SqlTicketRepository(session)


def get_rule_repo(session: AsyncSession = Depends(get_session)) -> SqlRuleRepository:
    return SqlRuleRepository(session)


def get_routing_engine(
    session: AsyncSession = Depends(get_session),
    advisor: AdvisorPort = Depends(get_advisor),
) -> RoutingEngine:
    return RoutingEngine(
        rule_repo=SqlRuleRepository(session),
        ticket_repo=SqlTicketRepository(session),
        audit_log=SqlAuditLog(session),
        advisor=advisor,
        valid_assignees=settings.valid_assignees,
    )


def get_classify_ticket_uc(
    session: AsyncSession = Depends(get_session),
    advisor: AdvisorPort = Depends(get_advisor),
) -> ClassifyTicketUseCase:
    return ClassifyTicketUseCase(
        advisor=advisor,
        ticket_repo=SqlTicketRepository(session),
        audit_log=SqlAuditLog(session),
    )


def get_manage_rules_uc(session: AsyncSession = Depends(get_session)) -> ManageRulesUseCase:
    return ManageRulesUseCase(SqlRuleRepository(session))
