"""Routing rule administration endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from routedesk.adapters.persistence.database import get_session
from routedesk.application.use_cases.manage_rules import ManageRulesUseCase
from routedesk.domain.entities.routing_rule import DEFAULT_RULE_ORDER, RoutingRule
from routedesk.domain.exceptions import InvalidRule
from routedesk.infrastructure.api.dependencies import get_manage_rules_uc

router = APIRouter(prefix="/rules", tags=["rules"])


class RuleIn(BaseModel):
    predicate: dict = Field(default_factory=dict)
    assignees: list[str]
    active: bool = True
    order: int = DEFAULT_RULE_ORDER


class RuleUpdate(BaseModel):
    predicate: dict | None = None
    assignees: list[str] | None = None
    active: bool | None = None
    order: int | None = None


def _serialize_rule(rule: RoutingRule) -> dict:
    return {
        "id": rule.id,
        "predicate": rule.predicate,
        "assignees": rule.assignees,
        "active": rule.active,
        "order": rule.order,
    }


@router.get("")
async def list_rules(rules_uc: ManageRulesUseCase = Depends(get_manage_rules_uc)):
    """List all rules in evaluation order."""
    rules = await rules_uc.list_rules()
    return {"total": len(rules), "rules": [_serialize_rule(r) for r in rules]}


@router.post("", status_code=201)
async def create_rule(
    body: RuleIn,
    rules_uc: ManageRulesUseCase = Depends(get_manage_rules_uc),
    session: AsyncSession = Depends(get_session),
):
    rule = RoutingRule(id=None, **body.model_dump())
    try:
        saved = await rules_uc.create_rule(rule)
    except InvalidRule as e:
        raise HTTPException(status_code=422, detail=str(e))
    await session.commit()
    return _serialize_rule(saved)


@router.patch("/{rule_id}")
async def update_rule(
    rule_id: int,
    body: RuleUpdate,
    rules_uc: ManageRulesUseCase = Depends(get_manage_rules_uc),
    session: AsyncSession = Depends(get_session),
):
    try:
        updated = await rules_uc.update_rule(rule_id, **body.model_dump(exclude_unset=True, exclude_none=True))
    except InvalidRule as e:
        raise HTTPException(status_code=422, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail="Rule not found")
    await session.commit()
    return _serialize_rule(updated)
