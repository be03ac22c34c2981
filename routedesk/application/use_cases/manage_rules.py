"""ManageRulesUseCase — administrative create / update / list of routing rules."""

from __future__ import annotations

import logging
from dataclasses import replace

from routedesk.application.ports.rule_repo import RuleRepository
from routedesk.domain.entities.routing_rule import RoutingRule
from routedesk.domain.exceptions import InvalidRule
from routedesk.domain.value_objects.context_value import is_scalar

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"predicate", "assignees", "active", "order"})


def validate_rule(rule: RoutingRule) -> None:
    """Raise InvalidRule if *rule* could not be evaluated safely."""
    if not isinstance(rule.predicate, dict):
        raise InvalidRule("predicate must be a mapping of field path to value")
    for path, expected in rule.predicate.items():
        if not isinstance(path, str) or not path or "" in path.split("."):
            raise InvalidRule(f"invalid predicate path: {path!r}")
        values = expected if isinstance(expected, list) else [expected]
        if not all(is_scalar(v) for v in values):
            raise InvalidRule(f"predicate value for '{path}' must be a scalar or list of scalars")

    if not isinstance(rule.assignees, list):
        raise InvalidRule("assignees must be a list of queue or agent names")
    if not all(isinstance(a, str) and a.strip() for a in rule.assignees):
        raise InvalidRule("assignees must be non-empty strings")
    if len(set(rule.assignees)) != len(rule.assignees):
        raise InvalidRule("assignees must not repeat")
    if rule.active and not rule.assignees:
        raise InvalidRule("an active rule needs at least one assignee")
    if not isinstance(rule.active, bool):
        raise InvalidRule("active must be a boolean")
    if isinstance(rule.order, bool) or not isinstance(rule.order, int):
        raise InvalidRule("order must be an integer")


class ManageRulesUseCase:
    def __init__(self, rule_repo: RuleRepository):
        self._rules = rule_repo

    async def list_rules(self) -> list[RoutingRule]:
        return await self._rules.list_all()

    async def create_rule(self, rule: RoutingRule) -> RoutingRule:
        validate_rule(rule)
        saved = await self._rules.save(rule)
        logger.info("Created routing rule %s (order=%d)", saved.id, saved.order)
        return saved

    async def update_rule(self, rule_id: int, **changes) -> RoutingRule | None:
        """Apply *changes* to an existing rule. Returns None if it does not exist."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidRule(f"unknown rule fields: {sorted(unknown)}")

        rule = await self._rules.get_by_id(rule_id)
        if rule is None:
            return None
        candidate = replace(rule, **changes)
        validate_rule(candidate)

        updated = await self._rules.update(candidate)
        logger.info("Updated routing rule %s: %s", rule_id, sorted(changes))
        return updated
