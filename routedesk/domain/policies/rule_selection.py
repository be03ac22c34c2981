"""RuleSelectionPolicy — deterministic first-match over ordered rules."""

from __future__ import annotations

from typing import Iterable

from routedesk.domain.entities.routing_rule import RoutingRule
from routedesk.domain.entities.ticket_context import TicketContext
from routedesk.domain.policies.predicate_matcher import matches


def order_rules(rules: Iterable[RoutingRule]) -> list[RoutingRule]:
    """Active rules sorted by ``order`` ascending.

    ``sorted`` is stable, so rules with equal ``order`` keep their insertion
    order (the order the store returned them in).
    """
    return sorted((r for r in rules if r.active), key=lambda r: r.order)


def select_rule(
    rules: Iterable[RoutingRule],
    context: TicketContext,
) -> RoutingRule | None:
    """Return the first matching active rule.

    Scanning stops at the first match even if its assignee list is empty;
    the caller then falls back to the category defaults.
    """
    for rule in order_rules(rules):
        if matches(context, rule.predicate):
            return rule
    return None
