"""Routing rule — a predicate over ticket context plus the queues it routes to."""

from dataclasses import dataclass, field

DEFAULT_RULE_ORDER = 100


@dataclass
class RoutingRule:
    id: int | None
    predicate: dict = field(default_factory=dict)
    assignees: list[str] = field(default_factory=list)
    active: bool = True
    order: int = DEFAULT_RULE_ORDER
