"""RoutingDecision — the outcome written back to a ticket."""

from __future__ import annotations

from dataclasses import dataclass

from routedesk.domain.entities.advisor_suggestion import AdvisorSuggestion


@dataclass
class RoutingDecision:
    assignees: list[str]
    used_advisor: bool = False
    advisor_suggestion: AdvisorSuggestion | None = None
    matched_rule_id: int | None = None
    fallback_used: bool = False

    @property
    def primary_assignee(self) -> str:
        return self.assignees[0]
