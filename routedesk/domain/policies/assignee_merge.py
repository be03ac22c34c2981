"""AssigneeMergePolicy — combine rule-based and advisor-suggested assignees."""

from __future__ import annotations

import math
from typing import Collection, Sequence

from routedesk.domain.entities.advisor_suggestion import AdvisorSuggestion
from routedesk.domain.exceptions import MergeAnomaly
from routedesk.domain.policies.default_assignment import FALLBACK_QUEUE

# The advisor may reorder rule results only when strictly above this.
CONFIDENCE_THRESHOLD = 0.8

DEFAULT_VALID_ASSIGNEES: frozenset[str] = frozenset({
    "sales-team",
    "coa-team",
    "logistics-team",
    "customer-service",
    "Adnan",
    "Lori",
})


def validate_suggestion(suggestion: AdvisorSuggestion) -> None:
    """Raise MergeAnomaly if the advisor output cannot be trusted for merging."""
    confidence = suggestion.confidence
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        raise MergeAnomaly(f"Confidence is not a number: {confidence!r}")
    if math.isnan(confidence) or not 0.0 <= confidence <= 1.0:
        raise MergeAnomaly(f"Confidence outside [0, 1]: {confidence!r}")
    if not all(isinstance(a, str) for a in suggestion.suggested_assignees):
        raise MergeAnomaly("Suggested assignees must be strings")


def should_merge(suggestion: AdvisorSuggestion | None) -> bool:
    return (
        suggestion is not None
        and suggestion.confidence > CONFIDENCE_THRESHOLD
        and len(suggestion.suggested_assignees) > 0
    )


def merge(
    rule_assignees: Sequence[str],
    advisor_assignees: Sequence[str],
    confidence: float,
    valid_assignees: Collection[str],
) -> list[str]:
    """Merge two ranked assignee lists into one de-duplicated list.

    Rules:
      1. Confidence <= threshold or no advisor picks → rule list unchanged.
      2. A valid top advisor pick becomes the primary owner.
      3. Every rule assignee follows, in rule order (never dropped).
      4. Remaining valid advisor picks are appended.
      5. An empty result falls back to the customer-service queue.
    """
    if confidence <= CONFIDENCE_THRESHOLD or not advisor_assignees:
        return list(rule_assignees)

    merged: list[str] = []

    if advisor_assignees[0] in valid_assignees:
        merged.append(advisor_assignees[0])

    for assignee in rule_assignees:
        if assignee not in merged:
            merged.append(assignee)

    for assignee in advisor_assignees[1:]:
        if assignee in valid_assignees and assignee not in merged:
            merged.append(assignee)

    return merged or [FALLBACK_QUEUE]
