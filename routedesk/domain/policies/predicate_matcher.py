"""PredicateMatcher — does a rule predicate hold for a ticket context?"""

from __future__ import annotations

from collections.abc import Mapping

from routedesk.domain.entities.ticket_context import TicketContext
from routedesk.domain.value_objects.context_value import (
    ABSENT,
    resolve_path,
    strict_equals,
)

SET_TYPES = (list, tuple, set, frozenset)


def value_matches(actual, expected) -> bool:
    """Compare one resolved context value to one predicate value.

    A collection of expected values means membership; anything else means
    strict equality (case-sensitive, no coercion).
    """
    if actual is ABSENT:
        return False
    if isinstance(expected, SET_TYPES):
        return any(strict_equals(actual, candidate) for candidate in expected)
    return strict_equals(actual, expected)


def matches(context: TicketContext | Mapping, predicate: Mapping) -> bool:
    """Pure function: True iff every predicate key matches (logical AND).

    Keys are field paths. ``"requestType"`` reads a top-level field,
    ``"data.productFamily"`` walks into the nested ticket data. A path that
    does not resolve is a non-match, never an error. An empty predicate
    matches every ticket.
    """
    lookup = context.as_lookup() if isinstance(context, TicketContext) else context
    for path, expected in predicate.items():
        if not value_matches(resolve_path(lookup, path), expected):
            return False
    return True
