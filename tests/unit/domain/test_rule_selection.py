"""Tests for RuleSelectionPolicy."""

from routedesk.domain.entities.routing_rule import RoutingRule
from routedesk.domain.entities.ticket_context import TicketContext
from routedesk.domain.policies.rule_selection import order_rules, select_rule
from routedesk.domain.value_objects.enums import RequestType


def _rule(rid, order, assignees, predicate=None, active=True):
    return RoutingRule(
        id=rid, predicate=predicate or {}, assignees=assignees, active=active, order=order,
    )


QUOTE = TicketContext(request_type=RequestType.QUOTE, data={"productFamily": "acid"})


def test_smallest_order_wins():
    rules = [
        _rule(1, 50, ["sales-team"], {"requestType": "quote"}),
        _rule(2, 10, ["Adnan"], {"requestType": "quote"}),
    ]
    assert select_rule(rules, QUOTE).id == 2


def test_equal_order_first_inserted_wins():
    rules = [
        _rule(7, 10, ["Adnan"], {"requestType": "quote"}),
        _rule(3, 10, ["sales-team"], {"requestType": "quote"}),
    ]
    assert select_rule(rules, QUOTE).id == 7


def test_non_matching_rules_are_skipped():
    rules = [
        _rule(1, 1, ["logistics-team"], {"requestType": "freight"}),
        _rule(2, 2, ["Adnan"], {"data.productFamily": ["acid", "solvent"]}),
    ]
    assert select_rule(rules, QUOTE).id == 2


def test_inactive_rules_are_ignored():
    rules = [
        _rule(1, 1, ["Lori"], {"requestType": "quote"}, active=False),
        _rule(2, 2, ["sales-team"], {"requestType": "quote"}),
    ]
    assert select_rule(rules, QUOTE).id == 2


def test_first_match_stops_scan_even_without_assignees():
    rules = [
        _rule(1, 1, [], {"requestType": "quote"}),
        _rule(2, 2, ["Adnan"], {"requestType": "quote"}),
    ]
    assert select_rule(rules, QUOTE).id == 1


def test_no_match_returns_none():
    rules = [_rule(1, 1, ["coa-team"], {"requestType": "coa"})]
    assert select_rule(rules, QUOTE) is None
    assert select_rule([], QUOTE) is None


def test_order_rules_is_stable_and_filters_inactive():
    rules = [
        _rule(1, 20, ["a"]),
        _rule(2, 10, ["b"]),
        _rule(3, 10, ["c"], active=False),
        _rule(4, 10, ["d"]),
    ]
    assert [r.id for r in order_rules(rules)] == [2, 4, 1]
