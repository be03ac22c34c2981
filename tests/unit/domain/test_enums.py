"""Tests for domain enums."""

from routedesk.domain.value_objects.enums import (
    Priority,
    RequestType,
    RoutingStage,
    TicketStatus,
)


def test_request_types_count():
    assert len(RequestType) == 5


def test_request_type_values():
    assert RequestType.QUOTE.value == "quote"
    assert RequestType.CERTIFICATE_OF_ANALYSIS.value == "coa"
    assert RequestType.FREIGHT.value == "freight"
    assert RequestType.CLAIM.value == "claim"
    assert RequestType.OTHER.value == "other"


def test_priority_values():
    assert [p.value for p in Priority] == ["low", "normal", "high", "urgent"]


def test_routed_status_value():
    assert TicketStatus.ROUTED.value == "routed"


def test_routing_stage_order():
    assert [s.value for s in RoutingStage] == [
        "pending", "rules_evaluated", "advisor_consulted",
        "advisor_skipped", "merged", "persisted",
    ]
