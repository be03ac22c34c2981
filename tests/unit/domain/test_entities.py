"""Tests for domain entities."""

import dataclasses

import pytest

from routedesk.domain.entities.advisor_suggestion import AdvisorSuggestion
from routedesk.domain.entities.ticket import Ticket
from routedesk.domain.entities.ticket_context import TicketContext
from routedesk.domain.value_objects.enums import Priority, RequestType, TicketStatus


def test_ticket_defaults():
    t = Ticket(id=1, request_type=RequestType.QUOTE)
    assert t.status == TicketStatus.OPEN
    assert t.priority == Priority.NORMAL
    assert t.data == {}
    assert t.is_routed() is False


def test_to_context_copies_fields():
    t = Ticket(
        id=1, request_type=RequestType.FREIGHT, priority=Priority.URGENT,
        summary="Truck late", customer_email="a@b.c", data={"carrier": "UPS"},
    )
    ctx = t.to_context()
    assert ctx.request_type == RequestType.FREIGHT
    assert ctx.priority == Priority.URGENT
    assert ctx.summary == "Truck late"
    assert ctx.customer_email == "a@b.c"
    assert ctx.data == {"carrier": "UPS"}


def test_to_context_is_a_snapshot():
    t = Ticket(id=1, request_type=RequestType.QUOTE, data={"productFamily": "acid"})
    ctx = t.to_context()
    t.data["productFamily"] = "base"
    assert ctx.data["productFamily"] == "acid"


def test_context_is_frozen():
    ctx = TicketContext(request_type=RequestType.CLAIM)
    with pytest.raises(dataclasses.FrozenInstanceError):
        ctx.summary = "changed"


def test_lookup_exposes_plain_values_and_aliases():
    ctx = TicketContext(
        request_type=RequestType.CERTIFICATE_OF_ANALYSIS,
        customer_email="qa@example.com",
    )
    lookup = ctx.as_lookup()
    assert lookup["requestType"] == "coa"
    assert lookup["request_type"] == "coa"
    assert type(lookup["requestType"]) is str
    assert lookup["priority"] == "normal"
    assert lookup["customerEmail"] == "qa@example.com"


def test_lookup_is_read_only():
    lookup = TicketContext(request_type=RequestType.QUOTE).as_lookup()
    with pytest.raises(TypeError):
        lookup["requestType"] = "claim"


def test_suggestion_to_dict():
    s = AdvisorSuggestion(suggested_assignees=["Adnan"], confidence=0.9, reasoning="acid expert")
    assert s.to_dict() == {
        "suggested_assignees": ["Adnan"],
        "confidence": 0.9,
        "reasoning": "acid expert",
        "alternative_assignees": [],
        "estimated_response_minutes": None,
    }
