"""Pytest configuration and shared fixtures."""

import pytest

from routedesk.domain.entities.routing_rule import RoutingRule
from routedesk.domain.entities.ticket import Ticket
from routedesk.domain.value_objects.enums import Priority, RequestType


@pytest.fixture
def quote_ticket():
    return Ticket(
        id=1, request_type=RequestType.QUOTE, priority=Priority.NORMAL,
        summary="Need pricing for 20 drums of sulfuric acid",
        customer_email="buyer@example.com",
        data={"productFamily": "acid", "quantity": 20},
    )


@pytest.fixture
def claim_ticket():
    return Ticket(id=2, request_type=RequestType.CLAIM, summary="Drum arrived leaking")


@pytest.fixture
def quote_rule():
    return RoutingRule(
        id=1, predicate={"requestType": "quote"}, assignees=["sales-team"], order=1,
    )
