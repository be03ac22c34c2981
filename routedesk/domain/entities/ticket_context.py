"""TicketContext — immutable view of a ticket fed to routing."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from routedesk.domain.value_objects.enums import Priority, RequestType

# Predicates are stored with the camelCase field names used by rule authors.
_FIELD_ALIASES: dict[str, str] = {
    "requestType": "request_type",
    "customerEmail": "customer_email",
}


@dataclass(frozen=True)
class TicketContext:
    request_type: RequestType
    priority: Priority = Priority.NORMAL
    customer_email: str | None = None
    summary: str | None = None
    data: Mapping = field(default_factory=dict)

    def as_lookup(self) -> Mapping:
        """Top-level fields as plain JSON-like values, keyed for predicates.

        Both ``requestType`` and ``request_type`` resolve to the same value.
        """
        values = {
            "request_type": _plain(self.request_type),
            "priority": _plain(self.priority),
            "customer_email": self.customer_email,
            "summary": self.summary,
            "data": self.data,
        }
        for alias, name in _FIELD_ALIASES.items():
            values[alias] = values[name]
        return MappingProxyType(values)


def _plain(value):
    return value.value if hasattr(value, "value") else value
