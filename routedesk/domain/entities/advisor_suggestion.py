"""Advisor outputs — classification and routing suggestion."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from routedesk.domain.value_objects.enums import Priority, RequestType


@dataclass
class AdvisorSuggestion:
    suggested_assignees: list[str] = field(default_factory=list)
    confidence: float = 0.0
    reasoning: str | None = None
    alternative_assignees: list[str] = field(default_factory=list)
    estimated_response_minutes: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TicketClassification:
    request_type: RequestType
    priority: Priority
    confidence: float
    suggested_tags: list[str] = field(default_factory=list)
    reasoning: str | None = None
    model: str | None = None

    def to_dict(self) -> dict:
        return {
            "request_type": self.request_type.value,
            "priority": self.priority.value,
            "confidence": self.confidence,
            "suggested_tags": list(self.suggested_tags),
            "reasoning": self.reasoning,
            "model": self.model,
        }
