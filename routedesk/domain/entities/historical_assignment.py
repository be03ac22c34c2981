"""A past human routing decision, passed to the advisor as context."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HistoricalAssignment:
    request_type: str
    assignee: str
