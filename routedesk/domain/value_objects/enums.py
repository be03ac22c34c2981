"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class RequestType(str, Enum):
    QUOTE = "quote"
    CERTIFICATE_OF_ANALYSIS = "coa"
    FREIGHT = "freight"
    CLAIM = "claim"
    OTHER = "other"


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class TicketStatus(str, Enum):
    OPEN = "open"
    ROUTED = "routed"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class RoutingStage(str, Enum):
    """Lifecycle of a single routing decision."""

    PENDING = "pending"
    RULES_EVALUATED = "rules_evaluated"
    ADVISOR_CONSULTED = "advisor_consulted"
    ADVISOR_SKIPPED = "advisor_skipped"
    MERGED = "merged"
    PERSISTED = "persisted"
