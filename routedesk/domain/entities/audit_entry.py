"""AuditEntry — append-only record of one advisor operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuditEntry:
    operation: str
    input: dict
    success: bool
    output: dict | None = None
    ticket_id: int | None = None
    provider: str = "unknown"
    model: str | None = None
    latency_ms: int | None = None
    error_message: str | None = None
