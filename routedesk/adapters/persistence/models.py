"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from routedesk.adapters.persistence.database import Base

# JSONB on PostgreSQL, plain JSON elsewhere (e.g. SQLite in local tooling).
JsonType = JSON().with_variant(JSONB(), "postgresql")


class TicketModel(Base):
    __tablename__ = "tickets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    request_type: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(24), nullable=False, default="open")
    priority: Mapped[str | None] = mapped_column(String(16), nullable=True, default="normal")
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    customer_email: Mapped[str | None] = mapped_column(String(256), nullable=True)
    customer_name: Mapped[str | None] = mapped_column(String(256), nullable=True)
    data: Mapped[dict | None] = mapped_column(JsonType, nullable=True)
    assignee: Mapped[str | None] = mapped_column(String(128), nullable=True)
    ai_routing_suggestion: Mapped[dict | None] = mapped_column(JsonType, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("tickets_status_idx", "status"),
        Index("tickets_assignee_idx", "assignee"),
        Index("tickets_request_type_idx", "request_type"),
    )


class RoutingRuleModel(Base):
    __tablename__ = "routing_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    predicate: Mapped[dict] = mapped_column(JsonType, nullable=False)
    assignees: Mapped[list[str]] = mapped_column(JsonType, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    order: Mapped[int] = mapped_column("order", Integer, nullable=False, default=100)

    __table_args__ = (Index("routing_rules_active_order_idx", "active", "order"),)


class AiOperationModel(Base):
    __tablename__ = "ai_operations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("tickets.id", ondelete="CASCADE"), nullable=True
    )
    operation: Mapped[str] = mapped_column(String(64), nullable=False)
    provider: Mapped[str] = mapped_column(String(32), nullable=False)
    model: Mapped[str | None] = mapped_column(String(64), nullable=True)
    input: Mapped[dict] = mapped_column(JsonType, nullable=False)
    output: Mapped[dict | None] = mapped_column(JsonType, nullable=True)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    response_time_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("ai_operations_ticket_id_idx", "ticket_id"),
        Index("ai_operations_operation_idx", "operation"),
        Index("ai_operations_created_at_idx", "created_at"),
    )
