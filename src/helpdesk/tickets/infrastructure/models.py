"""
Ticket Infrastructure Models
============================

SQLAlchemy ORM models for the ticket module.

These are the database representations of our domain entities.
They belong in the infrastructure layer, not the domain layer.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from helpdesk.config import TicketCategory, TicketStatus
from helpdesk.infrastructure.database import Base


class TicketModel(Base):
    """
    Database model for Ticket entity.

    Maps to the 'tickets' table.
    """
    __tablename__ = "tickets"

    # Primary key (TICK-<ms>-<suffix>)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Requester
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    from_dept: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    # Routing and classification
    ticket_type: Mapped[str] = mapped_column(String(50), nullable=False)
    to_dept: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    issue_type: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default=TicketCategory.REQUEST.value)
    assigned_to: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Content
    description: Mapped[str] = mapped_column(Text, nullable=False)
    attachment: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # State
    status: Mapped[str] = mapped_column(String(50), nullable=False, default=TicketStatus.OPEN.value, index=True)
    priority: Mapped[str] = mapped_column(String(10), nullable=False)
    escalated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    sla_due: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class AuditLogModel(Base):
    """
    Database model for audit trail entries.

    Maps to the 'audit_logs' table. Rows are only ever inserted.
    """
    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True
    )
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    ticket_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user: Mapped[str] = mapped_column(String(255), nullable=False)
