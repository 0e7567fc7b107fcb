"""
Ticket Infrastructure Layer
===========================

Contains:
- Models: SQLAlchemy ORM models for tickets and the audit trail
- Repositories: SQLAlchemy implementations of the ticket repository interfaces
"""

from helpdesk.tickets.infrastructure.models import AuditLogModel, TicketModel
from helpdesk.tickets.infrastructure.repositories import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyTicketRepository,
)

__all__ = [
    "AuditLogModel",
    "TicketModel",
    "SQLAlchemyAuditLogRepository",
    "SQLAlchemyTicketRepository",
]
