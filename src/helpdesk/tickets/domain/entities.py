"""
Ticket Domain Entities
======================

Pure Python domain entities for the helpdesk.

Following Domain-Driven Design principles, these entities contain
business logic and are free of infrastructure concerns.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from helpdesk.config import AuditAction, TicketCategory, TicketStatus


@dataclass
class Ticket:
    """
    Ticket entity representing one helpdesk request.

    ``sla_due`` is fixed at creation from ``created_at`` and ``priority``;
    only an explicit re-prioritization moves it. ``escalated`` is
    independent of ``status`` and is never cleared automatically.
    """

    # Core attributes
    id: str
    name: str
    email: str
    from_dept: str
    ticket_type: str
    to_dept: str
    issue_type: str
    description: str
    status: TicketStatus
    priority: str

    # Timestamps
    created_at: datetime
    sla_due: Optional[datetime] = None

    # Tracking
    escalated: bool = False
    attachment: str = ""
    category: str = TicketCategory.REQUEST.value
    assigned_to: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status != TicketStatus.CLOSED

    def change_status(self, status: TicketStatus) -> None:
        """Any of Open / In Progress / Closed may follow any other."""
        self.status = TicketStatus(status)

    def escalate(self) -> None:
        self.escalated = True

    def reassign(self, to_dept: str) -> None:
        self.to_dept = to_dept

    def assign(self, person: Optional[str]) -> None:
        self.assigned_to = person or None

    def reprioritize(self, priority: str, sla_due: datetime) -> None:
        self.priority = priority
        self.sla_due = sla_due


@dataclass
class AuditEntry:
    """One audit trail record: who did what to which ticket, and when."""

    timestamp: datetime
    action: AuditAction
    ticket_id: str
    user: str
    id: Optional[int] = None
