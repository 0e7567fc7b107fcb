"""
Ticket Domain Layer
===================

Domain layer for ticket handling.

Contains:
- Entities: Ticket, AuditEntry
- Value Objects: TicketFilter, TicketVisibility, TicketStats, IssueType
- Domain Services: role visibility, filters, urgency ordering, stats,
  issue routing and ticket ids

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from helpdesk.tickets.domain.entities import AuditEntry, Ticket
from helpdesk.tickets.domain.value_objects import (
    CUSTOMER_ISSUE_TYPES,
    INTERNAL_ISSUE_TYPES,
    IssueType,
    TicketFilter,
    TicketStats,
    TicketVisibility,
)
from helpdesk.tickets.domain.services import (
    apply_filters,
    auto_assign_department,
    can_see_ticket,
    compute_stats,
    generate_ticket_id,
    issue_types,
    priority_rank,
    sort_by_urgency,
    visible_tickets,
)

__all__ = [
    # Entities
    "AuditEntry",
    "Ticket",
    # Value Objects
    "CUSTOMER_ISSUE_TYPES",
    "INTERNAL_ISSUE_TYPES",
    "IssueType",
    "TicketFilter",
    "TicketStats",
    "TicketVisibility",
    # Services
    "apply_filters",
    "auto_assign_department",
    "can_see_ticket",
    "compute_stats",
    "generate_ticket_id",
    "issue_types",
    "priority_rank",
    "sort_by_urgency",
    "visible_tickets",
]
