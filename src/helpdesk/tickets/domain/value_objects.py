"""
Ticket Value Objects
====================

Immutable query and result objects for ticket listing.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from helpdesk.access.domain import PermissionLevel


@dataclass(frozen=True)
class TicketFilter:
    """
    Optional list filters, combined with AND.

    ``search`` matches id, requester name or description, ignoring case.
    The other fields are exact matches.
    """
    search: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    category: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not (self.search or self.status or self.priority or self.category)


@dataclass(frozen=True)
class TicketVisibility:
    """
    Role-based selection of tickets for one caller.

    ``access_denied`` distinguishes "no permission" from "no tickets".
    """
    level: PermissionLevel
    scope: str
    tickets: Tuple = field(default_factory=tuple)
    access_denied: bool = False


@dataclass(frozen=True)
class TicketStats:
    """Counts shown above the ticket list."""
    total: int = 0
    open: int = 0
    in_progress: int = 0
    closed: int = 0
    escalated: int = 0
    sla_breached: int = 0
    sla_warning: int = 0


@dataclass(frozen=True)
class IssueType:
    """One entry of the submission form's issue list."""
    value: str
    text: str


INTERNAL_ISSUE_TYPES: List[IssueType] = [
    IssueType("IT Support", "IT Support"),
    IssueType("HR Issues", "HR Issues"),
    IssueType("Facilities", "Facilities"),
    IssueType("Internal Process", "Internal Process"),
    IssueType("other", "Other"),
]

CUSTOMER_ISSUE_TYPES: List[IssueType] = [
    IssueType("account", "How do I check my account balance?"),
    IssueType("transaction", "How do I transfer money between accounts?"),
    IssueType("security", "What should I do if I suspect fraudulent activity?"),
    IssueType("loan", "How do I apply for a loan?"),
    IssueType("other", "Other"),
]
