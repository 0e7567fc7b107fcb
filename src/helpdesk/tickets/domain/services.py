"""
Ticket Domain Services
======================

Stateless ticket logic: role-based visibility, filtering, urgency
ordering, statistics, routing and identifiers.

Nothing here mutates the tickets it is given.
"""

import secrets
import string
import time
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from helpdesk.access.domain import AccessResolver, Module, PermissionLevel
from helpdesk.config import (
    DEFAULT_ASSIGNEE_DEPARTMENT,
    Priority,
    SLAStatus,
    TicketStatus,
)
from helpdesk.sla.domain import SLACalculator
from helpdesk.tickets.domain.entities import Ticket
from helpdesk.tickets.domain.value_objects import (
    CUSTOMER_ISSUE_TYPES,
    INTERNAL_ISSUE_TYPES,
    IssueType,
    TicketFilter,
    TicketStats,
    TicketVisibility,
)

TICKET_ID_PREFIX = "TICK"
_ID_ALPHABET = string.ascii_uppercase + string.digits

PRIORITY_RANKS = {
    Priority.P1.value: 1,
    Priority.P2.value: 2,
    Priority.P3.value: 3,
    Priority.P4.value: 4,
}

ISSUE_ROUTING = {
    "account": "Finance",
    "transaction": "Finance",
    "security": "Security",
    "loan": "Finance",
    "IT Support": "IT",
    "HR Issues": "Customer Service",
    "Facilities": "Operations",
    "Internal Process": "Operations",
    "other": "Customer Service",
}


# ========== Visibility ==========

def visible_tickets(
    tickets: Iterable[Ticket],
    department: Optional[str],
    resolver: AccessResolver,
) -> TicketVisibility:
    """
    Select the tickets a department may see from its ``ticketing`` level.

    owner/full/super-admin: all; user: raised by or routed to the caller;
    read: all (read-only); limited: routed to the caller; none: denied.
    Department comparisons use the caller's department as given.
    """
    level = resolver.level_for(department, Module.TICKETING.value)
    tickets = list(tickets)

    if resolver.is_super_admin(department) or level in (PermissionLevel.OWNER, PermissionLevel.FULL):
        return TicketVisibility(level, "all", tuple(tickets))
    if level == PermissionLevel.USER:
        selected = [t for t in tickets if t.to_dept == department or t.from_dept == department]
        return TicketVisibility(level, "department", tuple(selected))
    if level == PermissionLevel.READ:
        return TicketVisibility(level, "all-read-only", tuple(tickets))
    if level == PermissionLevel.LIMITED:
        selected = [t for t in tickets if t.to_dept == department]
        return TicketVisibility(level, "assigned", tuple(selected))
    return TicketVisibility(PermissionLevel.NONE, "none", (), access_denied=True)


def can_see_ticket(ticket: Ticket, department: Optional[str], resolver: AccessResolver) -> bool:
    return bool(visible_tickets([ticket], department, resolver).tickets)


# ========== Filtering & ordering ==========

def apply_filters(tickets: Iterable[Ticket], filters: Optional[TicketFilter]) -> List[Ticket]:
    tickets = list(tickets)
    if filters is None or filters.is_empty:
        return tickets

    if filters.search:
        term = filters.search.lower()
        tickets = [
            t for t in tickets
            if term in (t.id or "").lower()
            or term in (t.name or "").lower()
            or term in (t.description or "").lower()
        ]
    if filters.status:
        tickets = [t for t in tickets if _value(t.status) == filters.status]
    if filters.priority:
        tickets = [t for t in tickets if t.priority == filters.priority]
    if filters.category:
        tickets = [t for t in tickets if t.category == filters.category]
    return tickets


def priority_rank(priority: Optional[str]) -> int:
    """P1=1 .. P4=4; anything else ranks as P4."""
    return PRIORITY_RANKS.get(priority, PRIORITY_RANKS[Priority.P4.value])


def sort_by_urgency(tickets: Iterable[Ticket]) -> List[Ticket]:
    """Most urgent priority first, newest first within a priority."""
    by_newest = sorted(tickets, key=lambda t: t.created_at, reverse=True)
    return sorted(by_newest, key=lambda t: priority_rank(t.priority))


# ========== Statistics ==========

def compute_stats(
    tickets: Sequence[Ticket],
    calculator: SLACalculator,
    now: datetime,
) -> TicketStats:
    statuses = [_value(t.status) for t in tickets]
    sla = [calculator.classify(t.sla_due, now).status for t in tickets if t.is_open]
    return TicketStats(
        total=len(tickets),
        open=statuses.count(TicketStatus.OPEN.value),
        in_progress=statuses.count(TicketStatus.IN_PROGRESS.value),
        closed=statuses.count(TicketStatus.CLOSED.value),
        escalated=sum(1 for t in tickets if t.escalated),
        sla_breached=sla.count(SLAStatus.BREACH),
        sla_warning=sla.count(SLAStatus.WARNING),
    )


# ========== Routing ==========

def auto_assign_department(issue_type: Optional[str]) -> str:
    return ISSUE_ROUTING.get(issue_type or "", DEFAULT_ASSIGNEE_DEPARTMENT)


def issue_types(internal: bool) -> List[IssueType]:
    """Employees get the internal catalogue; customers get the FAQ list."""
    return list(INTERNAL_ISSUE_TYPES if internal else CUSTOMER_ISSUE_TYPES)


# ========== Identifiers ==========

def generate_ticket_id(now: Optional[datetime] = None) -> str:
    """
    ``TICK-<epoch ms>-<5 random chars>``.

    Collisions are not retried here; the store's primary key rejects them.
    """
    millis = int(now.timestamp() * 1000) if now is not None else time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(5))
    return f"{TICKET_ID_PREFIX}-{millis}-{suffix}"


def _value(status) -> str:
    return status.value if isinstance(status, TicketStatus) else str(status)
