"""
Ticket Application Services
===========================

Application services orchestrate the ticket lifecycle and coordinate
between the access resolver, the SLA calculator and the repositories.

Following SOLID principles:
- Single Responsibility: storage lives behind repository interfaces
- Dependency Inversion: services depend on abstractions, not SQLAlchemy
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from helpdesk.access.application import AccessService
from helpdesk.access.domain import Module, PermissionLevel
from helpdesk.config import (
    AuditAction,
    CUSTOMER_DEPARTMENT,
    TicketStatus,
)
from helpdesk.core import AccessDeniedException, ResourceNotFoundException
from helpdesk.shared.infrastructure.logging import get_logger
from helpdesk.sla.domain import SLACalculator, SLAEvaluation
from helpdesk.tickets.application.dto import TicketCreateDTO, TicketUpdateDTO
from helpdesk.tickets.domain import (
    AuditEntry,
    IssueType,
    Ticket,
    TicketFilter,
    TicketStats,
    TicketVisibility,
    apply_filters,
    auto_assign_department,
    can_see_ticket,
    compute_stats,
    generate_ticket_id,
    issue_types,
    sort_by_urgency,
    visible_tickets,
)

logger = get_logger(__name__)

UNKNOWN_USER = "Unknown"


# ========== Repository Interfaces (Dependency Inversion) ==========

class ITicketRepository(ABC):
    """Interface for ticket data access."""

    @abstractmethod
    async def list_all(self) -> List[Ticket]:
        """Every stored ticket, in no particular order."""

    @abstractmethod
    async def list_open(self) -> List[Ticket]:
        """Tickets whose status is not Closed."""

    @abstractmethod
    async def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        """Get ticket by id."""

    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket:
        """Persist a new ticket."""

    @abstractmethod
    async def update(self, ticket_id: str, fields: Dict[str, Any]) -> Ticket:
        """Apply a partial update; raises ResourceNotFoundException for unknown ids."""


class IAuditLogRepository(ABC):
    """Interface for the append-only audit trail."""

    @abstractmethod
    async def add(self, entry: AuditEntry) -> AuditEntry:
        """Append one entry."""

    @abstractmethod
    async def list_recent(self, limit: int = 100) -> List[AuditEntry]:
        """Newest entries first."""


# ========== Results ==========

@dataclass
class TicketListing:
    """Visible, filtered and ordered tickets with their live SLA state."""
    visibility: TicketVisibility
    tickets: List[Ticket]
    evaluations: Dict[str, SLAEvaluation] = field(default_factory=dict)
    stats: TicketStats = field(default_factory=TicketStats)

    @property
    def read_only(self) -> bool:
        return self.visibility.scope == "all-read-only"


# ========== Application Services ==========

class TicketService:
    """
    Ticket lifecycle: submit, list, inspect, update, escalate.

    Every operation is gated on the caller's ``ticketing`` level:
    listing needs ``limited``, submitting needs ``read`` and changes need
    ``user`` plus visibility of the ticket being changed.
    """

    def __init__(
        self,
        ticket_repository: ITicketRepository,
        audit_repository: IAuditLogRepository,
        access_service: AccessService,
        calculator: SLACalculator,
    ):
        self._ticket_repo = ticket_repository
        self._audit_repo = audit_repository
        self._access = access_service
        self._calculator = calculator

    @property
    def calculator(self) -> SLACalculator:
        return self._calculator

    async def submit(
        self,
        payload: TicketCreateDTO,
        department: Optional[str],
        user: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Ticket:
        """
        Create a ticket.

        Blank ``from_dept`` becomes Customer and blank ``to_dept`` is
        routed from the issue type. ``sla_due`` is fixed here.
        """
        self._access.require(department, Module.TICKETING.value, PermissionLevel.READ)
        now = now or datetime.now(timezone.utc)

        ticket = Ticket(
            id=generate_ticket_id(now),
            name=payload.name,
            email=payload.email,
            from_dept=(payload.from_dept or "").strip() or CUSTOMER_DEPARTMENT,
            ticket_type=payload.ticket_type,
            to_dept=(payload.to_dept or "").strip() or auto_assign_department(payload.issue_type),
            issue_type=payload.issue_type,
            description=payload.description,
            status=TicketStatus.OPEN,
            priority=payload.priority,
            created_at=now,
            sla_due=self._calculator.compute_due_at(payload.priority, now),
            escalated=False,
            attachment=payload.attachment,
            category=payload.category,
        )

        created = await self._ticket_repo.create(ticket)
        await self._audit(AuditAction.CREATE_TICKET, created.id, user or department or UNKNOWN_USER, now)

        logger.info(
            "Ticket created",
            extra={
                "ticket_id": created.id,
                "priority": created.priority,
                "to_dept": created.to_dept,
                "sla_due": created.sla_due.isoformat() if created.sla_due else None,
            }
        )
        return created

    async def list_for(
        self,
        department: Optional[str],
        filters: Optional[TicketFilter] = None,
        now: Optional[datetime] = None,
    ) -> TicketListing:
        """Role-filtered, filtered and urgency-ordered tickets with SLA state."""
        self._access.require(department, Module.TICKETING.value, PermissionLevel.LIMITED)
        now = now or datetime.now(timezone.utc)

        visibility = visible_tickets(await self._ticket_repo.list_all(), department, self._access.resolver)
        if visibility.access_denied:
            raise AccessDeniedException(Module.TICKETING.value, PermissionLevel.LIMITED.value, department)

        tickets = sort_by_urgency(apply_filters(visibility.tickets, filters))
        listing = TicketListing(
            visibility=visibility,
            tickets=tickets,
            evaluations={t.id: self.evaluate(t, now) for t in tickets},
            stats=compute_stats(tickets, self._calculator, now),
        )

        logger.debug(
            "Tickets listed",
            extra={
                "department": department,
                "scope": visibility.scope,
                "visible": len(visibility.tickets),
                "returned": len(tickets),
            }
        )
        return listing

    async def get(self, ticket_id: str, department: Optional[str]) -> Ticket:
        self._access.require(department, Module.TICKETING.value, PermissionLevel.LIMITED)
        return await self._get_visible(ticket_id, department)

    async def update(
        self,
        ticket_id: str,
        payload: TicketUpdateDTO,
        department: Optional[str],
        user: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Ticket:
        """
        Apply a partial update.

        A priority change moves ``sla_due`` to created_at + the new window.
        Status and the escalated flag are independent of each other.
        """
        self._access.require(department, Module.TICKETING.value, PermissionLevel.USER)
        now = now or datetime.now(timezone.utc)
        current = await self._get_visible(ticket_id, department)

        changed = replace(current)
        if payload.status is not None:
            changed.change_status(TicketStatus(payload.status))
        if payload.to_dept is not None:
            changed.reassign(payload.to_dept)
        if payload.priority is not None and payload.priority != current.priority:
            changed.reprioritize(
                payload.priority,
                self._calculator.compute_due_at(payload.priority, current.created_at),
            )
        if payload.escalated:
            changed.escalate()
        if payload.assigned_to is not None:
            changed.assign(payload.assigned_to)
        if payload.category is not None:
            changed.category = payload.category

        fields = _diff(current, changed)
        if not fields:
            return current

        updated = await self._ticket_repo.update(ticket_id, fields)
        action = AuditAction.ESCALATE_TICKET if fields.keys() == {"escalated"} else AuditAction.UPDATE_TICKET
        await self._audit(action, ticket_id, user or department or UNKNOWN_USER, now)

        logger.info(
            "Ticket updated",
            extra={"ticket_id": ticket_id, "fields": sorted(fields), "department": department}
        )
        return updated

    async def escalate(
        self,
        ticket_id: str,
        department: Optional[str],
        user: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Ticket:
        """Set the escalated flag. Escalating twice is a no-op."""
        return await self.update(
            ticket_id,
            TicketUpdateDTO(escalated=True),
            department,
            user=user,
            now=now,
        )

    def issue_types(self, department: Optional[str], internal: Optional[bool] = None) -> List[IssueType]:
        """Internal catalogue for employees, FAQ list for customers and unset callers."""
        if internal is None:
            internal = bool(department) and department != CUSTOMER_DEPARTMENT
        return issue_types(internal)

    async def audit_log(self, department: Optional[str], limit: int = 100) -> List[AuditEntry]:
        self._access.require(department, Module.AUDIT.value, PermissionLevel.READ)
        return await self._audit_repo.list_recent(limit)

    def evaluate(self, ticket: Ticket, now: Optional[datetime] = None) -> SLAEvaluation:
        """Live SLA state; closed tickets are still classified against their due date."""
        return self._calculator.classify(ticket.sla_due, now or datetime.now(timezone.utc))

    async def _get_visible(self, ticket_id: str, department: Optional[str]) -> Ticket:
        # Invisible tickets answer 404 so ids of other departments do not leak.
        ticket = await self._ticket_repo.get_by_id(ticket_id)
        if ticket is None or not can_see_ticket(ticket, department, self._access.resolver):
            raise ResourceNotFoundException("Ticket", ticket_id)
        return ticket

    async def _audit(self, action: AuditAction, ticket_id: str, user: str, now: datetime) -> None:
        await self._audit_repo.add(
            AuditEntry(timestamp=now, action=action, ticket_id=ticket_id, user=user)
        )


_MUTABLE_FIELDS = ("status", "to_dept", "priority", "sla_due", "escalated", "assigned_to", "category")


def _diff(before: Ticket, after: Ticket) -> Dict[str, Any]:
    return {
        name: getattr(after, name)
        for name in _MUTABLE_FIELDS
        if getattr(after, name) != getattr(before, name)
    }
