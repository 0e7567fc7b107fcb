"""
Ticket Infrastructure Repositories
==================================

Concrete implementations of the ticket repository interfaces using SQLAlchemy.

Driver and connection failures surface as ``StoreUnavailableException`` so
callers can answer "failed to load data" instead of a partial result.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.config import AuditAction, TicketStatus
from helpdesk.core import RepositoryException, ResourceNotFoundException
from helpdesk.infrastructure.database import as_utc, store_errors
from helpdesk.tickets.application import IAuditLogRepository, ITicketRepository
from helpdesk.tickets.domain import AuditEntry, Ticket
from helpdesk.tickets.infrastructure.models import AuditLogModel, TicketModel


def ticket_to_domain(model: TicketModel) -> Ticket:
    return Ticket(
        id=model.id,
        name=model.name,
        email=model.email,
        from_dept=model.from_dept,
        ticket_type=model.ticket_type,
        to_dept=model.to_dept,
        issue_type=model.issue_type,
        description=model.description,
        status=TicketStatus(model.status),
        priority=model.priority,
        created_at=as_utc(model.created_at),
        sla_due=as_utc(model.sla_due),
        escalated=bool(model.escalated),
        attachment=model.attachment or "",
        category=model.category,
        assigned_to=model.assigned_to,
    )


def _column_value(value: Any) -> Any:
    return value.value if isinstance(value, TicketStatus) else value


class SQLAlchemyTicketRepository(ITicketRepository):
    """
    SQLAlchemy implementation of ticket repository.

    Handles persistence of Ticket entities using async SQLAlchemy.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_all(self) -> List[Ticket]:
        with store_errors("tickets"):
            result = await self._session.execute(select(TicketModel))
            return [ticket_to_domain(m) for m in result.scalars().all()]

    async def list_open(self) -> List[Ticket]:
        with store_errors("tickets"):
            stmt = select(TicketModel).where(TicketModel.status != TicketStatus.CLOSED.value)
            result = await self._session.execute(stmt)
            return [ticket_to_domain(m) for m in result.scalars().all()]

    async def get_by_id(self, ticket_id: str) -> Optional[Ticket]:
        with store_errors("tickets"):
            model = await self._session.get(TicketModel, ticket_id)
            return ticket_to_domain(model) if model else None

    async def create(self, ticket: Ticket) -> Ticket:
        """Create new ticket."""
        model = TicketModel(
            id=ticket.id,
            name=ticket.name,
            email=ticket.email,
            from_dept=ticket.from_dept,
            ticket_type=ticket.ticket_type,
            to_dept=ticket.to_dept,
            issue_type=ticket.issue_type,
            description=ticket.description,
            status=_column_value(ticket.status),
            priority=ticket.priority,
            created_at=ticket.created_at,
            sla_due=ticket.sla_due,
            escalated=ticket.escalated,
            attachment=ticket.attachment,
            category=ticket.category,
            assigned_to=ticket.assigned_to,
        )

        with store_errors("tickets"):
            self._session.add(model)
            await self._session.flush()

        return ticket_to_domain(model)

    async def update(self, ticket_id: str, fields: Dict[str, Any]) -> Ticket:
        """Apply a partial update to an existing ticket."""
        with store_errors("tickets"):
            model = await self._session.get(TicketModel, ticket_id)
            if model is None:
                raise ResourceNotFoundException("Ticket", ticket_id)

            for name, value in fields.items():
                if not hasattr(TicketModel, name) or name == "id":
                    raise RepositoryException(f"Unknown ticket field '{name}'")
                setattr(model, name, _column_value(value))

            await self._session.flush()

        return ticket_to_domain(model)


class SQLAlchemyAuditLogRepository(IAuditLogRepository):
    """Append-only audit trail backed by the 'audit_logs' table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def add(self, entry: AuditEntry) -> AuditEntry:
        model = AuditLogModel(
            timestamp=entry.timestamp,
            action=entry.action.value,
            ticket_id=entry.ticket_id,
            user=entry.user,
        )
        with store_errors("audit_logs"):
            self._session.add(model)
            await self._session.flush()

        return AuditEntry(
            id=model.id,
            timestamp=as_utc(model.timestamp),
            action=AuditAction(model.action),
            ticket_id=model.ticket_id,
            user=model.user,
        )

    async def list_recent(self, limit: int = 100) -> List[AuditEntry]:
        with store_errors("audit_logs"):
            stmt = (
                select(AuditLogModel)
                .order_by(AuditLogModel.timestamp.desc(), AuditLogModel.id.desc())
                .limit(limit)
            )
            result = await self._session.execute(stmt)
            return [
                AuditEntry(
                    id=m.id,
                    timestamp=as_utc(m.timestamp),
                    action=AuditAction(m.action),
                    ticket_id=m.ticket_id,
                    user=m.user,
                )
                for m in result.scalars().all()
            ]
