"""
Ticket Controllers (API Routes)
===============================

FastAPI routes for the ticket lifecycle and the audit trail.

Controllers are thin - they delegate to TicketService. The caller's
department comes from ``X-User-Department``; ``X-User-Name`` only labels
audit entries.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.access.application import AccessService
from helpdesk.access.interfaces import get_access_service, get_caller_department
from helpdesk.infrastructure.database import get_session
from helpdesk.shared.infrastructure.logging import get_logger
from helpdesk.sla.domain import SLACalculator
from helpdesk.sla.interfaces import get_sla_calculator
from helpdesk.tickets.application import (
    AuditEntryResponse,
    IssueTypeResponse,
    TicketCreateDTO,
    TicketListResponse,
    TicketMutationResponse,
    TicketQueryDTO,
    TicketResponse,
    TicketService,
    TicketStatsResponse,
    TicketUpdateDTO,
)
from helpdesk.tickets.domain import Ticket, TicketFilter
from helpdesk.tickets.infrastructure import (
    SQLAlchemyAuditLogRepository,
    SQLAlchemyTicketRepository,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/tickets", tags=["Tickets"])
audit_router = APIRouter(prefix="/audit", tags=["Audit"])


# ========== Example payloads for Swagger ==========

TICKET_CREATE_EXAMPLE = {
    "name": "Jane Wanjiru",
    "email": "jane@example.com",
    "from_dept": "Customer",
    "ticket_type": "Request",
    "issue_type": "transaction",
    "description": "My transfer to a savings account has not arrived.",
    "priority": "P2",
    "category": "Incident",
}


# ========== Dependencies ==========

async def get_ticket_service(
    session: AsyncSession = Depends(get_session),
    access: AccessService = Depends(get_access_service),
    calculator: SLACalculator = Depends(get_sla_calculator),
) -> TicketService:
    """Get ticket service instance."""
    return TicketService(
        SQLAlchemyTicketRepository(session),
        SQLAlchemyAuditLogRepository(session),
        access,
        calculator,
    )


def get_caller_name(
    x_user_name: Optional[str] = Header(None, description="Caller display name for the audit trail")
) -> Optional[str]:
    return x_user_name


def _to_response(service: TicketService, ticket: Ticket) -> TicketResponse:
    return TicketResponse.from_domain(ticket, service.evaluate(ticket))


# ========== Route Handlers ==========

@router.get(
    "",
    response_model=TicketListResponse,
    summary="List tickets visible to the caller",
    description="""
    Role-filtered ticket list, ordered by priority (P1 first) and then
    newest first, with live SLA state and summary counts.

    **Visibility by `ticketing` level**:
    - `owner` / `full` / super admin: every ticket
    - `user`: tickets raised by or routed to the caller's department
    - `read`: every ticket, read-only
    - `limited`: tickets routed to the caller's department
    - `none`: 403
    """,
)
async def list_tickets(
    query: TicketQueryDTO = Depends(),
    department: Optional[str] = Depends(get_caller_department),
    service: TicketService = Depends(get_ticket_service),
):
    listing = await service.list_for(
        department,
        TicketFilter(
            search=query.search,
            status=query.status,
            priority=query.priority,
            category=query.category,
        ),
    )
    return TicketListResponse(
        department=department,
        permission_level=listing.visibility.level.value,
        scope=listing.visibility.scope,
        read_only=listing.read_only,
        tickets=[
            TicketResponse.from_domain(t, listing.evaluations[t.id])
            for t in listing.tickets
        ],
        total_count=len(listing.tickets),
        stats=TicketStatsResponse.from_domain(listing.stats),
    )


@router.post(
    "",
    response_model=TicketMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a ticket",
    description="""
    Creates an Open ticket and fixes its SLA due date from the priority:
    P1 1h, P2 4h, P3 24h, P4 72h.

    A blank `from_dept` is recorded as `Customer`; a blank `to_dept` is
    routed from `issue_type`.
    """,
    openapi_extra={"requestBody": {"content": {"application/json": {"example": TICKET_CREATE_EXAMPLE}}}},
)
async def submit_ticket(
    payload: TicketCreateDTO,
    department: Optional[str] = Depends(get_caller_department),
    user: Optional[str] = Depends(get_caller_name),
    service: TicketService = Depends(get_ticket_service),
    session: AsyncSession = Depends(get_session),
):
    ticket = await service.submit(payload, department, user=user)
    await session.commit()
    return TicketMutationResponse(
        message="Ticket submitted successfully",
        ticket=_to_response(service, ticket),
    )


@router.get(
    "/issue-types",
    response_model=List[IssueTypeResponse],
    summary="Issue types for the submission form",
    description="Employees get the internal catalogue; customers and anonymous callers get the FAQ list. `internal` overrides the choice.",
)
async def list_issue_types(
    internal: Optional[bool] = Query(None, description="Force the internal or customer catalogue"),
    department: Optional[str] = Depends(get_caller_department),
    service: TicketService = Depends(get_ticket_service),
):
    return [IssueTypeResponse.from_domain(t) for t in service.issue_types(department, internal)]


@router.get(
    "/{ticket_id}",
    response_model=TicketResponse,
    summary="Get one ticket",
    description="Tickets outside the caller's visibility answer 404.",
)
async def get_ticket(
    ticket_id: str,
    department: Optional[str] = Depends(get_caller_department),
    service: TicketService = Depends(get_ticket_service),
):
    ticket = await service.get(ticket_id, department)
    return _to_response(service, ticket)


@router.patch(
    "/{ticket_id}",
    response_model=TicketMutationResponse,
    summary="Update a ticket",
    description="""
    Partial update of status, routing, priority, category, assignee or the
    escalated flag. Requires `user` on `ticketing`.

    Changing the priority moves the SLA due date to `created_at` plus the
    new priority's window.
    """,
)
async def update_ticket(
    ticket_id: str,
    payload: TicketUpdateDTO,
    department: Optional[str] = Depends(get_caller_department),
    user: Optional[str] = Depends(get_caller_name),
    service: TicketService = Depends(get_ticket_service),
    session: AsyncSession = Depends(get_session),
):
    ticket = await service.update(ticket_id, payload, department, user=user)
    await session.commit()
    return TicketMutationResponse(
        message="Ticket updated successfully",
        ticket=_to_response(service, ticket),
    )


@router.post(
    "/{ticket_id}/escalate",
    response_model=TicketMutationResponse,
    summary="Escalate a ticket",
)
async def escalate_ticket(
    ticket_id: str,
    department: Optional[str] = Depends(get_caller_department),
    user: Optional[str] = Depends(get_caller_name),
    service: TicketService = Depends(get_ticket_service),
    session: AsyncSession = Depends(get_session),
):
    ticket = await service.escalate(ticket_id, department, user=user)
    await session.commit()
    return TicketMutationResponse(
        message="Ticket escalated successfully",
        ticket=_to_response(service, ticket),
    )


@audit_router.get(
    "/logs",
    response_model=List[AuditEntryResponse],
    summary="Recent audit trail",
    description="Newest first. Requires `read` on `audit`.",
)
async def list_audit_logs(
    limit: int = Query(100, ge=1, le=1000),
    department: Optional[str] = Depends(get_caller_department),
    service: TicketService = Depends(get_ticket_service),
):
    entries = await service.audit_log(department, limit)
    return [AuditEntryResponse.from_domain(e) for e in entries]


# Export routers for inclusion in main app
tickets_router = router
