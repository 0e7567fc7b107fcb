"""TicketService lifecycle rules against in-memory repositories."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List

import pytest

from helpdesk.access.application import AccessService
from helpdesk.access.domain import AccessResolver
from helpdesk.access.infrastructure import default_policy
from helpdesk.config import AuditAction, TicketStatus
from helpdesk.core import (
    AccessDeniedException,
    ResourceNotFoundException,
    StoreUnavailableException,
)
from helpdesk.sla.domain import SLACalculator
from helpdesk.tickets.application import (
    IAuditLogRepository,
    ITicketRepository,
    TicketCreateDTO,
    TicketService,
    TicketUpdateDTO,
)
from helpdesk.tickets.domain import TicketFilter

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


class InMemoryTicketRepository(ITicketRepository):
    def __init__(self):
        self.tickets: Dict[str, object] = {}

    async def list_all(self):
        return list(self.tickets.values())

    async def list_open(self):
        return [t for t in self.tickets.values() if t.is_open]

    async def get_by_id(self, ticket_id):
        ticket = self.tickets.get(ticket_id)
        return replace(ticket) if ticket else None

    async def create(self, ticket):
        self.tickets[ticket.id] = replace(ticket)
        return ticket

    async def update(self, ticket_id, fields):
        if ticket_id not in self.tickets:
            raise ResourceNotFoundException("Ticket", ticket_id)
        updated = replace(self.tickets[ticket_id], **fields)
        self.tickets[ticket_id] = updated
        return replace(updated)


class UnavailableTicketRepository(InMemoryTicketRepository):
    async def list_all(self):
        raise StoreUnavailableException("tickets", "OperationalError")


class InMemoryAuditRepository(IAuditLogRepository):
    def __init__(self):
        self.entries: List[object] = []

    async def add(self, entry):
        self.entries.append(entry)
        return entry

    async def list_recent(self, limit=100):
        return list(reversed(self.entries))[:limit]


@pytest.fixture
def tickets_repo():
    return InMemoryTicketRepository()


@pytest.fixture
def audit_repo():
    return InMemoryAuditRepository()


@pytest.fixture
def service(tickets_repo, audit_repo):
    access = AccessService(AccessResolver(default_policy()))
    return TicketService(tickets_repo, audit_repo, access, SLACalculator())


def new_ticket(**overrides) -> TicketCreateDTO:
    data = dict(
        name="Grace Achieng",
        email="grace@example.com",
        issue_type="transaction",
        description="Transfer not received",
        priority="P2",
    )
    data.update(overrides)
    return TicketCreateDTO(**data)


# =============================================================================
# Submit
# =============================================================================

@pytest.mark.asyncio
async def test_submit_applies_defaults_and_sla(service, audit_repo):
    ticket = await service.submit(new_ticket(), "Customer", now=NOW)

    assert ticket.status == TicketStatus.OPEN
    assert ticket.escalated is False
    assert ticket.from_dept == "Customer"
    assert ticket.to_dept == "Finance"
    assert ticket.category == "Request"
    assert ticket.sla_due == NOW + timedelta(hours=4)
    assert ticket.id.startswith("TICK-")

    assert [e.action for e in audit_repo.entries] == [AuditAction.CREATE_TICKET]
    assert audit_repo.entries[0].user == "Customer"


@pytest.mark.asyncio
async def test_submit_keeps_explicit_departments(service):
    ticket = await service.submit(
        new_ticket(from_dept="Operations", to_dept="IT", issue_type="IT Support"),
        "Operations",
        user="Alice Muthoni",
        now=NOW,
    )
    assert (ticket.from_dept, ticket.to_dept) == ("Operations", "IT")


@pytest.mark.asyncio
async def test_submit_requires_ticketing_access(service):
    with pytest.raises(AccessDeniedException):
        await service.submit(new_ticket(), "Marketing", now=NOW)


# =============================================================================
# List
# =============================================================================

@pytest.mark.asyncio
async def test_list_is_filtered_sorted_and_annotated(service):
    await service.submit(new_ticket(priority="P3", issue_type="account"), "Customer", now=NOW)
    await service.submit(new_ticket(priority="P1", issue_type="loan"), "Customer", now=NOW + timedelta(minutes=1))
    await service.submit(new_ticket(issue_type="Facilities"), "Customer", now=NOW)

    listing = await service.list_for("Finance", now=NOW + timedelta(hours=2))

    assert listing.visibility.scope == "department"
    assert [t.priority for t in listing.tickets] == ["P1", "P3"]
    p1 = listing.tickets[0]
    assert listing.evaluations[p1.id].display == "SLA Breached"
    assert listing.stats.total == 2
    assert listing.stats.sla_breached == 1


@pytest.mark.asyncio
async def test_list_applies_filters_after_visibility(service):
    await service.submit(new_ticket(description="ATM card stuck"), "Customer", now=NOW)
    await service.submit(new_ticket(description="Statement request"), "Customer", now=NOW)

    listing = await service.list_for("IT", TicketFilter(search="atm"), now=NOW)

    assert [t.description for t in listing.tickets] == ["ATM card stuck"]


@pytest.mark.asyncio
async def test_list_denied_for_unknown_department(service):
    with pytest.raises(AccessDeniedException):
        await service.list_for("Marketing", now=NOW)


@pytest.mark.asyncio
async def test_store_failure_is_not_an_empty_list(audit_repo):
    access = AccessService(AccessResolver(default_policy()))
    service = TicketService(UnavailableTicketRepository(), audit_repo, access, SLACalculator())

    with pytest.raises(StoreUnavailableException):
        await service.list_for("IT", now=NOW)


# =============================================================================
# Update & escalate
# =============================================================================

@pytest.mark.asyncio
async def test_reprioritizing_moves_sla_due(service, audit_repo):
    ticket = await service.submit(new_ticket(priority="P4"), "Customer", now=NOW)

    updated = await service.update(
        ticket.id, TicketUpdateDTO(priority="P1"), "IT", now=NOW + timedelta(hours=5)
    )

    assert updated.priority == "P1"
    assert updated.sla_due == NOW + timedelta(hours=1)
    assert audit_repo.entries[-1].action == AuditAction.UPDATE_TICKET
    assert audit_repo.entries[-1].user == "IT"


@pytest.mark.asyncio
async def test_status_change_keeps_sla_due(service):
    ticket = await service.submit(new_ticket(priority="P3"), "Customer", now=NOW)

    updated = await service.update(ticket.id, TicketUpdateDTO(status="Closed"), "Finance")

    assert updated.status == TicketStatus.CLOSED
    assert updated.sla_due == ticket.sla_due
    assert updated.escalated is False


@pytest.mark.asyncio
async def test_escalate_is_recorded_once(service, audit_repo):
    ticket = await service.submit(new_ticket(), "Customer", now=NOW)

    first = await service.escalate(ticket.id, "Finance", user="Lilian Kimani")
    second = await service.escalate(ticket.id, "Finance")

    assert first.escalated and second.escalated
    assert first.status == TicketStatus.OPEN
    actions = [e.action for e in audit_repo.entries]
    assert actions == [AuditAction.CREATE_TICKET, AuditAction.ESCALATE_TICKET]
    assert audit_repo.entries[-1].user == "Lilian Kimani"


@pytest.mark.asyncio
async def test_read_only_department_cannot_update(service):
    ticket = await service.submit(new_ticket(), "Customer", now=NOW)

    with pytest.raises(AccessDeniedException):
        await service.update(ticket.id, TicketUpdateDTO(status="Closed"), "Internal Audit")


@pytest.mark.asyncio
async def test_tickets_of_other_departments_are_not_found(service):
    ticket = await service.submit(new_ticket(issue_type="Facilities"), "Customer", now=NOW)

    with pytest.raises(ResourceNotFoundException):
        await service.get(ticket.id, "Finance")
    with pytest.raises(ResourceNotFoundException):
        await service.escalate(ticket.id, "Finance")


@pytest.mark.asyncio
async def test_unknown_ticket_is_not_found(service):
    with pytest.raises(ResourceNotFoundException):
        await service.update("TICK-0-XXXXX", TicketUpdateDTO(status="Closed"), "IT")


# =============================================================================
# Catalogue & audit
# =============================================================================

def test_issue_types_follow_the_caller(service):
    assert service.issue_types("Finance")[0].value == "IT Support"
    assert service.issue_types("Customer")[0].value == "account"
    assert service.issue_types(None)[0].value == "account"
    assert service.issue_types("Customer", internal=True)[0].value == "IT Support"


@pytest.mark.asyncio
async def test_audit_log_requires_audit_read(service):
    await service.submit(new_ticket(), "Customer", now=NOW)

    entries = await service.audit_log("Internal Audit")
    assert len(entries) == 1

    with pytest.raises(AccessDeniedException):
        await service.audit_log("Finance")
