"""Role visibility, filtering, ordering, statistics and ids for tickets."""

import re
from datetime import datetime, timedelta, timezone

import pytest

from helpdesk.access.domain import AccessPolicy, AccessResolver, PermissionLevel
from helpdesk.access.infrastructure import default_policy
from helpdesk.config import TicketStatus
from helpdesk.sla.domain import SLACalculator
from helpdesk.tickets.domain import (
    Ticket,
    TicketFilter,
    apply_filters,
    auto_assign_department,
    compute_stats,
    generate_ticket_id,
    issue_types,
    priority_rank,
    sort_by_urgency,
    visible_tickets,
)

BASE = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)


def make_ticket(ticket_id, priority="P3", created_offset_minutes=0, **overrides) -> Ticket:
    created_at = BASE + timedelta(minutes=created_offset_minutes)
    fields = dict(
        id=ticket_id,
        name="Grace Achieng",
        email="grace@example.com",
        from_dept="Customer",
        ticket_type="Request",
        to_dept="Customer Service",
        issue_type="other",
        description="Card not working",
        status=TicketStatus.OPEN,
        priority=priority,
        created_at=created_at,
        sla_due=SLACalculator().compute_due_at(priority, created_at),
    )
    fields.update(overrides)
    return Ticket(**fields)


@pytest.fixture
def resolver() -> AccessResolver:
    return AccessResolver(default_policy())


@pytest.fixture
def tickets():
    return [
        make_ticket("A", to_dept="Finance", from_dept="Customer"),
        make_ticket("B", to_dept="Operations", from_dept="Finance"),
        make_ticket("C", to_dept="IT", from_dept="Operations"),
        make_ticket("D", to_dept="Finance", from_dept="IT"),
    ]


def ids(tickets):
    return [t.id for t in tickets]


# =============================================================================
# Visibility
# =============================================================================

def test_user_level_sees_raised_and_routed_tickets(resolver, tickets):
    result = visible_tickets(tickets, "Finance", resolver)
    assert result.level == PermissionLevel.USER
    assert result.scope == "department"
    assert ids(result.tickets) == ["A", "B", "D"]


@pytest.mark.parametrize("department", ["IT", "IT / ICT", "admin"])
def test_owner_and_super_admin_see_everything(resolver, tickets, department):
    result = visible_tickets(tickets, department, resolver)
    assert result.scope == "all"
    assert ids(result.tickets) == ["A", "B", "C", "D"]


def test_read_level_sees_everything_read_only(resolver, tickets):
    result = visible_tickets(tickets, "Internal Audit", resolver)
    assert result.level == PermissionLevel.READ
    assert result.scope == "all-read-only"
    assert len(result.tickets) == 4


def test_limited_level_sees_only_routed_tickets(tickets):
    resolver = AccessResolver(AccessPolicy({"Operations": {"ticketing": "limited"}}))
    result = visible_tickets(tickets, "Operations", resolver)
    assert result.scope == "assigned"
    assert ids(result.tickets) == ["B"]


@pytest.mark.parametrize("department", ["Marketing", None, ""])
def test_no_access_is_distinct_from_no_tickets(resolver, tickets, department):
    result = visible_tickets(tickets, department, resolver)
    assert result.access_denied
    assert result.tickets == ()

    empty = visible_tickets([], "Finance", resolver)
    assert not empty.access_denied
    assert empty.tickets == ()


def test_user_filter_compares_the_department_as_given(resolver):
    ticket = make_ticket("X", to_dept="Finance")
    # "finance team" resolves to Finance for the level, but is not equal to "Finance".
    result = visible_tickets([ticket], "finance team", resolver)
    assert result.scope == "department"
    assert result.tickets == ()


# =============================================================================
# Filters
# =============================================================================

def test_search_matches_id_name_or_description():
    tickets = [
        make_ticket("TICK-1", name="Ann", description="ATM swallowed card"),
        make_ticket("TICK-2", name="Ben", description="Loan statement"),
        make_ticket("TICK-3", name="Atmore", description="Password reset"),
    ]
    assert ids(apply_filters(tickets, TicketFilter(search="atm"))) == ["TICK-1", "TICK-3"]
    assert ids(apply_filters(tickets, TicketFilter(search="tick-2"))) == ["TICK-2"]


def test_filters_combine_with_and():
    tickets = [
        make_ticket("1", priority="P1", category="Incident"),
        make_ticket("2", priority="P1", category="Request"),
        make_ticket("3", priority="P2", category="Incident", status=TicketStatus.CLOSED),
    ]
    result = apply_filters(tickets, TicketFilter(priority="P1", category="Incident"))
    assert ids(result) == ["1"]
    assert ids(apply_filters(tickets, TicketFilter(status="Closed"))) == ["3"]
    assert ids(apply_filters(tickets, TicketFilter())) == ["1", "2", "3"]


# =============================================================================
# Ordering
# =============================================================================

def test_sort_by_priority_then_newest_first():
    tickets = [
        make_ticket("p3-old", "P3", 0),
        make_ticket("p1-old", "P1", 10),
        make_ticket("p1-new", "P1", 20),
        make_ticket("p2", "P2", 30),
    ]
    assert ids(sort_by_urgency(tickets)) == ["p1-new", "p1-old", "p2", "p3-old"]


def test_unknown_priority_sorts_with_p4():
    tickets = [
        make_ticket("odd", "urgent", 50),
        make_ticket("p4", "P4", 10),
        make_ticket("p3", "P3", 0),
    ]
    assert priority_rank("urgent") == 4
    assert ids(sort_by_urgency(tickets)) == ["p3", "odd", "p4"]


# =============================================================================
# Statistics
# =============================================================================

def test_stats_count_statuses_and_live_sla():
    now = BASE + timedelta(hours=2)
    tickets = [
        make_ticket("breached", "P1"),
        make_ticket("warning", "P2", created_offset_minutes=-90),
        make_ticket("good", "P4"),
        make_ticket("progress", "P3", status=TicketStatus.IN_PROGRESS, escalated=True),
        make_ticket("closed", "P1", status=TicketStatus.CLOSED),
    ]

    stats = compute_stats(tickets, SLACalculator(), now)

    assert stats.total == 5
    assert (stats.open, stats.in_progress, stats.closed) == (3, 1, 1)
    assert stats.escalated == 1
    # The closed P1 is overdue too but only open work counts.
    assert stats.sla_breached == 1
    assert stats.sla_warning == 1


# =============================================================================
# Routing & ids
# =============================================================================

@pytest.mark.parametrize("issue_type, department", [
    ("account", "Finance"),
    ("loan", "Finance"),
    ("security", "Security"),
    ("IT Support", "IT"),
    ("Facilities", "Operations"),
    ("other", "Customer Service"),
    ("something new", "Customer Service"),
    (None, "Customer Service"),
])
def test_auto_assign_department(issue_type, department):
    assert auto_assign_department(issue_type) == department


def test_issue_type_catalogues():
    assert [t.value for t in issue_types(internal=True)][0] == "IT Support"
    assert [t.value for t in issue_types(internal=False)][0] == "account"


def test_ticket_id_format():
    ticket_id = generate_ticket_id(BASE)
    assert re.fullmatch(r"TICK-\d{13}-[A-Z0-9]{5}", ticket_id)
    assert ticket_id.startswith(f"TICK-{int(BASE.timestamp() * 1000)}-")


def test_ticket_ids_are_unique_within_a_millisecond():
    generated = {generate_ticket_id(BASE) for _ in range(100)}
    assert len(generated) == 100
