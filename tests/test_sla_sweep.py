"""SLA configuration loading and the periodic sweep."""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from helpdesk.config import TicketStatus
from helpdesk.core import ConfigurationException
from helpdesk.sla.application import SLASweepService
from helpdesk.sla.domain import SLACalculator
from helpdesk.sla.infrastructure import SLAConfigManager
from helpdesk.tickets.domain import Ticket

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_ticket(ticket_id: str, sla_due, status=TicketStatus.OPEN) -> Ticket:
    return Ticket(
        id=ticket_id,
        name="Requester",
        email="r@example.com",
        from_dept="Customer",
        ticket_type="Request",
        to_dept="Finance",
        issue_type="account",
        description="Balance missing",
        status=status,
        priority="P2",
        created_at=NOW - timedelta(hours=5),
        sla_due=sla_due,
    )


class OpenTicketsStub:
    def __init__(self, tickets: List[Ticket]):
        self._tickets = tickets

    async def list_open(self) -> List[Ticket]:
        return [t for t in self._tickets if t.is_open]


# =============================================================================
# Configuration
# =============================================================================

def test_missing_config_file_uses_defaults(tmp_path):
    policy = SLAConfigManager(tmp_path / "absent.yaml").load()
    assert policy.minutes_for("P1") == 60
    assert policy.warning_window_minutes == 60


def test_config_file_overrides_targets(tmp_path):
    path = tmp_path / "sla.yaml"
    path.write_text("sla_targets:\n  P1: 30\n  P4: 1440\nwarning_window_minutes: 15\n")

    policy = SLAConfigManager(path).get_policy()

    assert policy.minutes_for("P1") == 30
    assert policy.minutes_for("P2") == 240
    assert policy.minutes_for("P4") == 1440
    assert policy.warning_window_minutes == 15


def test_invalid_config_file_raises(tmp_path):
    path = tmp_path / "sla.yaml"
    path.write_text("sla_targets:\n  P1: -5\n")

    with pytest.raises(ConfigurationException):
        SLAConfigManager(path).load()


# =============================================================================
# Sweep
# =============================================================================

@pytest.mark.asyncio
async def test_sweep_counts_open_tickets_by_status():
    tickets = [
        make_ticket("T-late", NOW - timedelta(minutes=10)),
        make_ticket("T-very-late", NOW - timedelta(hours=3)),
        make_ticket("T-soon", NOW + timedelta(minutes=20)),
        make_ticket("T-fine", NOW + timedelta(hours=3)),
        make_ticket("T-none", None),
        make_ticket("T-closed", NOW - timedelta(days=1), status=TicketStatus.CLOSED),
    ]

    report = await SLASweepService(OpenTicketsStub(tickets), SLACalculator()).sweep(NOW)

    assert report.evaluated == 5
    assert report.counts == {"unknown": 1, "breach": 2, "warning": 1, "good": 1}
    assert report.breached_ticket_ids == ["T-very-late", "T-late"]
    assert report.warning_ticket_ids == ["T-soon"]
    assert report.breach_rate == pytest.approx(40.0)


@pytest.mark.asyncio
async def test_sweep_with_no_open_tickets():
    report = await SLASweepService(OpenTicketsStub([]), SLACalculator()).sweep(NOW)
    assert report.evaluated == 0
    assert report.breach_rate == 0.0
    assert report.to_dict()["breached_ticket_ids"] == []
