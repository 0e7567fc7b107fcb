"""
SLA Application Services
=========================

Application services orchestrate business logic and coordinate between
domain entities and repositories.

Following SOLID principles:
- Single Responsibility: Each service has one clear purpose
- Dependency Inversion: Depend on abstractions (repositories), not concrete implementations
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from helpdesk.config import SLAStatus
from helpdesk.shared.infrastructure.logging import get_logger, log_latency
from helpdesk.sla.domain import SLACalculator, SLAPolicy, SLASweepReport
from helpdesk.tickets.application import ITicketRepository

logger = get_logger(__name__)


# ========== Provider Interfaces (Dependency Inversion) ==========

class ISLAPolicyProvider(ABC):
    """Interface for SLA configuration access."""

    @abstractmethod
    def get_policy(self) -> SLAPolicy:
        """Get current SLA policy."""


# ========== Application Services ==========

class SLASweepService:
    """
    Periodic pass over open tickets.

    Only classifies and logs. Nothing is written back and nobody is
    notified; the live SLA state is always recomputed on read.
    """

    def __init__(self, ticket_repository: ITicketRepository, calculator: SLACalculator):
        self._ticket_repo = ticket_repository
        self._calculator = calculator

    async def sweep(self, now: Optional[datetime] = None) -> SLASweepReport:
        now = now or datetime.now(timezone.utc)
        report = SLASweepReport(evaluated_at=now)

        with log_latency(logger, "sla_sweep"):
            tickets = await self._ticket_repo.list_open()
            evaluations = [(t, self._calculator.classify(t.sla_due, now)) for t in tickets]

        # Most overdue first within breaches, most urgent first within warnings
        evaluations.sort(
            key=lambda pair: -pair[1].time_remaining
            if pair[1].status == SLAStatus.BREACH
            else pair[1].time_remaining
        )
        for ticket, evaluation in evaluations:
            report.record(ticket.id, evaluation.status)

        if report.breached_ticket_ids:
            logger.warning(
                "SLA breaches detected",
                extra={
                    "breached": len(report.breached_ticket_ids),
                    "warning": len(report.warning_ticket_ids),
                    "ticket_ids": report.breached_ticket_ids[:20],
                }
            )

        logger.info("SLA sweep complete", extra=report.to_dict())
        return report
