"""
SLA Domain Entities
====================

Pure Python domain entities for SLA monitoring.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from helpdesk.config import SLAStatus


@dataclass
class SLASweepReport:
    """
    Outcome of one pass over the open tickets.

    Counts every SLA status and keeps the ids of tickets that need
    attention, most overdue first.
    """

    evaluated_at: datetime
    counts: Dict[str, int] = field(
        default_factory=lambda: {status.value: 0 for status in SLAStatus}
    )
    breached_ticket_ids: List[str] = field(default_factory=list)
    warning_ticket_ids: List[str] = field(default_factory=list)

    @property
    def evaluated(self) -> int:
        return sum(self.counts.values())

    @property
    def breach_rate(self) -> float:
        """Percentage of evaluated tickets in breach."""
        if not self.evaluated:
            return 0.0
        return self.counts[SLAStatus.BREACH.value] / self.evaluated * 100

    def record(self, ticket_id: str, status: SLAStatus) -> None:
        self.counts[status.value] += 1
        if status == SLAStatus.BREACH:
            self.breached_ticket_ids.append(ticket_id)
        elif status == SLAStatus.WARNING:
            self.warning_ticket_ids.append(ticket_id)

    def to_dict(self) -> dict:
        return {
            "evaluated_at": self.evaluated_at.isoformat(),
            "evaluated": self.evaluated,
            "counts": dict(self.counts),
            "breach_rate": round(self.breach_rate, 2),
            "breached_ticket_ids": list(self.breached_ticket_ids),
            "warning_ticket_ids": list(self.warning_ticket_ids),
        }
