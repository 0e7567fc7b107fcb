"""
SLA Application DTOs
=====================

Data Transfer Objects for SLA API layer.

These Pydantic models handle serialization for API responses.
Following YAGNI - only what's needed.
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field

from helpdesk.sla.domain import SLAPolicy, SLASweepReport, format_duration


class SLATarget(BaseModel):
    """Resolution window for one priority."""
    priority: str
    minutes: int
    display: str


class SLAPolicyResponse(BaseModel):
    """Response model for the active SLA policy."""
    targets: List[SLATarget]
    warning_window_minutes: int

    @classmethod
    def from_domain(cls, policy: SLAPolicy) -> "SLAPolicyResponse":
        return cls(
            targets=[
                SLATarget(
                    priority=priority,
                    minutes=minutes,
                    display=format_duration(minutes * 60 * 1000),
                )
                for priority, minutes in sorted(policy.sla_targets.items())
            ],
            warning_window_minutes=policy.warning_window_minutes,
        )


class SLASweepResponse(BaseModel):
    """Response model for an on-demand SLA sweep."""
    evaluated_at: datetime
    evaluated: int
    counts: Dict[str, int] = Field(..., description="Tickets per SLA status")
    breach_rate: float = Field(..., description="Percentage of open tickets in breach")
    breached_ticket_ids: List[str]
    warning_ticket_ids: List[str]

    @classmethod
    def from_domain(cls, report: SLASweepReport) -> "SLASweepResponse":
        return cls(**report.to_dict())
