"""
SLA Value Objects
==================

Immutable value objects for the SLA domain.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from helpdesk.config import Priority, SLAStatus

DEFAULT_SLA_MINUTES: Dict[str, int] = {
    Priority.P1.value: 60,
    Priority.P2.value: 4 * 60,
    Priority.P3.value: 24 * 60,
    Priority.P4.value: 72 * 60,
}
FALLBACK_PRIORITY = Priority.P4.value

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE


class SLAPolicy(BaseModel):
    """
    SLA configuration: resolution window per priority plus the warning window.

    Loaded once at startup (defaults or YAML) and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    sla_targets: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_SLA_MINUTES),
        description="SLA targets in minutes by priority"
    )
    warning_window_minutes: int = Field(
        default=60,
        ge=0,
        description="Tickets due within this many minutes are flagged as warning"
    )

    @field_validator("sla_targets")
    @classmethod
    def validate_sla_targets(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Fill in missing priorities and reject non-positive windows."""
        targets = {str(k).upper(): int(minutes) for k, minutes in v.items()}
        for priority, minutes in targets.items():
            if minutes <= 0:
                raise ValueError(f"SLA target for {priority} must be positive")
        for priority, minutes in DEFAULT_SLA_MINUTES.items():
            targets.setdefault(priority, minutes)
        return targets

    @property
    def warning_window(self) -> timedelta:
        return timedelta(minutes=self.warning_window_minutes)

    def minutes_for(self, priority: Optional[str]) -> int:
        """SLA minutes for a priority; unknown priorities get the P4 window."""
        key = priority.value if isinstance(priority, Priority) else str(priority or "").upper()
        if key in self.sla_targets:
            return self.sla_targets[key]
        return self.sla_targets[FALLBACK_PRIORITY]


@dataclass(frozen=True)
class SLAEvaluation:
    """Derived SLA state of one ticket at one instant. Never stored."""
    status: SLAStatus
    time_remaining: timedelta

    @property
    def time_remaining_ms(self) -> int:
        return int(self.time_remaining.total_seconds() * 1000)

    @property
    def is_at_risk(self) -> bool:
        return self.status in (SLAStatus.BREACH, SLAStatus.WARNING)

    @property
    def display(self) -> str:
        """Short label used by ticket lists."""
        if self.status == SLAStatus.BREACH:
            return "SLA Breached"
        if self.status == SLAStatus.UNKNOWN:
            return "No SLA"
        return f"Due in {format_duration(self.time_remaining_ms)}"


class SLACalculator:
    """
    Pure SLA calculations over an injected policy.

    The evaluation instant is always passed in; nothing here reads the clock.
    """

    def __init__(self, policy: Optional[SLAPolicy] = None):
        self._policy = policy or SLAPolicy()

    @property
    def policy(self) -> SLAPolicy:
        return self._policy

    def duration_for(self, priority: Optional[str]) -> timedelta:
        return timedelta(minutes=self._policy.minutes_for(priority))

    def compute_due_at(self, priority: Optional[str], created_at: datetime) -> datetime:
        return created_at + self.duration_for(priority)

    def classify(self, due_at: Optional[datetime], now: datetime) -> SLAEvaluation:
        """
        Classify a due date relative to ``now``.

        - no due date -> unknown, 0
        - due < now -> breach, overrun magnitude
        - due - now < warning window -> warning
        - otherwise -> good
        """
        if due_at is None:
            return SLAEvaluation(SLAStatus.UNKNOWN, timedelta(0))

        diff = due_at - now
        if diff < timedelta(0):
            return SLAEvaluation(SLAStatus.BREACH, abs(diff))
        if diff < self._policy.warning_window:
            return SLAEvaluation(SLAStatus.WARNING, diff)
        return SLAEvaluation(SLAStatus.GOOD, diff)


def format_duration(milliseconds: float) -> str:
    """Render as ``"{h}h {m}m"``, or ``"{m}m"`` under an hour."""
    ms = max(0, int(milliseconds))
    hours = ms // MS_PER_HOUR
    minutes = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
