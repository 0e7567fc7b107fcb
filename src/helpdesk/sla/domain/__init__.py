"""
SLA Domain Layer
================

Domain layer for the ticket SLA engine.

Contains:
- Entities: SLASweepReport
- Value Objects: SLAPolicy, SLAEvaluation
- Domain Services: SLACalculator, format_duration

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from helpdesk.sla.domain.entities import SLASweepReport
from helpdesk.sla.domain.value_objects import (
    DEFAULT_SLA_MINUTES,
    SLACalculator,
    SLAEvaluation,
    SLAPolicy,
    format_duration,
)

__all__ = [
    # Entities
    "SLASweepReport",
    # Value Objects & Services
    "DEFAULT_SLA_MINUTES",
    "SLACalculator",
    "SLAEvaluation",
    "SLAPolicy",
    "format_duration",
]
