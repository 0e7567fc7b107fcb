"""
SLA Application Layer
=====================

Contains:
- Services: SLASweepService (periodic classification of open tickets)
- Provider interfaces: ISLAPolicyProvider
- DTOs: Response models for the SLA endpoints
"""

from helpdesk.sla.application.dto import (
    SLAPolicyResponse,
    SLASweepResponse,
    SLATarget,
)
from helpdesk.sla.application.services import ISLAPolicyProvider, SLASweepService

__all__ = [
    # DTOs
    "SLAPolicyResponse",
    "SLASweepResponse",
    "SLATarget",
    # Interfaces
    "ISLAPolicyProvider",
    # Services
    "SLASweepService",
]
