"""
Access Application Layer
========================

Contains:
- Services: AccessService (checks, guard, navigation, page gating)
- DTOs: Response models for the access endpoints
"""

from helpdesk.access.application.dto import (
    AccessCheckResponse,
    NavigationResponse,
    PageAccessResponse,
)
from helpdesk.access.application.services import AccessService

__all__ = [
    # DTOs
    "AccessCheckResponse",
    "NavigationResponse",
    "PageAccessResponse",
    # Services
    "AccessService",
]
