"""
SLA Interfaces Layer
====================

Interface adapters (controllers) for the SLA module.

Contains:
- Controllers: FastAPI route handlers
- Dependencies: SLA policy and calculator providers shared with other modules

This is the outermost layer - handles HTTP requests/responses and
delegates to application services.
"""

from helpdesk.sla.interfaces.controllers import (
    get_sla_calculator,
    get_sla_config_manager,
    sla_router,
)

__all__ = ["get_sla_calculator", "get_sla_config_manager", "sla_router"]
