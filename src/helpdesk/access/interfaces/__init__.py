"""
Access Interfaces Layer
=======================

FastAPI routes and request dependencies for access control.
"""

from helpdesk.access.interfaces.controllers import (
    access_router,
    get_access_resolver,
    get_access_service,
    get_caller_department,
)

__all__ = [
    "access_router",
    "get_access_resolver",
    "get_access_service",
    "get_caller_department",
]
