"""
Ticket Interfaces Layer
=======================

Interface adapters (controllers) for the ticket module.

Contains:
- Controllers: FastAPI route handlers for tickets and the audit trail
"""

from helpdesk.tickets.interfaces.controllers import (
    audit_router,
    get_ticket_service,
    tickets_router,
)

__all__ = ["audit_router", "get_ticket_service", "tickets_router"]
