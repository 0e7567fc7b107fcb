"""
Ticket Application Layer
========================

Contains:
- Services: TicketService (submit, list, update, escalate, audit trail)
- Repository interfaces: ITicketRepository, IAuditLogRepository
- DTOs: Request and response models for the ticket endpoints
"""

from helpdesk.tickets.application.dto import (
    AuditEntryResponse,
    IssueTypeResponse,
    SLAInfo,
    TicketCreateDTO,
    TicketListResponse,
    TicketMutationResponse,
    TicketQueryDTO,
    TicketResponse,
    TicketStatsResponse,
    TicketUpdateDTO,
)
from helpdesk.tickets.application.services import (
    IAuditLogRepository,
    ITicketRepository,
    TicketListing,
    TicketService,
)

__all__ = [
    # DTOs
    "AuditEntryResponse",
    "IssueTypeResponse",
    "SLAInfo",
    "TicketCreateDTO",
    "TicketListResponse",
    "TicketMutationResponse",
    "TicketQueryDTO",
    "TicketResponse",
    "TicketStatsResponse",
    "TicketUpdateDTO",
    # Repository interfaces
    "IAuditLogRepository",
    "ITicketRepository",
    # Services
    "TicketListing",
    "TicketService",
]
