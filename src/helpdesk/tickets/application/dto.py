"""
Ticket Application DTOs
=======================

Data Transfer Objects for the ticket API layer.

These Pydantic models handle serialization/deserialization and validation
for API requests and responses.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from helpdesk.sla.domain import SLAEvaluation
from helpdesk.tickets.domain import AuditEntry, IssueType, Ticket, TicketStats


# ========== Type Aliases for Literals ==========
PriorityStr = Literal["P1", "P2", "P3", "P4"]
TicketStatusStr = Literal["Open", "In Progress", "Closed"]
CategoryStr = Literal["Request", "Incident", "Problem", "Change"]
SLAStatusStr = Literal["unknown", "breach", "warning", "good"]


# ========== Request DTOs ==========

class TicketCreateDTO(BaseModel):
    """DTO for submitting a ticket."""
    name: str = Field(..., min_length=1, description="Requester name")
    email: str = Field(..., min_length=3, description="Requester email")
    from_dept: Optional[str] = Field(None, description="Originating department; blank means Customer")
    ticket_type: str = Field(default="Request", min_length=1, description="Ticket type")
    to_dept: Optional[str] = Field(None, description="Target department; blank means auto-assign")
    issue_type: str = Field(..., min_length=1, description="Issue type from the catalogue")
    description: str = Field(..., min_length=1, description="Free-text description")
    priority: PriorityStr = Field(..., description="Ticket priority")
    category: CategoryStr = Field(default="Request", description="Ticket category")
    attachment: str = Field(default="", description="Attachment file names, comma separated")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Cheap shape check; delivery is out of scope."""
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v.strip()


class TicketUpdateDTO(BaseModel):
    """Partial ticket update; omitted fields are left alone."""
    status: Optional[TicketStatusStr] = None
    to_dept: Optional[str] = Field(None, min_length=1)
    priority: Optional[PriorityStr] = None
    escalated: Optional[bool] = None
    assigned_to: Optional[str] = None
    category: Optional[CategoryStr] = None


class TicketQueryDTO(BaseModel):
    """Query parameters for the ticket list."""
    search: Optional[str] = None
    status: Optional[TicketStatusStr] = None
    priority: Optional[PriorityStr] = None
    category: Optional[CategoryStr] = None


# ========== Response DTOs ==========

class SLAInfo(BaseModel):
    """Live SLA state of a ticket."""
    status: SLAStatusStr
    due_at: Optional[datetime] = None
    time_remaining_ms: int = Field(..., description="Remaining time, or overrun when breached")
    display: str

    @classmethod
    def from_evaluation(cls, due_at: Optional[datetime], evaluation: SLAEvaluation) -> "SLAInfo":
        return cls(
            status=evaluation.status.value,
            due_at=due_at,
            time_remaining_ms=evaluation.time_remaining_ms,
            display=evaluation.display,
        )


class TicketResponse(BaseModel):
    """Response model for a ticket with SLA annotation."""
    id: str
    name: str
    email: str
    from_dept: str
    ticket_type: str
    to_dept: str
    issue_type: str
    description: str
    status: TicketStatusStr
    priority: str
    escalated: bool
    attachment: str
    category: str
    assigned_to: Optional[str] = None
    created_at: datetime
    sla: SLAInfo

    @classmethod
    def from_domain(cls, ticket: Ticket, evaluation: SLAEvaluation) -> "TicketResponse":
        return cls(
            id=ticket.id,
            name=ticket.name,
            email=ticket.email,
            from_dept=ticket.from_dept,
            ticket_type=ticket.ticket_type,
            to_dept=ticket.to_dept,
            issue_type=ticket.issue_type,
            description=ticket.description,
            status=ticket.status.value,
            priority=ticket.priority,
            escalated=ticket.escalated,
            attachment=ticket.attachment,
            category=ticket.category,
            assigned_to=ticket.assigned_to,
            created_at=ticket.created_at,
            sla=SLAInfo.from_evaluation(ticket.sla_due, evaluation),
        )


class TicketStatsResponse(BaseModel):
    """Summary statistics for the visible tickets."""
    total: int
    open: int
    in_progress: int
    closed: int
    escalated: int
    sla_breached: int
    sla_warning: int

    @classmethod
    def from_domain(cls, stats: TicketStats) -> "TicketStatsResponse":
        return cls(
            total=stats.total,
            open=stats.open,
            in_progress=stats.in_progress,
            closed=stats.closed,
            escalated=stats.escalated,
            sla_breached=stats.sla_breached,
            sla_warning=stats.sla_warning,
        )


class TicketListResponse(BaseModel):
    """Response model for the role-filtered ticket list."""
    success: bool = True
    department: Optional[str] = None
    permission_level: str = Field(..., description="Caller's ticketing level")
    scope: str = Field(..., description="all, all-read-only, department or assigned")
    read_only: bool
    tickets: List[TicketResponse]
    total_count: int
    stats: TicketStatsResponse


class TicketMutationResponse(BaseModel):
    """Envelope returned by submit, update and escalate."""
    success: bool = True
    message: str
    ticket: TicketResponse


class IssueTypeResponse(BaseModel):
    value: str
    text: str

    @classmethod
    def from_domain(cls, issue_type: IssueType) -> "IssueTypeResponse":
        return cls(value=issue_type.value, text=issue_type.text)


class AuditEntryResponse(BaseModel):
    """Response model for one audit record."""
    timestamp: datetime
    action: str
    ticket_id: str
    user: str

    @classmethod
    def from_domain(cls, entry: AuditEntry) -> "AuditEntryResponse":
        return cls(
            timestamp=entry.timestamp,
            action=entry.action.value,
            ticket_id=entry.ticket_id,
            user=entry.user,
        )
