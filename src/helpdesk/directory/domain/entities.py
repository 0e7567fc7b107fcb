"""
Directory Domain Entities
=========================

Pure Python domain entities for employees and their assets.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from helpdesk.directory.domain.value_objects import LeaveBalances


@dataclass
class User:
    """An employee account. ``id`` is the staff number, e.g. EMP001."""

    id: str
    full_name: str
    department: str
    email: str
    leave_balances: LeaveBalances = field(default_factory=LeaveBalances)
    created_at: Optional[datetime] = None


@dataclass
class Asset:
    """
    A piece of equipment issued to one employee.

    ``asset_tag`` is unique across the register.
    """

    owner_id: str
    name: str
    asset_tag: str
    category: str
    serial_number: str
    assigned_at: datetime
    notes: Optional[str] = None
    id: Optional[UUID] = None
