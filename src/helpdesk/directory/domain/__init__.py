"""
Directory Domain Layer
======================

Contains:
- Entities: User, Asset
- Value Objects: LeaveBalances
- Domain Services: department lookup, staff id allocation
"""

from helpdesk.directory.domain.entities import Asset, User
from helpdesk.directory.domain.value_objects import ASSET_CATEGORIES, LeaveBalances
from helpdesk.directory.domain.services import next_staff_id, users_in_department

__all__ = [
    "ASSET_CATEGORIES",
    "Asset",
    "LeaveBalances",
    "User",
    "next_staff_id",
    "users_in_department",
]
