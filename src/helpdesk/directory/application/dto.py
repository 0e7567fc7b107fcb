"""
Directory Application DTOs
==========================

Data Transfer Objects for the user directory and asset register.
"""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from helpdesk.directory.domain import Asset, LeaveBalances, User

AssetCategoryStr = Literal["Laptop", "Desktop", "Monitor", "Phone", "Printer", "Peripheral", "Other"]


# ========== Request DTOs ==========

class LeaveBalancesDTO(BaseModel):
    annual: int = Field(default=25, ge=0)
    sick: int = Field(default=10, ge=0)
    personal: int = Field(default=5, ge=0)
    maternity: int = Field(default=0, ge=0)
    paternity: int = Field(default=0, ge=0)

    def to_domain(self) -> LeaveBalances:
        return LeaveBalances(**self.model_dump())


class UserCreateDTO(BaseModel):
    """DTO for adding an employee. ``id`` is allocated when omitted."""
    id: Optional[str] = Field(None, pattern=r"^EMP\d{3,}$", description="Staff number")
    full_name: str = Field(..., min_length=1)
    department: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    leave_balances: LeaveBalancesDTO = Field(default_factory=LeaveBalancesDTO)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v.strip().lower()


class AssetCreateDTO(BaseModel):
    """DTO for issuing an asset to an employee."""
    name: str = Field(..., min_length=1, description="e.g. Dell Latitude 5440")
    asset_tag: str = Field(..., min_length=1, description="Unique inventory tag")
    category: AssetCategoryStr = Field(default="Other")
    serial_number: str = Field(..., min_length=1)
    assigned_at: Optional[datetime] = Field(None, description="Defaults to now")
    notes: Optional[str] = None


# ========== Response DTOs ==========

class UserResponse(BaseModel):
    id: str
    full_name: str
    department: str
    email: str
    leave_balances: LeaveBalancesDTO

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            full_name=user.full_name,
            department=user.department,
            email=user.email,
            leave_balances=LeaveBalancesDTO(**user.leave_balances.to_dict()),
        )


class AssetResponse(BaseModel):
    id: UUID
    owner_id: str
    name: str
    asset_tag: str
    category: str
    serial_number: str
    assigned_at: datetime
    notes: Optional[str] = None

    @classmethod
    def from_domain(cls, asset: Asset) -> "AssetResponse":
        return cls(
            id=asset.id,
            owner_id=asset.owner_id,
            name=asset.name,
            asset_tag=asset.asset_tag,
            category=asset.category,
            serial_number=asset.serial_number,
            assigned_at=asset.assigned_at,
            notes=asset.notes,
        )
