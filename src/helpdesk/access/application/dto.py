"""
Access Application DTOs
=======================

Pydantic models for the access endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

PermissionLevelStr = Literal["none", "limited", "read", "user", "owner", "full"]


class AccessCheckResponse(BaseModel):
    """Result of a single permission query."""
    department: Optional[str] = Field(None, description="Raw caller department")
    department_key: str = Field(..., description="Resolved policy key")
    module: str
    required_level: PermissionLevelStr
    granted_level: PermissionLevelStr = Field(..., description="Effective level; restricted modules give full or none")
    allowed: bool


class NavigationResponse(BaseModel):
    """Pages and modules the caller may see."""
    department: Optional[str] = None
    department_key: str
    is_super_admin: bool
    pages: List[str] = Field(default_factory=list)
    modules: List[str] = Field(default_factory=list)


class PageAccessResponse(BaseModel):
    """Direct page access decision."""
    page: str
    module: Optional[str] = Field(None, description="Module guarding the page, if any")
    allowed: bool
    redirect_to: Optional[str] = None
