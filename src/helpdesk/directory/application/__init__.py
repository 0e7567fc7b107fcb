"""
Directory Application Layer
===========================

Contains:
- Services: DirectoryService
- Repository interfaces: IUserRepository, IAssetRepository
- DTOs: Request and response models for users and assets
"""

from helpdesk.directory.application.dto import (
    AssetCreateDTO,
    AssetResponse,
    LeaveBalancesDTO,
    UserCreateDTO,
    UserResponse,
)
from helpdesk.directory.application.services import (
    DirectoryService,
    IAssetRepository,
    IUserRepository,
)

__all__ = [
    # DTOs
    "AssetCreateDTO",
    "AssetResponse",
    "LeaveBalancesDTO",
    "UserCreateDTO",
    "UserResponse",
    # Repository interfaces
    "IAssetRepository",
    "IUserRepository",
    # Services
    "DirectoryService",
]
