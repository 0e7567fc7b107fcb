"""
Directory Application Services
==============================

User directory and asset register, each behind its own repository
interface and gated through the access service.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional

from helpdesk.access.application import AccessService
from helpdesk.access.domain import Module, PermissionLevel
from helpdesk.core import ResourceNotFoundException, ValidationException
from helpdesk.directory.application.dto import AssetCreateDTO, UserCreateDTO
from helpdesk.directory.domain import Asset, User, next_staff_id, users_in_department
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class IUserRepository(ABC):
    """Interface for employee account storage."""

    @abstractmethod
    async def list_users(self) -> List[User]:
        """All users ordered by id."""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by staff number."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""

    @abstractmethod
    async def create(self, user: User) -> User:
        """Persist a new user."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored users."""


class IAssetRepository(ABC):
    """Interface for the asset register."""

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[Asset]:
        """Assets issued to one user, newest first."""

    @abstractmethod
    async def get_by_tag(self, asset_tag: str) -> Optional[Asset]:
        """Get asset by tag."""

    @abstractmethod
    async def create(self, asset: Asset) -> Asset:
        """Persist a new asset."""


# ========== Application Services ==========

class DirectoryService:
    """
    Employee directory and asset register.

    ``users`` is a restricted module, so only the allow-listed departments
    (admin and IT) can browse or add accounts whatever their level.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        asset_repository: IAssetRepository,
        access_service: AccessService,
    ):
        self._user_repo = user_repository
        self._asset_repo = asset_repository
        self._access = access_service

    # ----- users -----

    async def list_users(self, department: Optional[str], in_department: Optional[str] = None) -> List[User]:
        self._access.require(department, Module.USERS.value, PermissionLevel.READ)
        users = await self._user_repo.list_users()
        if in_department:
            return users_in_department(users, in_department, self._access.resolver)
        return users

    async def get_user(self, user_id: str, department: Optional[str]) -> User:
        self._access.require(department, Module.USERS.value, PermissionLevel.READ)
        return await self._require_user(user_id)

    async def create_user(self, payload: UserCreateDTO, department: Optional[str]) -> User:
        self._access.require(department, Module.USERS.value, PermissionLevel.USER)

        if payload.id and await self._user_repo.get_by_id(payload.id):
            raise ValidationException(f"User {payload.id} already exists", {"field": "id"})
        if await self._user_repo.get_by_email(payload.email):
            raise ValidationException(f"Email {payload.email} is already registered", {"field": "email"})

        user_id = payload.id or next_staff_id(u.id for u in await self._user_repo.list_users())
        user = await self._user_repo.create(
            User(
                id=user_id,
                full_name=payload.full_name,
                department=payload.department,
                email=payload.email,
                leave_balances=payload.leave_balances.to_domain(),
                created_at=datetime.now(timezone.utc),
            )
        )

        logger.info(
            "User created",
            extra={"user_id": user.id, "user_department": user.department, "created_by": department}
        )
        return user

    # ----- assets -----

    async def list_assets(self, user_id: str, department: Optional[str]) -> List[Asset]:
        self._access.require(department, Module.INVENTORY.value, PermissionLevel.READ)
        await self._require_user(user_id)
        return await self._asset_repo.list_for_user(user_id)

    async def register_asset(
        self,
        user_id: str,
        payload: AssetCreateDTO,
        department: Optional[str],
    ) -> Asset:
        self._access.require(department, Module.INVENTORY.value, PermissionLevel.OWNER)
        await self._require_user(user_id)

        if await self._asset_repo.get_by_tag(payload.asset_tag):
            raise ValidationException(
                f"Asset tag {payload.asset_tag} is already registered",
                {"field": "asset_tag"}
            )

        asset = await self._asset_repo.create(
            Asset(
                owner_id=user_id,
                name=payload.name,
                asset_tag=payload.asset_tag,
                category=payload.category,
                serial_number=payload.serial_number,
                assigned_at=payload.assigned_at or datetime.now(timezone.utc),
                notes=payload.notes,
            )
        )

        logger.info(
            "Asset registered",
            extra={"asset_tag": asset.asset_tag, "owner_id": user_id, "registered_by": department}
        )
        return asset

    async def _require_user(self, user_id: str) -> User:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return user
