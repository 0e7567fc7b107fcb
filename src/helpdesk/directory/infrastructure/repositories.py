"""
Directory Infrastructure Repositories
=====================================

SQLAlchemy implementations of the user and asset repositories.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.directory.application import IAssetRepository, IUserRepository
from helpdesk.directory.domain import Asset, LeaveBalances, User
from helpdesk.directory.infrastructure.models import AssetModel, UserModel
from helpdesk.infrastructure.database import as_utc, store_errors


def user_to_domain(model: UserModel) -> User:
    return User(
        id=model.id,
        full_name=model.full_name,
        department=model.department,
        email=model.email,
        leave_balances=LeaveBalances(
            annual=model.annual_leave,
            sick=model.sick_leave,
            personal=model.personal_leave,
            maternity=model.maternity_leave,
            paternity=model.paternity_leave,
        ),
        created_at=as_utc(model.created_at),
    )


def asset_to_domain(model: AssetModel) -> Asset:
    return Asset(
        id=model.id,
        owner_id=model.owner_id,
        name=model.name,
        asset_tag=model.asset_tag,
        category=model.category,
        serial_number=model.serial_number,
        assigned_at=as_utc(model.assigned_at),
        notes=model.notes,
    )


class SQLAlchemyUserRepository(IUserRepository):
    """SQLAlchemy implementation of the user repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_users(self) -> List[User]:
        with store_errors("users"):
            result = await self._session.execute(select(UserModel).order_by(UserModel.id))
            return [user_to_domain(m) for m in result.scalars().all()]

    async def get_by_id(self, user_id: str) -> Optional[User]:
        with store_errors("users"):
            model = await self._session.get(UserModel, user_id)
            return user_to_domain(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        with store_errors("users"):
            stmt = select(UserModel).where(func.lower(UserModel.email) == email.lower())
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            return user_to_domain(model) if model else None

    async def create(self, user: User) -> User:
        balances = user.leave_balances
        model = UserModel(
            id=user.id,
            full_name=user.full_name,
            department=user.department,
            email=user.email,
            annual_leave=balances.annual,
            sick_leave=balances.sick,
            personal_leave=balances.personal,
            maternity_leave=balances.maternity,
            paternity_leave=balances.paternity,
        )
        if user.created_at is not None:
            model.created_at = user.created_at

        with store_errors("users"):
            self._session.add(model)
            await self._session.flush()

        return user_to_domain(model)

    async def count(self) -> int:
        with store_errors("users"):
            result = await self._session.execute(select(func.count()).select_from(UserModel))
            return int(result.scalar_one())


class SQLAlchemyAssetRepository(IAssetRepository):
    """SQLAlchemy implementation of the asset register."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_for_user(self, user_id: str) -> List[Asset]:
        with store_errors("assets"):
            stmt = (
                select(AssetModel)
                .where(AssetModel.owner_id == user_id)
                .order_by(AssetModel.assigned_at.desc())
            )
            result = await self._session.execute(stmt)
            return [asset_to_domain(m) for m in result.scalars().all()]

    async def get_by_tag(self, asset_tag: str) -> Optional[Asset]:
        with store_errors("assets"):
            stmt = select(AssetModel).where(AssetModel.asset_tag == asset_tag)
            result = await self._session.execute(stmt)
            model = result.scalar_one_or_none()
            return asset_to_domain(model) if model else None

    async def create(self, asset: Asset) -> Asset:
        model = AssetModel(
            owner_id=asset.owner_id,
            name=asset.name,
            asset_tag=asset.asset_tag,
            category=asset.category,
            serial_number=asset.serial_number,
            assigned_at=asset.assigned_at,
            notes=asset.notes,
        )
        with store_errors("assets"):
            self._session.add(model)
            await self._session.flush()

        return asset_to_domain(model)
