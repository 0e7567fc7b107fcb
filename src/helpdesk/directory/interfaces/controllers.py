"""
Directory Controllers (API Routes)
==================================

FastAPI routes for employee accounts and their assets.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.access.application import AccessService
from helpdesk.access.interfaces import get_access_service, get_caller_department
from helpdesk.directory.application import (
    AssetCreateDTO,
    AssetResponse,
    DirectoryService,
    UserCreateDTO,
    UserResponse,
)
from helpdesk.directory.infrastructure import (
    SQLAlchemyAssetRepository,
    SQLAlchemyUserRepository,
)
from helpdesk.infrastructure.database import get_session

router = APIRouter(prefix="/users", tags=["Directory"])


# ========== Dependencies ==========

async def get_directory_service(
    session: AsyncSession = Depends(get_session),
    access: AccessService = Depends(get_access_service),
) -> DirectoryService:
    return DirectoryService(
        SQLAlchemyUserRepository(session),
        SQLAlchemyAssetRepository(session),
        access,
    )


# ========== Route Handlers ==========

@router.get(
    "",
    response_model=List[UserResponse],
    summary="List employees",
    description="""
    Restricted to the `admin`, `IT` and `IT / ICT` departments.

    `department` is resolved like a caller department, so `IT Support`
    lists the IT staff.
    """,
)
async def list_users(
    department_filter: Optional[str] = Query(None, alias="department"),
    department: Optional[str] = Depends(get_caller_department),
    service: DirectoryService = Depends(get_directory_service),
):
    users = await service.list_users(department, department_filter)
    return [UserResponse.from_domain(u) for u in users]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an employee",
)
async def create_user(
    payload: UserCreateDTO,
    department: Optional[str] = Depends(get_caller_department),
    service: DirectoryService = Depends(get_directory_service),
    session: AsyncSession = Depends(get_session),
):
    user = await service.create_user(payload, department)
    await session.commit()
    return UserResponse.from_domain(user)


@router.get("/{user_id}", response_model=UserResponse, summary="Get one employee")
async def get_user(
    user_id: str,
    department: Optional[str] = Depends(get_caller_department),
    service: DirectoryService = Depends(get_directory_service),
):
    return UserResponse.from_domain(await service.get_user(user_id, department))


@router.get(
    "/{user_id}/assets",
    response_model=List[AssetResponse],
    summary="Assets issued to an employee",
    description="Requires `read` on `inventory`.",
)
async def list_user_assets(
    user_id: str,
    department: Optional[str] = Depends(get_caller_department),
    service: DirectoryService = Depends(get_directory_service),
):
    assets = await service.list_assets(user_id, department)
    return [AssetResponse.from_domain(a) for a in assets]


@router.post(
    "/{user_id}/assets",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue an asset to an employee",
    description="Requires `owner` on `inventory`. Asset tags are unique.",
)
async def register_asset(
    user_id: str,
    payload: AssetCreateDTO,
    department: Optional[str] = Depends(get_caller_department),
    service: DirectoryService = Depends(get_directory_service),
    session: AsyncSession = Depends(get_session),
):
    asset = await service.register_asset(user_id, payload, department)
    await session.commit()
    return AssetResponse.from_domain(asset)


# Export router for inclusion in main app
directory_router = router
