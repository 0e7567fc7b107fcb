"""
Access Controllers (API Routes)
===============================

FastAPI routes for permission checks and navigation.

The caller department arrives in the ``X-User-Department`` header. There is
no session security model; the header is trusted as-is.
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query

from helpdesk.access.application import (
    AccessCheckResponse,
    AccessService,
    NavigationResponse,
    PageAccessResponse,
)
from helpdesk.access.domain import AccessResolver, PermissionLevel
from helpdesk.access.infrastructure import YAMLPolicyProvider
from helpdesk.config import settings
from helpdesk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/access", tags=["Access Control"])


# ========== Dependencies ==========

@lru_cache()
def get_access_resolver() -> AccessResolver:
    """Resolver over the startup policy; built once per process."""
    provider = YAMLPolicyProvider(settings.access_policy_path)
    return AccessResolver(provider.get_policy())


def get_access_service(
    resolver: AccessResolver = Depends(get_access_resolver)
) -> AccessService:
    return AccessService(resolver)


def get_caller_department(
    x_user_department: Optional[str] = Header(None, description="Caller department")
) -> Optional[str]:
    return x_user_department


# ========== Route Handlers ==========

@router.get(
    "/check",
    response_model=AccessCheckResponse,
    summary="Check a module permission",
    description="""
    Returns whether the caller's department holds at least `level` on `module`.

    Restricted modules (`users`, `admin`, `purchases`) only admit the
    `admin`, `IT` and `IT / ICT` departments, whatever the level.
    Unknown departments and modules resolve to `none`.
    """,
)
async def check_access(
    module: str = Query(..., description="Module name, e.g. ticketing"),
    level: PermissionLevel = Query(PermissionLevel.READ, description="Required level"),
    department: Optional[str] = Depends(get_caller_department),
    access: AccessService = Depends(get_access_service),
):
    return access.check(department, module, level)


@router.get(
    "/navigation",
    response_model=NavigationResponse,
    summary="Visible navigation for the caller",
)
async def get_navigation(
    department: Optional[str] = Depends(get_caller_department),
    access: AccessService = Depends(get_access_service),
):
    return access.navigation(department)


@router.get(
    "/pages/{page}",
    response_model=PageAccessResponse,
    summary="Direct page access decision",
    description="Unauthorized callers get `allowed=false` and a `redirect_to` target.",
)
async def get_page_access(
    page: str,
    department: Optional[str] = Depends(get_caller_department),
    access: AccessService = Depends(get_access_service),
):
    return access.page_access(department, page)


# Export router for inclusion in main app
access_router = router
