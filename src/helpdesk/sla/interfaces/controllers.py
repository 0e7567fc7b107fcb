"""
SLA Controllers (API Routes)
=============================

FastAPI routes for SLA policy and sweep endpoints.

Controllers are thin - they delegate to application services.
"""

from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from helpdesk.access.application import AccessService
from helpdesk.access.domain import Module, PermissionLevel
from helpdesk.access.interfaces import get_access_service, get_caller_department
from helpdesk.config import settings
from helpdesk.infrastructure.database import get_session
from helpdesk.shared.infrastructure.logging import get_logger
from helpdesk.sla.application import SLAPolicyResponse, SLASweepResponse, SLASweepService
from helpdesk.sla.domain import SLACalculator
from helpdesk.sla.infrastructure import SLAConfigManager
from helpdesk.tickets.infrastructure import SQLAlchemyTicketRepository

logger = get_logger(__name__)
router = APIRouter(prefix="/sla", tags=["SLA Monitoring"])


# ========== Example payloads for Swagger ==========

SLA_POLICY_EXAMPLE = {
    "targets": [
        {"priority": "P1", "minutes": 60, "display": "1h 0m"},
        {"priority": "P2", "minutes": 240, "display": "4h 0m"},
        {"priority": "P3", "minutes": 1440, "display": "24h 0m"},
        {"priority": "P4", "minutes": 4320, "display": "72h 0m"},
    ],
    "warning_window_minutes": 60,
}


# ========== Dependencies ==========

@lru_cache()
def get_sla_config_manager() -> SLAConfigManager:
    manager = SLAConfigManager(settings.sla_config_path)
    manager.load()
    return manager


def get_sla_calculator(
    manager: SLAConfigManager = Depends(get_sla_config_manager)
) -> SLACalculator:
    return SLACalculator(manager.get_policy())


async def get_sweep_service(
    session: AsyncSession = Depends(get_session),
    calculator: SLACalculator = Depends(get_sla_calculator),
) -> SLASweepService:
    return SLASweepService(SQLAlchemyTicketRepository(session), calculator)


# ========== Route Handlers ==========

@router.get(
    "/policy",
    response_model=SLAPolicyResponse,
    summary="Active SLA policy",
    description="Resolution windows per priority and the warning window.",
    responses={200: {"content": {"application/json": {"example": SLA_POLICY_EXAMPLE}}}},
)
async def get_sla_policy(calculator: SLACalculator = Depends(get_sla_calculator)):
    return SLAPolicyResponse.from_domain(calculator.policy)


@router.post(
    "/sweep",
    response_model=SLASweepResponse,
    summary="Run an SLA sweep now",
    description="""
    Classifies every open ticket against its due date and returns the counts.

    Requires `owner` on `ticketing`. The sweep only reads; it does not
    notify anyone or modify tickets.
    """,
)
async def run_sla_sweep(
    department: Optional[str] = Depends(get_caller_department),
    access: AccessService = Depends(get_access_service),
    service: SLASweepService = Depends(get_sweep_service),
):
    access.require(department, Module.TICKETING.value, PermissionLevel.OWNER)
    report = await service.sweep()
    return SLASweepResponse.from_domain(report)


# Export router for inclusion in main app
sla_router = router
