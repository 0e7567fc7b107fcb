"""
Bank Helpdesk - Main Application
================================

Internal helpdesk and ticketing service for the bank.

Modules:
- Access Control: Department-based permissions and page gating
- Tickets: Submission, role-filtered listing, updates, escalation, audit trail
- SLA: Priority-based due dates, live status and a periodic sweep
- Directory: Employee accounts and the asset register

Clean Architecture Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Domain: Entities, value objects and pure domain services
- Infrastructure: Database, YAML config, scheduler
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

# Configuration and Core
from helpdesk.config import settings
from helpdesk.core import ApplicationException

# Infrastructure
from helpdesk.infrastructure.database import (
    close_database,
    create_tables,
    get_engine,
    get_session_context,
    init_database,
)

# Models must be imported so create_tables() sees their tables
from helpdesk.tickets.infrastructure import SQLAlchemyTicketRepository
from helpdesk.directory.infrastructure import SQLAlchemyUserRepository, seed_users

# SLA Module
from helpdesk.sla.application import SLASweepService
from helpdesk.sla.domain import SLACalculator
from helpdesk.sla.infrastructure import SLAScheduler

# Module Routers and shared dependencies
from helpdesk.access.interfaces import access_router, get_access_resolver
from helpdesk.directory.interfaces import directory_router
from helpdesk.sla.interfaces import get_sla_config_manager, sla_router
from helpdesk.tickets.interfaces import audit_router, tickets_router

# Shared kernel
from helpdesk.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    ResponseTimeMiddleware,
    application_exception_handler,
    global_exception_handler,
)
from helpdesk.shared.infrastructure.logging import get_logger, setup_logging

logger = get_logger(__name__)

# Global service instances
sla_scheduler: Optional[SLAScheduler] = None


async def sla_sweep_job() -> None:
    """Background SLA sweep over open tickets."""
    calculator = SLACalculator(get_sla_config_manager().get_policy())
    try:
        async with get_session_context() as session:
            await SLASweepService(SQLAlchemyTicketRepository(session), calculator).sweep()
    except ApplicationException as e:
        logger.error(
            "SLA sweep failed",
            extra={"error_type": type(e).__name__, "error": e.message}
        )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Load access policy and SLA configuration (fail fast when malformed)
    3. Initialize database and create tables
    4. Seed the user directory
    5. Start SLA sweep scheduler

    SHUTDOWN:
    1. Stop SLA scheduler
    2. Close database connections
    """
    global sla_scheduler

    # === STARTUP ===
    setup_logging(settings.log_level, settings.environment)
    logger.info("Starting Helpdesk Service", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    logger.info("Loading access policy and SLA configuration")
    get_access_resolver()
    get_sla_config_manager()

    logger.info("Initializing database")
    init_database()

    # Without a reachable store the service still starts; store-backed
    # endpoints answer 503 until it comes back.
    try:
        await create_tables()
        if settings.seed_directory:
            async with get_session_context() as session:
                await seed_users(SQLAlchemyUserRepository(session))
    except (SQLAlchemyError, OSError, ApplicationException) as e:
        logger.warning(
            "Database not available - running in degraded mode",
            extra={"error_type": type(e).__name__, "error": str(e)}
        )

    if settings.sla_sweep_enabled:
        sla_scheduler = SLAScheduler(interval_seconds=settings.sla_sweep_interval)
        await sla_scheduler.start(sla_sweep_job)

    logger.info("Helpdesk Service started successfully")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down Helpdesk Service")

    if sla_scheduler:
        await sla_scheduler.stop()
        sla_scheduler = None

    await close_database()

    logger.info("Helpdesk Service shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Bank Helpdesk API",
    description="""
    ## Internal Helpdesk & Ticketing

    The caller's department is passed in the `X-User-Department` header and
    drives every permission decision.

    ---

    ### 🔐 Access Control
    - `GET /access/check` - Permission decision for a module and level
    - `GET /access/navigation` - Pages and modules visible to the caller
    - `GET /access/pages/{page}` - Direct page gate with redirect target

    ### 🎫 Tickets
    - `GET /tickets` - Role-filtered list with SLA status and stats
    - `POST /tickets` - Submit a ticket
    - `GET /tickets/{id}` / `PATCH /tickets/{id}` - Inspect or update
    - `POST /tickets/{id}/escalate` - Escalate
    - `GET /audit/logs` - Audit trail

    ### ⏱️ SLA
    | Priority | Resolution window |
    |----------|-------------------|
    | P1 | 1 hour |
    | P2 | 4 hours |
    | P3 | 24 hours |
    | P4 | 72 hours |

    Tickets due within an hour are flagged `warning`; overdue tickets are `breach`.

    ### 👥 Directory
    - `GET /users`, `POST /users`, `GET /users/{id}`
    - `GET /users/{id}/assets`, `POST /users/{id}/assets`
    """,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# === CORS Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Custom Middleware (from shared) ===
# Added last runs first: the correlation id is bound before anything logs.
app.add_middleware(LoggingMiddleware)
app.add_middleware(ResponseTimeMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# === Include Module Routers ===
app.include_router(access_router)
app.include_router(tickets_router)
app.include_router(audit_router)
app.include_router(sla_router)
app.include_router(directory_router)


# === Health Check Endpoint ===

@app.get("/health", tags=["Health"], responses={
    200: {
        "description": "Service health",
        "content": {
            "application/json": {
                "example": {
                    "status": "healthy",
                    "version": "1.0.0",
                    "environment": "development",
                    "checks": {
                        "database": "connected",
                        "sla_config": "loaded",
                        "sla_scheduler": "running"
                    }
                }
            }
        }
    }
})
async def health_check():
    """
    Health check endpoint for load balancers and orchestrators.

    Reports database connectivity, SLA configuration and scheduler state.
    The service is ``degraded`` when the database cannot be reached.
    """
    checks = {
        "database": "connected",
        "sla_config": "loaded",
        "sla_scheduler": "running" if sla_scheduler and sla_scheduler.is_running else "stopped",
    }

    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, RuntimeError) as e:
        checks["database"] = f"unavailable: {type(e).__name__}"

    return {
        "status": "healthy" if checks["database"] == "connected" else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": checks
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Bank Helpdesk",
        "version": settings.app_version,
        "architecture": "Clean Architecture / Modular Monolith",
        "docs": "/docs",
        "health": "/health",
        "modules": {
            "access": {"prefix": "/access"},
            "tickets": {"prefix": "/tickets"},
            "audit": {"prefix": "/audit"},
            "sla": {"prefix": "/sla"},
            "directory": {"prefix": "/users"},
        }
    }


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "helpdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower()
    )


# === Development Entry Point ===

if __name__ == "__main__":
    run()
