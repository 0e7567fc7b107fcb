"""
Test configuration and fixtures.

Provides:
- A fresh SQLite database per test (temporary file)
- HTTPX AsyncClient bound to the FastAPI app
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from helpdesk.infrastructure.database import (
    close_database,
    create_tables,
    get_session_context,
    init_database,
)
from helpdesk.main import app
from helpdesk.sla.domain import SLACalculator
from helpdesk.sla.interfaces import get_sla_calculator
from helpdesk.directory.infrastructure import SQLAlchemyUserRepository, seed_users


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def database(tmp_path) -> AsyncGenerator[None, None]:
    """Initialise an empty database in a temporary file."""
    init_database(f"sqlite+aiosqlite:///{tmp_path / 'helpdesk.db'}")
    await create_tables()
    yield
    await close_database()


@pytest_asyncio.fixture
async def seeded_directory(database) -> None:
    async with get_session_context() as session:
        await seed_users(SQLAlchemyUserRepository(session))


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(database) -> AsyncGenerator[AsyncClient, None]:
    """HTTPX client against the app with the built-in SLA windows."""
    app.dependency_overrides[get_sla_calculator] = lambda: SLACalculator()
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def ticket_payload() -> dict:
    return {
        "name": "Grace Achieng",
        "email": "grace@example.com",
        "ticket_type": "Request",
        "issue_type": "transaction",
        "description": "Transfer to savings has not arrived",
        "priority": "P2",
    }
