"""Access, SLA and health endpoints."""

import pytest


def as_department(department: str) -> dict:
    return {"X-User-Department": department}


# =============================================================================
# Access control
# =============================================================================

@pytest.mark.asyncio
async def test_check_reports_granted_level(client):
    response = await client.get(
        "/access/check",
        params={"module": "finance", "level": "user"},
        headers=as_department("Finance Department"),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["department_key"] == "Finance"
    assert body["granted_level"] == "owner"
    assert body["allowed"] is True


@pytest.mark.asyncio
async def test_check_restricted_module_ignores_level(client):
    response = await client.get(
        "/access/check",
        params={"module": "purchases", "level": "read"},
        headers=as_department("admin"),
    )
    body = response.json()
    assert body["allowed"] is True
    assert body["granted_level"] == "full"

    response = await client.get(
        "/access/check",
        params={"module": "users", "level": "limited"},
        headers=as_department("Management"),
    )
    body = response.json()
    assert body["allowed"] is False
    assert body["granted_level"] == "none"


@pytest.mark.asyncio
async def test_check_rejects_unknown_level(client):
    response = await client.get(
        "/access/check",
        params={"module": "ticketing", "level": "superuser"},
        headers=as_department("admin"),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_check_without_department(client):
    response = await client.get("/access/check", params={"module": "ticketing"})

    body = response.json()
    assert body["department_key"] == "none"
    assert body["granted_level"] == "none"
    assert body["allowed"] is False


@pytest.mark.asyncio
async def test_navigation_for_customer(client):
    response = await client.get("/access/navigation", headers=as_department("Customer"))

    body = response.json()
    assert body["modules"] == ["ticketing"]
    assert body["is_super_admin"] is False
    assert set(body["pages"]) == {"index.html", "system.html", "submit.html", "tickets.html"}


@pytest.mark.asyncio
async def test_navigation_for_admin(client):
    response = await client.get("/access/navigation", headers=as_department("admin"))

    body = response.json()
    assert body["is_super_admin"] is True
    assert "users.html" in body["pages"]
    assert "iam.html" not in body["pages"]


@pytest.mark.asyncio
async def test_page_gate_redirects_unauthorized_caller(client):
    response = await client.get("/access/pages/users.html", headers=as_department("Finance"))

    body = response.json()
    assert body["module"] == "users"
    assert body["allowed"] is False
    assert body["redirect_to"] == "system.html"


@pytest.mark.asyncio
async def test_page_gate_allows_open_pages(client):
    response = await client.get("/access/pages/index.html")

    body = response.json()
    assert body["allowed"] is True
    assert body["redirect_to"] is None


# =============================================================================
# SLA
# =============================================================================

@pytest.mark.asyncio
async def test_sla_policy(client):
    response = await client.get("/sla/policy")

    body = response.json()
    assert [(t["priority"], t["minutes"]) for t in body["targets"]] == [
        ("P1", 60), ("P2", 240), ("P3", 1440), ("P4", 4320),
    ]
    assert body["targets"][2]["display"] == "24h 0m"
    assert body["warning_window_minutes"] == 60


@pytest.mark.asyncio
async def test_sla_sweep_counts_open_tickets(client, ticket_payload):
    headers = as_department("Customer")
    await client.post("/tickets", json=ticket_payload, headers=headers)
    await client.post("/tickets", json={**ticket_payload, "priority": "P4"}, headers=headers)

    response = await client.post("/sla/sweep", headers=as_department("IT"))

    assert response.status_code == 200
    body = response.json()
    assert body["evaluated"] == 2
    assert body["counts"]["good"] == 2
    assert body["breach_rate"] == 0.0
    assert body["breached_ticket_ids"] == []


@pytest.mark.asyncio
async def test_sla_sweep_requires_ticketing_owner(client):
    response = await client.post("/sla/sweep", headers=as_department("Finance"))
    assert response.status_code == 403


# =============================================================================
# Service endpoints
# =============================================================================

@pytest.mark.asyncio
async def test_health_reports_database(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["checks"]["database"] == "connected"
    assert body["checks"]["sla_scheduler"] == "stopped"


@pytest.mark.asyncio
async def test_root_lists_modules(client):
    response = await client.get("/")
    assert set(response.json()["modules"]) == {"access", "tickets", "audit", "sla", "directory"}
