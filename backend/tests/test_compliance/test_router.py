import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError


@pytest.mark.asyncio
async def test_compliance_report_empty_inventory(client: AsyncClient):
    response = await client.get("/api/v1/servers/compliance")
    assert response.status_code == 200
    data = response.json()
    assert data["total_servers"] == 0
    assert data["compliance_score"] == 100.0
    assert data["score_description"].startswith("Excellent")
    assert data["recommendations"] == []
    assert data["end_of_life_list"] == []
    assert data["os_distribution"] == {}
    assert "generated_at" in data


@pytest.mark.asyncio
async def test_compliance_report_one_server_per_status(client: AsyncClient, one_server_per_os: dict):
    response = await client.get("/api/v1/servers/compliance")
    assert response.status_code == 200
    data = response.json()

    assert data["total_servers"] == 3
    assert data["end_of_life_servers"] == 1
    assert data["ending_soon_servers"] == 1
    assert data["supported_servers"] == 1
    assert data["compliance_score"] == pytest.approx(50 / 3)
    assert data["score_description"].startswith("Critical")
    assert data["os_distribution"] == {"Ubuntu 18.04": 1, "Ubuntu 20.04": 1, "Ubuntu 22.04": 1}
    assert data["os_family_distribution"] == {"Ubuntu": 3}

    assert [s["id"] for s in data["end_of_life_list"]] == [one_server_per_os["18.04"]["id"]]
    assert data["end_of_life_list"][0]["os"]["version"] == "18.04"
    assert [s["id"] for s in data["ending_soon_list"]] == [one_server_per_os["20.04"]["id"]]


@pytest.mark.asyncio
async def test_compliance_recommendations(client: AsyncClient, one_server_per_os: dict):
    response = await client.get("/api/v1/servers/compliance")
    recommendations = response.json()["recommendations"]

    assert recommendations[0].startswith("CRITICAL: 1 servers")
    assert recommendations[1].startswith("WARNING: 1 servers")
    assert "SUGGESTION: Consider upgrading 1 servers from Ubuntu 18.04 to Ubuntu 22.04" in recommendations
    assert "SUGGESTION: Consider upgrading 1 servers from Ubuntu 20.04 to Ubuntu 22.04" in recommendations
    assert len(recommendations) == 4


@pytest.mark.asyncio
async def test_servers_grouped_by_os(client: AsyncClient, ubuntu_catalog: dict):
    os_id = ubuntu_catalog["22.04"]["id"]
    for name in ("app-1", "app-2"):
        await client.post("/api/v1/servers", json={"name": name, "os_id": os_id})

    response = await client.get("/api/v1/servers/grouped")
    assert response.status_code == 200
    data = response.json()
    assert list(data) == ["Ubuntu 22.04"]
    assert {s["name"] for s in data["Ubuntu 22.04"]} == {"app-1", "app-2"}


@pytest.mark.asyncio
async def test_compliance_report_without_catalog(client: AsyncClient, one_server_per_os: dict, monkeypatch):
    async def failing_catalog(db):
        raise OperationalError("SELECT operating_systems", {}, Exception("database is locked"))

    monkeypatch.setattr("app.compliance.router.list_operating_systems", failing_catalog)

    response = await client.get("/api/v1/servers/compliance")
    assert response.status_code == 200
    data = response.json()
    assert data["total_servers"] == 3
    assert data["end_of_life_servers"] == 1
    recommendations = data["recommendations"]
    assert len(recommendations) == 2
    assert recommendations[0].startswith("CRITICAL: 1 servers")
    assert recommendations[1].startswith("WARNING: 1 servers")
