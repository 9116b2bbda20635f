import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient

from houseguide.providers.base import GenerationProvider
from houseguide.providers.registry import get_generation_provider
from houseguide.residents.models import Incident, Meeting, Note


@pytest_asyncio.fixture
async def seeded_week(db_session, resident):
    common = {"resident_id": resident.id, "house_id": resident.house_id}
    db_session.add_all([
        Meeting(meeting_type="aa", date_attended="2024-01-02", **common),
        Incident(incident_type="behavioral", severity="low", description="Raised voice at dinner", date_occurred="2024-01-03", **common),
        Incident(incident_type="behavioral", severity="low", description="Outside window", date_occurred="2024-01-09", **common),
        Note(text="Attended group and shared openly.", **common),
    ])
    await db_session.commit()
    return resident


@pytest.mark.asyncio
async def test_generate_weekly_draft_template(client: AsyncClient, seeded_week):
    response = await client.post(
        "/api/v1/reports/weekly",
        json={"resident_id": str(seeded_week.id), "week_start": "2024-01-01", "week_end": "2024-01-07"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["generated_by"] == "template"
    assert data["week_start"] == "2024-01-01"
    assert data["body"].startswith("Resident: John D.  Week of: 2024-01-01  House: Oak House")
    assert "AA meeting on 2024-01-02" in data["body"]
    assert "Raised voice at dinner" in data["body"]
    assert "Outside window" not in data["body"]


@pytest.mark.asyncio
async def test_generate_weekly_draft_with_provider(app, client: AsyncClient, resident):
    class Canned(GenerationProvider):
        name = "canned"

        async def generate(self, structured_input, template):
            return f"Report for {structured_input['resident']['name']}"

    app.dependency_overrides[get_generation_provider] = lambda: Canned()
    response = await client.post(
        "/api/v1/reports/weekly",
        json={"resident_id": str(resident.id), "week_start": "2024-01-01", "week_end": "2024-01-07"},
    )
    assert response.status_code == 200
    assert response.json()["body"] == "Report for John D."
    assert response.json()["generated_by"] == "ai"


@pytest.mark.asyncio
async def test_generate_unknown_resident(client: AsyncClient):
    response = await client.post(
        "/api/v1/reports/weekly",
        json={"resident_id": str(uuid.uuid4()), "week_start": "2024-01-01", "week_end": "2024-01-07"},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_generate_invalid_date(client: AsyncClient, resident):
    response = await client.post(
        "/api/v1/reports/weekly",
        json={"resident_id": str(resident.id), "week_start": "next tuesday", "week_end": "2024-01-07"},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_save_and_get_weekly_report(client: AsyncClient, resident):
    payload = {
        "resident_id": str(resident.id),
        "week_start": "2024-01-01",
        "week_end": "2024-01-07",
        "body": "First draft",
    }
    response = await client.post("/api/v1/reports/weekly/save", json=payload)
    assert response.status_code == 200
    first = response.json()
    assert first["generated_by"] == "edited"

    payload["body"] = "Second draft"
    response = await client.post("/api/v1/reports/weekly/save", json=payload)
    assert response.status_code == 200
    assert response.json()["id"] == first["id"]

    response = await client.get(f"/api/v1/reports/weekly/{resident.id}/2024-01-01")
    assert response.status_code == 200
    assert response.json()["body"] == "Second draft"


@pytest.mark.asyncio
async def test_get_missing_report(client: AsyncClient, resident):
    response = await client.get(f"/api/v1/reports/weekly/{resident.id}/2024-01-01")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_save_unknown_resident(client: AsyncClient):
    response = await client.post(
        "/api/v1/reports/weekly/save",
        json={"resident_id": str(uuid.uuid4()), "week_start": "2024-01-01", "week_end": "2024-01-07", "body": "x"},
    )
    assert response.status_code == 404
