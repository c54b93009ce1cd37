from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fishlog.main import app
from fishlog.services.catch_service import CatchService
from fishlog.services.dependencies import get_catch_service
from fishlog.services.stats_service import StatsService, get_stats_service
from tests.support.catch_data import create_test_data, make_catch
from tests.support.in_memory_repositories import InMemoryCatchRepository


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AsyncClient]:
    records = create_test_data(2022, 2)
    records.append(make_catch(date(2022, 7, 4), 1.0, species="Sjøørret"))
    repository = InMemoryCatchRepository(records)
    app.dependency_overrides[get_catch_service] = lambda: CatchService(repository)
    app.dependency_overrides[get_stats_service] = lambda: StatsService(repository)
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://testserver"
        ) as http_client:
            yield http_client
    finally:
        app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_species_listing(client: AsyncClient) -> None:
    response = await client.get("/stats/species")

    assert response.json() == {"items": ["Laks", "Sjøørret"], "total": 2}


@pytest.mark.asyncio
async def test_season_best_weeks_by_year(client: AsyncClient) -> None:
    response = await client.get("/stats/best-weeks/season")

    assert response.status_code == 200
    body = response.json()
    assert body["species"] == "Laks"
    assert body["season_start"] == "06.15"
    assert set(body["years"]) == {"2022", "2023"}
    assert body["years"]["2022"][0] == {
        "start_date": "07.20",
        "end_date": "07.26",
        "count": 161,
        "total_weight": 1610.0,
        "average_weight": 10.0,
    }


@pytest.mark.asyncio
async def test_all_time_best_weeks(client: AsyncClient) -> None:
    response = await client.get("/stats/best-weeks/all-time")

    assert [week["count"] for week in response.json()["weeks"]] == [322, 228, 224]


@pytest.mark.asyncio
async def test_rolling_best_weeks(client: AsyncClient) -> None:
    response = await client.get("/stats/best-weeks")

    first = response.json()["years"]["2023"][0]
    assert (first["start_date"], first["end_date"], first["count"]) == (
        "2023-07-22",
        "2023-07-28",
        175,
    )


@pytest.mark.asyncio
async def test_species_parameter_selects_records(client: AsyncClient) -> None:
    yearly = await client.get("/stats/yearly", params={"species": "Sjøørret"})
    summary = await client.get("/stats/summary", params={"species": "Sjøørret"})

    assert yearly.json()["years"] == [
        {
            "year": 2022,
            "count": 1,
            "total_weight": 1.0,
            "average_weight": 1.0,
            "median_weight": 1.0,
            "heaviest_weight": 1.0,
        }
    ]
    assert summary.json()["first_catch"] == "2022-07-04"


@pytest.mark.asyncio
async def test_empty_species_parameter_is_rejected(client: AsyncClient) -> None:
    response = await client.get("/stats/summary", params={"species": ""})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_default_species_follows_settings(
    client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("DEFAULT_SPECIES", "Sjøørret")

    response = await client.get("/stats/summary")

    assert response.json()["species"] == "Sjøørret"
    assert response.json()["count"] == 1


@pytest.mark.asyncio
async def test_species_parameter_is_stripped(client: AsyncClient) -> None:
    response = await client.get("/stats/summary", params={"species": " Sjøørret "})

    assert response.status_code == 200
    assert response.json()["species"] == "Sjøørret"
    assert response.json()["count"] == 1


@pytest.mark.asyncio
async def test_blank_species_parameter_is_rejected(client: AsyncClient) -> None:
    response = await client.get("/stats/yearly", params={"species": "   "})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "query.species"
