from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fishlog.main import app
from fishlog.services.catch_service import CatchService
from fishlog.services.dependencies import get_catch_service, get_fish_service
from fishlog.services.fish_service import FishService
from tests.support.catch_data import make_catch
from tests.support.in_memory_repositories import (
    InMemoryCatchRepository,
    InMemoryFishRepository,
)


@pytest.fixture
def catch_repository() -> InMemoryCatchRepository:
    return InMemoryCatchRepository(
        [
            make_catch(date(2022, 7, 1), 4.0, name="Kari", record_id=1),
            make_catch(date(2022, 7, 2), 6.0, name="Kari", record_id=2),
            make_catch(date(2022, 7, 2), 2.0, name="Kari", species="Sjøørret", record_id=3),
            make_catch(date(2022, 7, 5), 8.0, name="Per", record_id=4),
        ]
    )


@pytest_asyncio.fixture
async def client(catch_repository: InMemoryCatchRepository) -> AsyncIterator[AsyncClient]:
    fish_repository = InMemoryFishRepository()
    app.dependency_overrides[get_catch_service] = lambda: CatchService(catch_repository)
    app.dependency_overrides[get_fish_service] = lambda: FishService(
        fish_repository, catch_repository
    )
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://testserver"
        ) as http_client:
            yield http_client
    finally:
        app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_post_catches_returns_created_records(client: AsyncClient) -> None:
    payload = [
        {"name": "Ane", "species": "Laks", "weight": 12.3, "date": "2023-06-20", "gear": "Flue"},
        {"name": "Ane", "species": "Laks", "weight": 3.1, "date": "2023-06-21", "zone": ""},
    ]

    response = await client.post("/catches", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert [record["id"] for record in body] == [5, 6]
    assert body[0]["gear"] == "Flue"
    assert body[1]["zone"] is None


@pytest.mark.asyncio
async def test_post_catches_rejects_negative_weight(client: AsyncClient) -> None:
    payload = [{"name": "Ane", "species": "Laks", "weight": -1, "date": "2023-06-20"}]

    response = await client.post("/catches", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["error_type"] == "validation_error"
    assert body["errors"][0]["field"] == "body.0.weight"


@pytest.mark.asyncio
async def test_list_catches_filters_by_name(client: AsyncClient) -> None:
    everything = await client.get("/catches")
    per = await client.get("/catches", params={"name": "Per"})

    assert len(everything.json()) == 4
    assert [record["id"] for record in per.json()] == [4]


@pytest.mark.asyncio
async def test_get_catch_by_id(client: AsyncClient) -> None:
    response = await client.get("/catches/2")

    assert response.status_code == 200
    assert response.json()["weight"] == 6.0


@pytest.mark.asyncio
async def test_missing_catch_returns_structured_404(client: AsyncClient) -> None:
    response = await client.get("/catches/999")

    assert response.status_code == 404
    body = response.json()
    assert body["error_type"] == "not_found"
    assert body["path"] == "/catches/999"
    assert body["request_id"] == response.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_incoming_request_id_is_reused(client: AsyncClient) -> None:
    response = await client.get("/catches/999", headers={"X-Request-ID": "trace-42"})

    assert response.headers["X-Request-ID"] == "trace-42"
    assert response.json()["request_id"] == "trace-42"


@pytest.mark.asyncio
async def test_angler_endpoints_default_to_salmon(client: AsyncClient) -> None:
    detail = await client.get("/anglers/Kari")
    stats = await client.get("/anglers/Kari/stats", params={"species": "Sjøørret"})

    assert detail.status_code == 200
    body = detail.json()
    assert body["species"] == "Laks"
    assert body["angler_stats"] == {
        "name": "Kari",
        "count": 2,
        "total_weight": 10.0,
        "average_weight": 5.0,
    }
    assert [record["id"] for record in body["data"]] == [1, 2]
    assert stats.json()["count"] == 1


@pytest.mark.asyncio
async def test_list_anglers(client: AsyncClient) -> None:
    response = await client.get("/anglers", params={"species": "Sjøørret"})

    assert response.json() == {"items": ["Kari"], "total": 1}


@pytest.mark.asyncio
async def test_convert_and_list_fish(client: AsyncClient) -> None:
    converted = await client.post("/fish/convert")
    fish = await client.get("/fish")

    assert converted.json() == {
        "converted": 4,
        "message": "Converted 4 entities successfully.",
    }
    assert len(fish.json()) == 4
