# tests/test_game_types.py

"""Tests for registering and listing a team's game types."""

import pytest
from eloboard.db.models import GameType
from eloboard.exceptions import GameTypeAlreadyRegisteredError
from eloboard.services import game_type_service
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

TEAM_ID = "T1"

# =============================================================================
# Service
# =============================================================================


@pytest.mark.asyncio
async def test_register_then_find(db_session: AsyncSession):
    created = await game_type_service.register(db_session, TEAM_ID, "chess")

    found = await game_type_service.find(db_session, TEAM_ID, "chess")
    assert found is not None
    assert found.id == created.id


@pytest.mark.asyncio
async def test_registering_twice_keeps_one_row(db_session: AsyncSession, session_factory):
    await game_type_service.register(db_session, TEAM_ID, "chess")

    with pytest.raises(GameTypeAlreadyRegisteredError):
        await game_type_service.register(db_session, TEAM_ID, "chess")

    async with session_factory() as check:
        count = (
            await check.execute(
                select(func.count()).select_from(GameType).where(GameType.name == "chess")
            )
        ).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_same_name_allowed_on_different_teams(db_session: AsyncSession):
    first = await game_type_service.register(db_session, TEAM_ID, "chess")
    second = await game_type_service.register(db_session, "T2", "chess")
    assert first.id != second.id


@pytest.mark.asyncio
async def test_names_are_matched_exactly(db_session: AsyncSession):
    await game_type_service.register(db_session, TEAM_ID, "chess")
    assert await game_type_service.find(db_session, TEAM_ID, "Chess") is None


@pytest.mark.asyncio
async def test_list_for_team_is_sorted_and_scoped(db_session: AsyncSession):
    for team_id, name in [(TEAM_ID, "pool"), (TEAM_ID, "chess"), ("T2", "darts")]:
        await game_type_service.register(db_session, team_id, name)

    game_types = await game_type_service.list_for_team(db_session, TEAM_ID)
    assert [g.name for g in game_types] == ["chess", "pool"]


# =============================================================================
# API
# =============================================================================


@pytest.mark.asyncio
async def test_create_game_type_endpoint(async_client: AsyncClient):
    response = await async_client.post(
        f"/teams/{TEAM_ID}/game-types/", json={"name": "foosball"}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "foosball"
    assert data["team_id"] == TEAM_ID
    assert "id" in data


@pytest.mark.asyncio
async def test_duplicate_game_type_returns_409(async_client: AsyncClient):
    url = f"/teams/{TEAM_ID}/game-types/"
    assert (await async_client.post(url, json={"name": "chess"})).status_code == 201

    response = await async_client.post(url, json={"name": "chess"})

    assert response.status_code == 409
    assert "already been registered" in response.json()["detail"]


@pytest.mark.asyncio
async def test_empty_game_type_name_returns_422(async_client: AsyncClient):
    response = await async_client.post(
        f"/teams/{TEAM_ID}/game-types/", json={"name": ""}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_list_game_types_endpoint_paginates(async_client: AsyncClient):
    url = f"/teams/{TEAM_ID}/game-types/"
    for name in ["pool", "chess", "darts"]:
        await async_client.post(url, json={"name": name})

    response = await async_client.get(url, params={"limit": 2})

    assert response.status_code == 200
    data = response.json()
    assert [item["name"] for item in data["items"]] == ["chess", "darts"]
    assert data["total"] == 3
    assert data["has_more"] is True

    response = await async_client.get(url, params={"sort_order": "desc"})
    assert [item["name"] for item in response.json()["items"]] == [
        "pool",
        "darts",
        "chess",
    ]
