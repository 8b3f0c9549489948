# src/eloboard/api/game_type.py

"""API endpoints for a team's game types and their rankings."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from eloboard.db.models import GameType
from eloboard.db.session import get_db
from eloboard.exceptions import GameTypeAlreadyRegisteredError, GameTypeNotFoundError
from eloboard.identity import normalize
from eloboard.schemas import game_type as game_type_schema
from eloboard.schemas.pagination import GameTypeSortField, PaginatedResponse, SortOrder
from eloboard.schemas.rating import RankedEntryRead
from eloboard.services import game_type_service, leaderboard_service

# - prefix: every route is scoped to one team
# - tags=["Game Types"]: Groups these endpoints in the API docs
router = APIRouter(prefix="/teams/{team_id}/game-types", tags=["Game Types"])


async def _get_game_type_or_404(db: AsyncSession, team_id: str, name: str) -> GameType:
    game_type = await game_type_service.find(db, team_id, name)
    if game_type is None:
        raise GameTypeNotFoundError(team_id, name)
    return game_type


@router.post(
    "/",
    response_model=game_type_schema.GameTypeRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_game_type(
    team_id: str,
    game_type_in: game_type_schema.GameTypeCreate,
    db: AsyncSession = Depends(get_db),
) -> GameType:
    """
    Register a game type for a team.

    Raises:
        409 Conflict: If the team already registered a game with this name.
    """
    try:
        return await game_type_service.register(db, team_id, game_type_in.name)
    except GameTypeAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.get("/", response_model=PaginatedResponse[game_type_schema.GameTypeRead])
async def read_game_types(
    team_id: str,
    skip: int = Query(0, ge=0, description="Records to skip"),
    limit: int = Query(50, ge=1, le=100, description="Max records to return"),
    sort_by: GameTypeSortField = Query(GameTypeSortField.NAME, description="Sort field"),
    sort_order: SortOrder = Query(SortOrder.ASC, description="Sort direction"),
    db: AsyncSession = Depends(get_db),
) -> PaginatedResponse[game_type_schema.GameTypeRead]:
    """
    Retrieve a paginated list of the team's game types.

    - **skip**: Number of records to skip (for pagination)
    - **limit**: Maximum number of records to return (1-100)
    - **sort_by**: Field to sort by (name, created_at)
    - **sort_order**: Sort direction (asc, desc)
    """
    base_query = select(GameType).where(GameType.team_id == team_id)

    count_query = select(func.count()).select_from(base_query.subquery())
    total = (await db.execute(count_query)).scalar_one()

    sort_column = getattr(GameType, sort_by.value)
    if sort_order == SortOrder.DESC:
        sort_column = sort_column.desc()

    query = base_query.order_by(sort_column).offset(skip).limit(limit)
    result = await db.execute(query)
    items = list(result.scalars().all())

    return PaginatedResponse(
        items=items,  # type: ignore[arg-type]
        total=total,
        skip=skip,
        limit=limit,
        has_more=(skip + len(items)) < total,
    )


@router.get("/{name}/leaderboard", response_model=list[RankedEntryRead])
async def get_leaderboard(
    team_id: str,
    name: str,
    team_size: int = Query(1, ge=1, le=2, description="1 for singles, 2 for doubles"),
    db: AsyncSession = Depends(get_db),
) -> list[RankedEntryRead]:
    """
    Get the highest-rated compositions for a game type.

    Ranks are dense: equal ratings share a rank.
    """
    game_type = await _get_game_type_or_404(db, team_id, name)
    ranked = await leaderboard_service.top_entries(db, team_id, game_type.id, team_size)
    return [RankedEntryRead.model_validate(r) for r in ranked]


@router.get("/{name}/surrounding", response_model=list[RankedEntryRead])
async def get_surrounding_ranks(
    team_id: str,
    name: str,
    members: list[str] = Query(..., description="One identity, or two for doubles"),
    db: AsyncSession = Depends(get_db),
) -> list[RankedEntryRead]:
    """
    Get the compositions ranked one above, level with and one below a
    composition.

    - **members**: One identity for singles or two for doubles, e.g. `@U1`.

    Raises:
        404 Not Found: If the game type or the composition's rating doesn't exist.
        422 Unprocessable Entity: If members doesn't hold one or two identities.
    """
    if len(members) not in (1, 2):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="members must list one or two identities",
        )

    game_type = await _get_game_type_or_404(db, team_id, name)
    window = await leaderboard_service.surrounding_ranks(
        db, team_id, game_type.id, len(members), normalize(*members)
    )
    return [RankedEntryRead.model_validate(r) for r in window]
