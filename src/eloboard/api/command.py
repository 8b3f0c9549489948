# src/eloboard/api/command.py

"""API endpoint receiving `/elo` slash commands."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eloboard.db.session import get_db
from eloboard.schemas import command as command_schema
from eloboard.services import command_service

router = APIRouter(prefix="/commands", tags=["Commands"])


@router.post("/", response_model=command_schema.CommandResult)
async def run_command(
    command_in: command_schema.CommandRequest,
    db: AsyncSession = Depends(get_db),
) -> command_schema.CommandResult:
    """
    Run an `/elo` command and return its tagged result.

    - **team_id**: The team the command was issued in.
    - **user_id**: The user who issued it (acts as the witness for game reports).
    - **text**: The command text, e.g. `<@U1> beat <@U2> at chess`.

    Always answers 200: rejections and failures are results, not errors.
    """
    return await command_service.handle_command(db, command_in)
