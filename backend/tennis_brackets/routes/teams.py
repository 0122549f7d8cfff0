from fastapi import APIRouter, Depends

from tennis_brackets.notifier import Notifier, get_notifier
from tennis_brackets.routes.dependencies import get_store
from tennis_brackets.routes.schemas import NameUpdate, TeamResponse
from tennis_brackets.services.tournament_service import rename_team
from tennis_brackets.store import Store

router = APIRouter()


@router.put("/teams/{team_id}", response_model=TeamResponse)
def update_team(
    team_id: int,
    payload: NameUpdate,
    store: Store = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
):
    """Rename a tournament team"""
    return rename_team(store, team_id, payload.name, notifier=notifier)
