"""
Match scoring. Recording a score advances the winner into the next round and
closes the tournament once the final is played.
"""
from fastapi import APIRouter, Depends

from tennis_brackets.notifier import Notifier, get_notifier
from tennis_brackets.routes.dependencies import get_store
from tennis_brackets.routes.schemas import ScoreUpdate, ScoreUpdateResponse, match_response
from tennis_brackets.services.tournament_service import record_score
from tennis_brackets.store import Store

router = APIRouter()


@router.put("/matches/{match_id}/score", response_model=ScoreUpdateResponse)
def update_match_score(
    match_id: int,
    payload: ScoreUpdate,
    store: Store = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
) -> ScoreUpdateResponse:
    result = record_score(store, match_id, payload.score1, payload.score2, notifier=notifier)
    return ScoreUpdateResponse(
        match=match_response(result.match),
        is_active=result.tournament.is_active,
        advanced_count=result.advanced_count,
    )
