from typing import List

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, field_validator

from tennis_brackets.config import Settings, get_settings
from tennis_brackets.notifier import Notifier, get_notifier
from tennis_brackets.routes.dependencies import get_store
from tennis_brackets.routes.schemas import (
    TournamentResponse,
    TournamentSummaryResponse,
    tournament_response,
)
from tennis_brackets.services import tournament_service
from tennis_brackets.store import Store

router = APIRouter()


class TournamentCreate(BaseModel):
    name: str
    team_count: int

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()


class ResolveAdvancementsResponse(BaseModel):
    """Response for the bracket repair endpoint"""
    model_config = ConfigDict(from_attributes=True)

    matches_processed: int
    slots_filled: int
    open_slots_before: int
    open_slots_after: int


@router.get("/tournaments", response_model=List[TournamentSummaryResponse])
def list_tournaments(store: Store = Depends(get_store)):
    """List all tournaments, newest first, with match progress counts"""
    return tournament_service.list_tournaments(store)


@router.post("/tournaments", response_model=TournamentResponse, status_code=201)
def create_tournament(
    payload: TournamentCreate,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
    notifier: Notifier = Depends(get_notifier),
):
    """Create a tournament with default team names and a seeded bracket"""
    tournament = tournament_service.create_tournament(
        store, payload.name, payload.team_count, settings=settings, notifier=notifier
    )
    return tournament_response(tournament)


@router.get("/tournaments/{tournament_id}", response_model=TournamentResponse)
def get_tournament(tournament_id: int, store: Store = Depends(get_store)):
    """Get a tournament with its teams and matches (ordered by round, then index)"""
    return tournament_response(tournament_service.get_tournament(store, tournament_id))


@router.delete("/tournaments/{tournament_id}", status_code=204)
def delete_tournament(
    tournament_id: int,
    store: Store = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
):
    """Delete a tournament with its teams and matches"""
    tournament_service.delete_tournament(store, tournament_id, notifier=notifier)
    return Response(status_code=204)


@router.post(
    "/tournaments/{tournament_id}/advancement/resolve",
    response_model=ResolveAdvancementsResponse,
)
def resolve_advancements(
    tournament_id: int,
    store: Store = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Replay advancement for every scored match of the tournament.

    Idempotent; a second call reports slots_filled == 0.
    """
    report = tournament_service.repair_advancements(store, tournament_id, notifier=notifier)
    return ResolveAdvancementsResponse.model_validate(report)
