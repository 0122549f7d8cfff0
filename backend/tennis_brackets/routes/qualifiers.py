"""
Qualifier API Routes
Single-round 1:1 pairings used before a tournament; no advancement.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, ConfigDict, field_validator

from tennis_brackets.config import Settings, get_settings
from tennis_brackets.models.qualifier import Qualifier, QualifierMatch
from tennis_brackets.notifier import Notifier, get_notifier
from tennis_brackets.routes.dependencies import get_store
from tennis_brackets.routes.schemas import NameUpdate, ScoreUpdate, TeamResponse
from tennis_brackets.services import qualifier_service
from tennis_brackets.store import Store

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class QualifierCreate(BaseModel):
    name: str
    team_count: int

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()


class QualifierMatchResponse(BaseModel):
    id: int
    qualifier_id: int
    match_index: int
    team1: Optional[TeamResponse] = None
    team2: Optional[TeamResponse] = None
    score1: Optional[int] = None
    score2: Optional[int] = None
    winner: Optional[TeamResponse] = None
    completed_at: Optional[datetime] = None


class QualifierResponse(BaseModel):
    id: int
    name: str
    team_count: int
    is_active: bool
    created_at: datetime
    teams: List[TeamResponse]
    matches: List[QualifierMatchResponse]
    unmatched_team: Optional[TeamResponse] = None


class QualifierSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    team_count: int
    is_active: bool
    created_at: datetime
    total_matches: int
    completed_matches: int


class QualifierScoreResponse(BaseModel):
    match: QualifierMatchResponse
    is_active: bool


def _team(team) -> Optional[TeamResponse]:
    return TeamResponse.model_validate(team) if team is not None else None


def _match_response(m: QualifierMatch) -> QualifierMatchResponse:
    return QualifierMatchResponse(
        id=m.id,
        qualifier_id=m.qualifier_id,
        match_index=m.match_index,
        team1=_team(m.team1),
        team2=_team(m.team2),
        score1=m.score1,
        score2=m.score2,
        winner=_team(m.winner),
        completed_at=m.completed_at,
    )


def _qualifier_response(q: Qualifier) -> QualifierResponse:
    teams = [TeamResponse.model_validate(team) for team in q.teams]
    return QualifierResponse(
        id=q.id,
        name=q.name,
        team_count=q.team_count,
        is_active=q.is_active,
        created_at=q.created_at,
        teams=teams,
        matches=[_match_response(m) for m in sorted(q.matches, key=lambda m: m.match_index)],
        # Odd team counts leave the last team without an opponent
        unmatched_team=teams[-1] if q.team_count % 2 == 1 and teams else None,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/qualifiers", response_model=List[QualifierSummaryResponse])
def list_qualifiers(store: Store = Depends(get_store)):
    return qualifier_service.list_qualifiers(store)


@router.post("/qualifiers", response_model=QualifierResponse, status_code=201)
def create_qualifier(
    payload: QualifierCreate,
    store: Store = Depends(get_store),
    settings: Settings = Depends(get_settings),
    notifier: Notifier = Depends(get_notifier),
):
    qualifier = qualifier_service.create_qualifier(
        store, payload.name, payload.team_count, settings=settings, notifier=notifier
    )
    return _qualifier_response(qualifier)


@router.get("/qualifiers/{qualifier_id}", response_model=QualifierResponse)
def get_qualifier(qualifier_id: int, store: Store = Depends(get_store)):
    return _qualifier_response(qualifier_service.get_qualifier(store, qualifier_id))


@router.delete("/qualifiers/{qualifier_id}", status_code=204)
def delete_qualifier(
    qualifier_id: int,
    store: Store = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
):
    qualifier_service.delete_qualifier(store, qualifier_id, notifier=notifier)
    return Response(status_code=204)


@router.put("/qualifier-teams/{team_id}", response_model=TeamResponse)
def update_qualifier_team(
    team_id: int,
    payload: NameUpdate,
    store: Store = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
):
    return qualifier_service.rename_qualifier_team(store, team_id, payload.name, notifier=notifier)


@router.put("/qualifier-matches/{match_id}/score", response_model=QualifierScoreResponse)
def update_qualifier_match_score(
    match_id: int,
    payload: ScoreUpdate,
    store: Store = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
) -> QualifierScoreResponse:
    match = qualifier_service.record_qualifier_score(
        store, match_id, payload.score1, payload.score2, notifier=notifier
    )
    return QualifierScoreResponse(match=_match_response(match), is_active=match.qualifier.is_active)
