"""
Response models shared by the tournament, team and match routers.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from tennis_brackets.models.match import Match
from tennis_brackets.models.tournament import Tournament
from tennis_brackets.services.bracket_generator import total_rounds
from tennis_brackets.services.tournament_service import sorted_matches


class NameUpdate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()


class ScoreUpdate(BaseModel):
    score1: int
    score2: int


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    position: int


class MatchResponse(BaseModel):
    id: int
    tournament_id: int
    round_number: int
    match_index: int
    team1: Optional[TeamResponse] = None
    team2: Optional[TeamResponse] = None
    score1: Optional[int] = None
    score2: Optional[int] = None
    winner: Optional[TeamResponse] = None
    completed_at: Optional[datetime] = None


class TournamentResponse(BaseModel):
    id: int
    name: str
    team_count: int
    total_rounds: int
    is_active: bool
    created_at: datetime
    teams: List[TeamResponse]
    matches: List[MatchResponse]


class TournamentSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    team_count: int
    is_active: bool
    created_at: datetime
    total_matches: int
    completed_matches: int


class ScoreUpdateResponse(BaseModel):
    match: MatchResponse
    is_active: bool
    advanced_count: int = 0


def _team(team) -> Optional[TeamResponse]:
    return TeamResponse.model_validate(team) if team is not None else None


def match_response(m: Match) -> MatchResponse:
    # Team names are joined here, at read time
    return MatchResponse(
        id=m.id,
        tournament_id=m.tournament_id,
        round_number=m.round_number,
        match_index=m.match_index,
        team1=_team(m.team1),
        team2=_team(m.team2),
        score1=m.score1,
        score2=m.score2,
        winner=_team(m.winner),
        completed_at=m.completed_at,
    )


def tournament_response(t: Tournament) -> TournamentResponse:
    return TournamentResponse(
        id=t.id,
        name=t.name,
        team_count=t.team_count,
        total_rounds=total_rounds(t.team_count),
        is_active=t.is_active,
        created_at=t.created_at,
        teams=[TeamResponse.model_validate(team) for team in t.teams],
        matches=[match_response(m) for m in sorted_matches(t)],
    )
