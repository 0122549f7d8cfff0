"""
Tournament aggregate: creation, scoring, renaming and deletion.

Every write runs in one Store transaction and publishes its domain event only
after the commit succeeded.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import func, select

from tennis_brackets.config import Settings, get_settings
from tennis_brackets.models.match import Match
from tennis_brackets.models.team import Team
from tennis_brackets.models.timestamps import utc_now
from tennis_brackets.models.tournament import Tournament
from tennis_brackets.notifier import Notifier, notify
from tennis_brackets.services.advancement_service import RepairReport, apply_advancement, resolve_all_advancements
from tennis_brackets.services.bracket_generator import generate_bracket, seed_first_round, validate_team_count
from tennis_brackets.services.score_rules import decide_winner
from tennis_brackets.store import Store

logger = logging.getLogger(__name__)

TOURNAMENT_CREATED = "tournament_created"
TOURNAMENT_DELETED = "tournament_deleted"
TEAM_UPDATED = "team_updated"
MATCH_UPDATED = "match_updated"


@dataclass
class TournamentSummary:
    id: int
    name: str
    team_count: int
    is_active: bool
    created_at: datetime
    total_matches: int
    completed_matches: int


@dataclass
class ScoreResult:
    match: Match
    tournament: Tournament
    advanced_count: int


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValueError("name cannot be empty")
    return name


def match_payload(match: Match, tournament: Tournament) -> Dict[str, Any]:
    return {
        "id": match.id,
        "tournament_id": match.tournament_id,
        "round_number": match.round_number,
        "match_index": match.match_index,
        "team1_id": match.team1_id,
        "team2_id": match.team2_id,
        "score1": match.score1,
        "score2": match.score2,
        "winner_id": match.winner_id,
        "is_active": tournament.is_active,
    }


def sorted_matches(tournament: Tournament) -> List[Match]:
    return sorted(tournament.matches, key=lambda m: (m.round_number, m.match_index))


def create_tournament(
    store: Store,
    name: str,
    team_count: int,
    settings: Optional[Settings] = None,
    notifier: Optional[Notifier] = None,
) -> Tournament:
    """
    Create a tournament with default-named teams and the full bracket.

    Teams are "Team 1".."Team N" at positions 1..N; round 1 is seeded in
    position order. Nothing is written if team_count is invalid.
    """
    settings = settings or get_settings()
    name = _clean_name(name)
    validate_team_count(team_count, settings.min_team_count, settings.max_team_count)

    with store.transaction():
        tournament = Tournament(name=name, team_count=team_count)
        store.save(tournament)

        teams = [
            Team(tournament_id=tournament.id, name=f"Team {n}", position=n)
            for n in range(1, team_count + 1)
        ]
        store.save(*teams)

        seeded = seed_first_round([team.id for team in teams], team_count // 2)
        matches = []
        for slot in generate_bracket(team_count):
            team1_id, team2_id = seeded[slot.match_index] if slot.round_number == 1 else (None, None)
            matches.append(
                Match(
                    tournament_id=tournament.id,
                    round_number=slot.round_number,
                    match_index=slot.match_index,
                    team1_id=team1_id,
                    team2_id=team2_id,
                )
            )
        store.save(*matches)

    store.refresh(tournament)
    logger.info(
        "Created tournament %d (%s) with %d teams and %d matches",
        tournament.id, tournament.name, team_count, len(matches),
    )
    notify(notifier, TOURNAMENT_CREATED, {
        "id": tournament.id,
        "name": tournament.name,
        "team_count": tournament.team_count,
    })
    return tournament


def get_tournament(store: Store, tournament_id: int) -> Tournament:
    return store.get(Tournament, tournament_id)


def list_tournaments(store: Store) -> List[TournamentSummary]:
    """All tournaments, newest first, with completed/total match counts."""
    tournaments = store.all(select(Tournament).order_by(Tournament.created_at.desc(), Tournament.id.desc()))
    counts = {
        tournament_id: (total, completed)
        for tournament_id, total, completed in store.all(
            select(Match.tournament_id, func.count(Match.id), func.count(Match.winner_id))
            .group_by(Match.tournament_id)
        )
    }
    summaries = []
    for t in tournaments:
        total, completed = counts.get(t.id, (0, 0))
        summaries.append(
            TournamentSummary(
                id=t.id,
                name=t.name,
                team_count=t.team_count,
                is_active=t.is_active,
                created_at=t.created_at,
                total_matches=total,
                completed_matches=completed,
            )
        )
    return summaries


def _all_matches_scored(store: Store, tournament_id: int) -> bool:
    unscored = store.scalar(
        select(func.count(Match.id)).where(
            Match.tournament_id == tournament_id,
            Match.winner_id.is_(None),
        )
    )
    return unscored == 0


def record_score(
    store: Store,
    match_id: int,
    score1: int,
    score2: int,
    notifier: Optional[Notifier] = None,
) -> ScoreResult:
    """
    Score a match, advance its winner and refresh the tournament's active flag.

    The tournament row is locked for the whole read-compute-write cycle so two
    sibling matches scored at once cannot overwrite each other's slot in the
    shared next match. Any failure leaves the tournament untouched.
    match_updated is published for the scored match and, when a slot changed,
    for the next-round match the winner moved into.
    """
    with store.transaction():
        match = store.get(Match, match_id)
        tournament = store.get(Tournament, match.tournament_id, for_update=True)
        store.refresh(match)

        winner_id = decide_winner(match.team1_id, match.team2_id, score1, score2)
        if match.is_scored and match.winner_id != winner_id:
            logger.info("Match %d winner changes from %s to %s", match.id, match.winner_id, winner_id)

        match.score1 = score1
        match.score2 = score2
        match.winner_id = winner_id
        match.completed_at = utc_now()
        store.save(match)

        advanced = apply_advancement(store, tournament, match)

        tournament.is_active = not _all_matches_scored(store, tournament.id)
        store.save(tournament)

    logger.info(
        "Scored match %d (round %d, index %d) %d-%d; winner %d; tournament %d active=%s",
        match.id, match.round_number, match.match_index, score1, score2,
        winner_id, tournament.id, tournament.is_active,
    )
    notify(notifier, MATCH_UPDATED, match_payload(match, tournament))
    if advanced is not None:
        notify(notifier, MATCH_UPDATED, match_payload(advanced, tournament))
    return ScoreResult(match=match, tournament=tournament, advanced_count=0 if advanced is None else 1)


def repair_advancements(
    store: Store, tournament_id: int, notifier: Optional[Notifier] = None
) -> RepairReport:
    """Replay every recorded result into the bracket and announce the matches that changed."""
    with store.transaction():
        tournament = store.get(Tournament, tournament_id, for_update=True)
        report = resolve_all_advancements(store, tournament)

    if report.slots_filled:
        logger.info("Repaired %d slot(s) in tournament %d", report.slots_filled, tournament_id)
    for next_match in report.advanced:
        notify(notifier, MATCH_UPDATED, match_payload(next_match, tournament))
    return report


def rename_team(store: Store, team_id: int, name: str, notifier: Optional[Notifier] = None) -> Team:
    """Rename only; matches reference teams by id so nothing else changes."""
    name = _clean_name(name)
    with store.transaction():
        team = store.get(Team, team_id)
        team.name = name
        store.save(team)
    store.refresh(team)

    notify(notifier, TEAM_UPDATED, {
        "id": team.id,
        "tournament_id": team.tournament_id,
        "name": team.name,
        "position": team.position,
    })
    return team


def delete_tournament(store: Store, tournament_id: int, notifier: Optional[Notifier] = None) -> None:
    with store.transaction():
        # Matches reference teams, so they go first
        store.delete(
            Tournament,
            tournament_id,
            cascade=[(Match, Match.tournament_id), (Team, Team.tournament_id)],
        )

    logger.info("Deleted tournament %d", tournament_id)
    notify(notifier, TOURNAMENT_DELETED, {"id": tournament_id})

