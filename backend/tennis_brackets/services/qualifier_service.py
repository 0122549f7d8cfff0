"""
Qualifier aggregate: one round of 1:1 matches, no advancement.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlmodel import func, select

from tennis_brackets.config import Settings, get_settings
from tennis_brackets.models.qualifier import Qualifier, QualifierMatch, QualifierTeam
from tennis_brackets.models.timestamps import utc_now
from tennis_brackets.notifier import Notifier, notify
from tennis_brackets.services.bracket_generator import pair_teams, validate_team_count
from tennis_brackets.services.score_rules import decide_winner
from tennis_brackets.store import Store

logger = logging.getLogger(__name__)

QUALIFIER_CREATED = "qualifier_created"
QUALIFIER_DELETED = "qualifier_deleted"
QUALIFIER_TEAM_UPDATED = "qualifier_team_updated"
QUALIFIER_MATCH_UPDATED = "qualifier_match_updated"


@dataclass
class QualifierSummary:
    id: int
    name: str
    team_count: int
    is_active: bool
    created_at: datetime
    total_matches: int
    completed_matches: int


def qualifier_match_payload(match: QualifierMatch, qualifier: Qualifier) -> Dict[str, Any]:
    return {
        "id": match.id,
        "qualifier_id": match.qualifier_id,
        "match_index": match.match_index,
        "team1_id": match.team1_id,
        "team2_id": match.team2_id,
        "score1": match.score1,
        "score2": match.score2,
        "winner_id": match.winner_id,
        "is_active": qualifier.is_active,
    }


def create_qualifier(
    store: Store,
    name: str,
    team_count: int,
    settings: Optional[Settings] = None,
    notifier: Optional[Notifier] = None,
) -> Qualifier:
    """
    Create a qualifier pairing teams (1,2), (3,4), ... by position.

    Any team count within bounds is accepted; with an odd count the last team
    has no match.
    """
    settings = settings or get_settings()
    name = (name or "").strip()
    if not name:
        raise ValueError("name cannot be empty")
    validate_team_count(
        team_count, settings.min_team_count, settings.max_qualifier_team_count, power_of_two=False
    )

    with store.transaction():
        qualifier = Qualifier(name=name, team_count=team_count)
        store.save(qualifier)

        teams = [
            QualifierTeam(qualifier_id=qualifier.id, name=f"Team {n}", position=n)
            for n in range(1, team_count + 1)
        ]
        store.save(*teams)

        matches = [
            QualifierMatch(
                qualifier_id=qualifier.id,
                match_index=index,
                team1_id=team1.id,
                team2_id=team2.id,
            )
            for index, (team1, team2) in enumerate(pair_teams(teams))
        ]
        store.save(*matches)

    store.refresh(qualifier)
    logger.info(
        "Created qualifier %d (%s) with %d teams and %d matches",
        qualifier.id, qualifier.name, team_count, len(matches),
    )
    notify(notifier, QUALIFIER_CREATED, {
        "id": qualifier.id,
        "name": qualifier.name,
        "team_count": qualifier.team_count,
    })
    return qualifier


def get_qualifier(store: Store, qualifier_id: int) -> Qualifier:
    return store.get(Qualifier, qualifier_id)


def list_qualifiers(store: Store) -> List[QualifierSummary]:
    qualifiers = store.all(select(Qualifier).order_by(Qualifier.created_at.desc(), Qualifier.id.desc()))
    counts = {
        qualifier_id: (total, completed)
        for qualifier_id, total, completed in store.all(
            select(
                QualifierMatch.qualifier_id,
                func.count(QualifierMatch.id),
                func.count(QualifierMatch.winner_id),
            ).group_by(QualifierMatch.qualifier_id)
        )
    }
    summaries = []
    for q in qualifiers:
        total, completed = counts.get(q.id, (0, 0))
        summaries.append(
            QualifierSummary(
                id=q.id,
                name=q.name,
                team_count=q.team_count,
                is_active=q.is_active,
                created_at=q.created_at,
                total_matches=total,
                completed_matches=completed,
            )
        )
    return summaries


def record_qualifier_score(
    store: Store,
    match_id: int,
    score1: int,
    score2: int,
    notifier: Optional[Notifier] = None,
) -> QualifierMatch:
    """Score a qualifier match. Re-scoring simply replaces the previous result."""
    with store.transaction():
        match = store.get(QualifierMatch, match_id, label="Qualifier match")
        qualifier = store.get(Qualifier, match.qualifier_id, for_update=True)
        store.refresh(match)

        winner_id = decide_winner(match.team1_id, match.team2_id, score1, score2)
        match.score1 = score1
        match.score2 = score2
        match.winner_id = winner_id
        match.completed_at = utc_now()
        store.save(match)

        unscored = store.scalar(
            select(func.count(QualifierMatch.id)).where(
                QualifierMatch.qualifier_id == qualifier.id,
                QualifierMatch.winner_id.is_(None),
            )
        )
        qualifier.is_active = unscored > 0
        store.save(qualifier)

    logger.info(
        "Scored qualifier match %d %d-%d; winner %d; qualifier %d active=%s",
        match.id, score1, score2, winner_id, qualifier.id, qualifier.is_active,
    )
    notify(notifier, QUALIFIER_MATCH_UPDATED, qualifier_match_payload(match, qualifier))
    return match


def rename_qualifier_team(
    store: Store, team_id: int, name: str, notifier: Optional[Notifier] = None
) -> QualifierTeam:
    name = (name or "").strip()
    if not name:
        raise ValueError("name cannot be empty")
    with store.transaction():
        team = store.get(QualifierTeam, team_id, label="Qualifier team")
        team.name = name
        store.save(team)
    store.refresh(team)

    notify(notifier, QUALIFIER_TEAM_UPDATED, {
        "id": team.id,
        "qualifier_id": team.qualifier_id,
        "name": team.name,
        "position": team.position,
    })
    return team


def delete_qualifier(store: Store, qualifier_id: int, notifier: Optional[Notifier] = None) -> None:
    with store.transaction():
        store.delete(
            Qualifier,
            qualifier_id,
            cascade=[(QualifierMatch, QualifierMatch.qualifier_id), (QualifierTeam, QualifierTeam.qualifier_id)],
        )

    logger.info("Deleted qualifier %d", qualifier_id)
    notify(notifier, QUALIFIER_DELETED, {"id": qualifier_id})
