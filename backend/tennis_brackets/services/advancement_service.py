"""
Advancement: when a match is scored, place its winner into the next-round match.

resolve_advancement() is pure; apply_advancement() and resolve_all_advancements()
write through the Store and must run inside the caller's transaction.
Only the slot chosen by match_index parity is ever written; the sibling slot
belongs to the other feeder match.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from sqlalchemy import or_
from sqlmodel import func, select

from tennis_brackets.errors import InvalidBracketPosition, InvalidScore
from tennis_brackets.models.match import Match
from tennis_brackets.models.tournament import Tournament
from tennis_brackets.services.bracket_generator import matches_in_round, total_rounds
from tennis_brackets.store import Store


class Slot(str, Enum):
    TEAM1 = "team1"
    TEAM2 = "team2"

    @property
    def field(self) -> str:
        return f"{self.value}_id"


@dataclass(frozen=True)
class Advancement:
    next_round: int
    next_match_index: int
    slot: Slot
    winner_id: int


def resolve_advancement(
    round_number: int, match_index: int, winner_id: Optional[int], rounds: int
) -> Optional[Advancement]:
    """
    Compute where the winner of (round_number, match_index) goes.

    Returns None when the match is the final. Even match indices feed team1 of
    match_index // 2 in the next round, odd indices feed team2.
    """
    if winner_id is None:
        raise InvalidBracketPosition("Cannot advance a match without a winner")
    if rounds < 1 or round_number < 1 or round_number > rounds:
        raise InvalidBracketPosition(f"round {round_number} is outside 1..{rounds}")
    if match_index < 0 or match_index >= matches_in_round(round_number, rounds):
        raise InvalidBracketPosition(f"match_index {match_index} does not exist in round {round_number}")

    next_round = round_number + 1
    if next_round > rounds:
        return None
    return Advancement(
        next_round=next_round,
        next_match_index=match_index // 2,
        slot=Slot.TEAM1 if match_index % 2 == 0 else Slot.TEAM2,
        winner_id=winner_id,
    )


def apply_advancement(store: Store, tournament: Tournament, match: Match) -> Optional[Match]:
    """
    Write the winner of a scored match into its next-round slot.

    Returns the next-round match if its slot changed, None if the slot already
    held the winner or the match is the final. Idempotent. A slot whose match
    has already been played is never rewritten with a different team
    (InvalidScore).
    """
    if match.winner_id is None:
        return None
    advancement = resolve_advancement(
        match.round_number, match.match_index, match.winner_id, total_rounds(tournament.team_count)
    )
    if advancement is None:
        return None

    next_match = store.find_match(tournament.id, advancement.next_round, advancement.next_match_index)
    if next_match is None:
        raise InvalidBracketPosition(
            f"Bracket is missing round {advancement.next_round} match {advancement.next_match_index}"
        )

    current = getattr(next_match, advancement.slot.field)
    if current == advancement.winner_id:
        return None
    if next_match.is_scored:
        raise InvalidScore("Cannot change the winner of a match whose next match has already been played")

    setattr(next_match, advancement.slot.field, advancement.winner_id)
    store.save(next_match)
    return next_match


def _count_open_slots(store: Store, tournament_id: int) -> int:
    return store.scalar(
        select(func.count(Match.id)).where(
            Match.tournament_id == tournament_id,
            or_(Match.team1_id.is_(None), Match.team2_id.is_(None)),
        )
    )


@dataclass
class RepairReport:
    """Outcome of resolve_all_advancements."""
    matches_processed: int = 0  # scored matches replayed
    slots_filled: int = 0  # next-round slots that changed
    open_slots_before: int = 0  # matches with a TBD slot before the replay
    open_slots_after: int = 0
    advanced: List[Match] = field(default_factory=list)  # changed matches, each listed once


def resolve_all_advancements(store: Store, tournament: Tournament) -> RepairReport:
    """
    Replay advancement for every scored match of a tournament.

    Useful to repair a bracket after bulk edits. Processes matches in
    (round_number, match_index) order so earlier rounds settle first.
    """
    report = RepairReport(open_slots_before=_count_open_slots(store, tournament.id))

    scored = store.all(
        select(Match)
        .where(Match.tournament_id == tournament.id, Match.winner_id.is_not(None))
        .order_by(Match.round_number, Match.match_index)
    )

    for match in scored:
        next_match = apply_advancement(store, tournament, match)
        if next_match is None:
            continue
        report.slots_filled += 1
        if all(m.id != next_match.id for m in report.advanced):
            report.advanced.append(next_match)

    report.matches_processed = len(scored)
    report.open_slots_after = _count_open_slots(store, tournament.id)
    return report
