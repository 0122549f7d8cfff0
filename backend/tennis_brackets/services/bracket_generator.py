"""
Single-elimination bracket skeleton and round-1 seeding.

Pure functions only: no database access, safe to call from any thread.

Round numbering is 1-based (round 1 is played first, round total_rounds is the
final); match indices are 0-based and contiguous within a round.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from tennis_brackets.errors import InvalidTeamCount

T = TypeVar("T")


@dataclass(frozen=True, order=True)
class MatchSlot:
    round_number: int
    match_index: int


def is_power_of_two(n: int) -> bool:
    return n >= 1 and (n & (n - 1)) == 0


def validate_team_count(
    team_count: int,
    minimum: int = 2,
    maximum: Optional[int] = None,
    power_of_two: bool = True,
) -> None:
    """Raise InvalidTeamCount unless team_count is within bounds (and a power of two when required)."""
    if team_count < max(minimum, 2):
        raise InvalidTeamCount(f"team_count must be >= {max(minimum, 2)}, got {team_count}")
    if maximum is not None and team_count > maximum:
        raise InvalidTeamCount(f"team_count must be <= {maximum}, got {team_count}")
    if power_of_two and not is_power_of_two(team_count):
        raise InvalidTeamCount(f"team_count must be a power of two, got {team_count}")


def total_rounds(team_count: int) -> int:
    """Number of rounds needed to reduce team_count entrants to one winner."""
    if team_count < 2:
        raise InvalidTeamCount(f"team_count must be >= 2, got {team_count}")
    return math.ceil(math.log2(team_count))


def matches_in_round(round_number: int, rounds: int) -> int:
    if round_number < 1 or round_number > rounds:
        raise ValueError(f"round_number must be in 1..{rounds}, got {round_number}")
    return 2 ** (rounds - round_number)


def generate_bracket(team_count: int) -> List[MatchSlot]:
    """
    Produce every match of the bracket, ordered by round then match index.

    For team_count = 2^k this yields k rounds with 2^(k-r) matches in round r,
    team_count - 1 matches in total. All team slots start empty.
    """
    rounds = total_rounds(team_count)
    return [
        MatchSlot(round_number=r, match_index=i)
        for r in range(1, rounds + 1)
        for i in range(matches_in_round(r, rounds))
    ]


def seed_first_round(
    entrants: Sequence[T], first_round_matches: int
) -> Dict[int, Tuple[Optional[T], Optional[T]]]:
    """
    Map round-1 match index -> (team1, team2) from entrants in position order.

    Entrant 2k goes to team1 and 2k+1 to team2 of match k. When there are fewer
    entrants than slots the trailing slots stay None (a bye / TBD).
    """
    seeded: Dict[int, Tuple[Optional[T], Optional[T]]] = {}
    for k in range(first_round_matches):
        first = entrants[2 * k] if 2 * k < len(entrants) else None
        second = entrants[2 * k + 1] if 2 * k + 1 < len(entrants) else None
        seeded[k] = (first, second)
    return seeded


def pair_teams(entrants: Sequence[T]) -> List[Tuple[T, T]]:
    """Pair (0,1), (2,3), ...; an odd trailing entrant is left out."""
    return [(entrants[i], entrants[i + 1]) for i in range(0, len(entrants) - 1, 2)]
