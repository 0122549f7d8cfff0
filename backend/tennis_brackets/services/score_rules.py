"""
Score validation and winner selection shared by tournaments and qualifiers.
"""
from typing import Optional

from tennis_brackets.errors import InvalidScore

# Largest value a 32-bit INTEGER column holds on every supported database
MAX_SCORE = 2_147_483_647


def decide_winner(
    team1_id: Optional[int],
    team2_id: Optional[int],
    score1: Optional[int],
    score2: Optional[int],
) -> int:
    """Return the id of the team with the higher score.

    A completed match always has a strict winner, so ties are rejected, as are
    missing, negative or oversized scores and matches whose slots are not both
    filled.
    """
    if score1 is None or score2 is None:
        raise InvalidScore("Both score1 and score2 are required")
    if score1 < 0 or score2 < 0:
        raise InvalidScore("Scores cannot be negative")
    if score1 > MAX_SCORE or score2 > MAX_SCORE:
        raise InvalidScore(f"Scores cannot exceed {MAX_SCORE}")
    if score1 == score2:
        raise InvalidScore("Scores cannot be equal; a match needs a winner")
    if team1_id is None or team2_id is None:
        raise InvalidScore("Match cannot be scored until both teams are known")
    return team1_id if score1 > score2 else team2_id
