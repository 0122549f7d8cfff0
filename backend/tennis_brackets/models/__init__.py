from tennis_brackets.models.match import Match
from tennis_brackets.models.qualifier import Qualifier, QualifierMatch, QualifierTeam
from tennis_brackets.models.team import Team
from tennis_brackets.models.tournament import Tournament

__all__ = [
    "Tournament",
    "Team",
    "Match",
    "Qualifier",
    "QualifierTeam",
    "QualifierMatch",
]
