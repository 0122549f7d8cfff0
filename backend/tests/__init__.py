# Force SQLModel table registration at test discovery time
from tennis_brackets.models.match import Match  # noqa: F401
from tennis_brackets.models.qualifier import Qualifier, QualifierMatch, QualifierTeam  # noqa: F401
from tennis_brackets.models.team import Team  # noqa: F401
from tennis_brackets.models.tournament import Tournament  # noqa: F401
