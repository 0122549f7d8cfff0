from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

from tennis_brackets.models.timestamps import timestamp_column, utc_now

if TYPE_CHECKING:
    from tennis_brackets.models.match import Match
    from tennis_brackets.models.team import Team


class Tournament(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    team_count: int  # power of two; fixes the bracket size for the life of the tournament
    is_active: bool = Field(default=True)  # False once every match has a winner
    created_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())

    # Relationships
    teams: List["Team"] = Relationship(
        back_populates="tournament",
        sa_relationship_kwargs={"order_by": "Team.position"},
    )
    matches: List["Match"] = Relationship(back_populates="tournament")
