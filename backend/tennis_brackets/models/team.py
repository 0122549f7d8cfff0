from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from tennis_brackets.models.tournament import Tournament


class Team(SQLModel, table=True):
    __table_args__ = (
        # One team per seed position within a tournament
        SAUniqueConstraint("tournament_id", "position", name="uq_tournament_team_position"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    tournament_id: int = Field(foreign_key="tournament.id", index=True)
    name: str
    position: int  # 1-based seed order, assigned at creation and never recomputed

    # Relationships
    tournament: "Tournament" = Relationship(back_populates="teams")
