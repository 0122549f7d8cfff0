from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from tennis_brackets.models.timestamps import timestamp_column

if TYPE_CHECKING:
    from tennis_brackets.models.team import Team
    from tennis_brackets.models.tournament import Tournament


class Match(SQLModel, table=True):
    __table_args__ = (
        SAUniqueConstraint("tournament_id", "round_number", "match_index", name="uq_match_round_index"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    tournament_id: int = Field(foreign_key="tournament.id", index=True)
    round_number: int  # 1 = first round played; the final is round total_rounds
    match_index: int  # 0-based position within its round

    # Team slots (nullable - TBD until seeded or advanced into)
    team1_id: Optional[int] = Field(default=None, foreign_key="team.id")
    team2_id: Optional[int] = Field(default=None, foreign_key="team.id")

    # Both scores and the winner are set together or not at all
    score1: Optional[int] = Field(default=None)
    score2: Optional[int] = Field(default=None)
    winner_id: Optional[int] = Field(default=None, foreign_key="team.id")
    completed_at: Optional[datetime] = Field(default=None, sa_column=timestamp_column(nullable=True))

    # Relationships
    tournament: "Tournament" = Relationship(back_populates="matches")
    team1: Optional["Team"] = Relationship(sa_relationship_kwargs={"foreign_keys": "Match.team1_id"})
    team2: Optional["Team"] = Relationship(sa_relationship_kwargs={"foreign_keys": "Match.team2_id"})
    winner: Optional["Team"] = Relationship(sa_relationship_kwargs={"foreign_keys": "Match.winner_id"})

    @property
    def is_scored(self) -> bool:
        return self.winner_id is not None
