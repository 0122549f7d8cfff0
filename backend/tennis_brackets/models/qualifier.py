"""
Qualifier tables: a single round of 1:1 matches, no advancement.
"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from tennis_brackets.models.timestamps import timestamp_column, utc_now


class Qualifier(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    team_count: int
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())

    # Relationships
    teams: List["QualifierTeam"] = Relationship(
        back_populates="qualifier",
        sa_relationship_kwargs={"order_by": "QualifierTeam.position"},
    )
    matches: List["QualifierMatch"] = Relationship(
        back_populates="qualifier",
        sa_relationship_kwargs={"order_by": "QualifierMatch.match_index"},
    )


class QualifierTeam(SQLModel, table=True):
    __table_args__ = (
        SAUniqueConstraint("qualifier_id", "position", name="uq_qualifier_team_position"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    qualifier_id: int = Field(foreign_key="qualifier.id", index=True)
    name: str
    position: int

    qualifier: Qualifier = Relationship(back_populates="teams")


class QualifierMatch(SQLModel, table=True):
    __table_args__ = (
        SAUniqueConstraint("qualifier_id", "match_index", name="uq_qualifier_match_index"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    qualifier_id: int = Field(foreign_key="qualifier.id", index=True)
    match_index: int

    team1_id: Optional[int] = Field(default=None, foreign_key="qualifierteam.id")
    team2_id: Optional[int] = Field(default=None, foreign_key="qualifierteam.id")
    score1: Optional[int] = Field(default=None)
    score2: Optional[int] = Field(default=None)
    winner_id: Optional[int] = Field(default=None, foreign_key="qualifierteam.id")
    completed_at: Optional[datetime] = Field(default=None, sa_column=timestamp_column(nullable=True))

    qualifier: Qualifier = Relationship(back_populates="matches")
    team1: Optional[QualifierTeam] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "QualifierMatch.team1_id"}
    )
    team2: Optional[QualifierTeam] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "QualifierMatch.team2_id"}
    )
    winner: Optional[QualifierTeam] = Relationship(
        sa_relationship_kwargs={"foreign_keys": "QualifierMatch.winner_id"}
    )

    @property
    def is_scored(self) -> bool:
        return self.winner_id is not None
