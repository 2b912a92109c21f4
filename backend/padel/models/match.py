from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from padel.models.championship import Championship
    from padel.models.match_set import MatchSet
    from padel.models.team import Team

STATUS_PENDING = "pending"
STATUS_PLAYING = "playing"
STATUS_FINISHED = "finished"
MATCH_STATUSES = (STATUS_PENDING, STATUS_PLAYING, STATUS_FINISHED)


class Match(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    championship_id: int = Field(foreign_key="championship.id", index=True)

    # Side order carries no home/away meaning
    team1_id: int = Field(foreign_key="team.id", index=True)
    team2_id: int = Field(foreign_key="team.id", index=True)

    court_id: Optional[int] = Field(default=None, foreign_key="court.id")
    round: int
    group_number: int = Field(default=1)
    scheduled_date: Optional[datetime] = Field(default=None)
    status: str = Field(default=STATUS_PENDING)  # "pending" | "playing" | "finished"

    # Result aggregates (populated when the result is submitted)
    team1_sets: int = Field(default=0)
    team2_sets: int = Field(default=0)
    team1_games: int = Field(default=0)
    team2_games: int = Field(default=0)
    winner_id: Optional[int] = Field(default=None, foreign_key="team.id")

    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    championship: "Championship" = Relationship(back_populates="matches")
    sets: List["MatchSet"] = Relationship(
        back_populates="match",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "MatchSet.set_number"},
    )
    team1: Optional["Team"] = Relationship(sa_relationship_kwargs={"foreign_keys": "Match.team1_id"})
    team2: Optional["Team"] = Relationship(sa_relationship_kwargs={"foreign_keys": "Match.team2_id"})
