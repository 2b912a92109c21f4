from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from padel.models.championship import Championship


class StandingBase(SQLModel):
    championship_id: int = Field(foreign_key="championship.id", index=True)
    team_id: int = Field(foreign_key="team.id")
    group_number: int = Field(default=1)
    points: int = Field(default=0)
    matches_played: int = Field(default=0)
    matches_won: int = Field(default=0)
    matches_lost: int = Field(default=0)
    matches_drawn: int = Field(default=0)
    sets_won: int = Field(default=0)
    sets_lost: int = Field(default=0)
    games_won: int = Field(default=0)
    games_lost: int = Field(default=0)
    position: int = Field(default=0)  # 1-based, assigned on write
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class Standing(StandingBase, table=True):
    __table_args__ = (SAUniqueConstraint("championship_id", "team_id", name="uq_standing_team"),)

    id: Optional[int] = Field(default=None, primary_key=True)

    # Relationships
    championship: "Championship" = Relationship(back_populates="standings")


class StandingWithTeam(StandingBase):
    """Standing row joined with the team's display attributes."""

    id: Optional[int] = None
    team_name: str
    player1_name: str
    player2_name: str
