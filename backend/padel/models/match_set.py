from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from padel.models.match import Match


class MatchSet(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("match_id", "set_number", name="uq_match_set_number"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    set_number: int  # 1-based
    team1_games: int
    team2_games: int
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    match: "Match" = Relationship(back_populates="sets")
