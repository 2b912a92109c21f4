from datetime import date, datetime
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from padel.models.match import Match
    from padel.models.standing import Standing
    from padel.models.team import Team

FORMAT_LIGA = "liga"
FORMAT_TORNEO = "torneo"
FORMAT_AMERICANO = "americano"
CHAMPIONSHIP_FORMATS = (FORMAT_LIGA, FORMAT_TORNEO, FORMAT_AMERICANO)

CHAMPIONSHIP_STATUSES = ("draft", "active", "finished")


class Championship(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    format: str = Field(default=FORMAT_LIGA)  # "liga" | "torneo" | "americano"
    start_date: date
    end_date: Optional[date] = Field(default=None)
    num_groups: int = Field(default=1)
    points_win: int = Field(default=3)
    points_loss: int = Field(default=0)
    # Awarded to both sides of a finished match with no winner (split sets)
    points_draw: int = Field(default=0)
    status: str = Field(default="draft")  # "draft" | "active" | "finished"
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    teams: List["Team"] = Relationship(
        back_populates="championship", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    matches: List["Match"] = Relationship(
        back_populates="championship", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
    standings: List["Standing"] = Relationship(
        back_populates="championship", sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
