from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from padel.models.championship import Championship


class Team(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    championship_id: int = Field(foreign_key="championship.id", index=True)
    name: str
    player1_name: str
    player2_name: str
    group_number: int = Field(default=1)  # 1-based group inside the championship
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Relationships
    championship: "Championship" = Relationship(back_populates="teams")
