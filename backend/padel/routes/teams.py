"""
Team Management API Routes
CRUD for the teams (pairs of players) registered in a championship.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, field_validator
from sqlalchemy import or_
from sqlmodel import Session, select

from padel.database import get_session
from padel.models.championship import Championship
from padel.models.match import Match
from padel.models.standing import Standing
from padel.models.team import Team

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


def _check_name(v):
    if v is not None and len(v.strip()) < 2:
        raise ValueError("must have at least 2 characters")
    return v.strip() if v is not None else v


class TeamCreateRequest(BaseModel):
    name: str
    player1_name: str
    player2_name: str
    group_number: int = 1

    @field_validator("name", "player1_name", "player2_name")
    @classmethod
    def validate_names(cls, v):
        return _check_name(v)


class TeamUpdateRequest(BaseModel):
    name: Optional[str] = None
    player1_name: Optional[str] = None
    player2_name: Optional[str] = None
    group_number: Optional[int] = None

    @field_validator("name", "player1_name", "player2_name")
    @classmethod
    def validate_names(cls, v):
        return _check_name(v)


class TeamResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    championship_id: int
    name: str
    player1_name: str
    player2_name: str
    group_number: int
    created_at: datetime


def _check_group(championship: Championship, group_number: int) -> None:
    if group_number < 1 or group_number > championship.num_groups:
        raise HTTPException(
            status_code=400,
            detail=f"group_number must be between 1 and {championship.num_groups}",
        )


# ============================================================================
# Team CRUD Endpoints
# ============================================================================


@router.get("/championships/{championship_id}/teams", response_model=List[TeamResponse])
def get_teams(championship_id: int, session: Session = Depends(get_session)):
    """Get all teams of a championship ordered by group, then registration order"""
    championship = session.get(Championship, championship_id)
    if not championship:
        raise HTTPException(status_code=404, detail="Championship not found")

    return session.exec(
        select(Team).where(Team.championship_id == championship_id).order_by(Team.group_number, Team.id)
    ).all()


@router.post("/championships/{championship_id}/teams", response_model=TeamResponse, status_code=201)
def create_team(championship_id: int, request: TeamCreateRequest, session: Session = Depends(get_session)):
    championship = session.get(Championship, championship_id)
    if not championship:
        raise HTTPException(status_code=404, detail="Championship not found")
    _check_group(championship, request.group_number)

    team = Team(championship_id=championship_id, **request.model_dump())
    session.add(team)
    session.commit()
    session.refresh(team)
    return team


@router.patch("/championships/{championship_id}/teams/{team_id}", response_model=TeamResponse)
def update_team(
    championship_id: int, team_id: int, request: TeamUpdateRequest, session: Session = Depends(get_session)
):
    team = session.get(Team, team_id)
    if not team or team.championship_id != championship_id:
        raise HTTPException(status_code=404, detail="Team not found")

    if request.group_number is not None:
        _check_group(team.championship, request.group_number)

    for field, value in request.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(team, field, value)

    session.add(team)
    session.commit()
    session.refresh(team)
    return team


@router.delete("/championships/{championship_id}/teams/{team_id}", status_code=204)
def delete_team(championship_id: int, team_id: int, session: Session = Depends(get_session)):
    """Delete a team. Refused while any match still references it."""
    team = session.get(Team, team_id)
    if not team or team.championship_id != championship_id:
        raise HTTPException(status_code=404, detail="Team not found")

    in_use = session.exec(select(Match).where(or_(Match.team1_id == team_id, Match.team2_id == team_id))).first()
    if in_use:
        raise HTTPException(status_code=409, detail="Team has matches; regenerate fixtures or delete them first")

    for standing in session.exec(select(Standing).where(Standing.team_id == team_id)).all():
        session.delete(standing)
    session.delete(team)
    session.commit()
    return None
