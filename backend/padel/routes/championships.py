from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from sqlmodel import Session, select

from padel.database import get_session
from padel.errors import FixtureValidationError, InsufficientTeams, NotFound, PersistenceFailure
from padel.models.championship import CHAMPIONSHIP_FORMATS, CHAMPIONSHIP_STATUSES, Championship
from padel.models.standing import StandingWithTeam
from padel.services.fixture_service import schedule_fixtures
from padel.services.standings_engine import calculate_standings, discard_lock

router = APIRouter()


def _check_format(v):
    if v is not None and v not in CHAMPIONSHIP_FORMATS:
        raise ValueError(f"format must be one of {', '.join(CHAMPIONSHIP_FORMATS)}")
    return v


class ChampionshipCreate(BaseModel):
    name: str
    format: str
    start_date: date
    end_date: Optional[date] = None
    num_groups: int = 1
    points_win: int = 3
    points_loss: int = 0
    points_draw: int = 0

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or len(v.strip()) < 2:
            raise ValueError("name must have at least 2 characters")
        return v.strip()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v):
        return _check_format(v)

    @field_validator("num_groups")
    @classmethod
    def validate_num_groups(cls, v):
        if v < 1:
            raise ValueError("num_groups must be >= 1")
        return v

    @field_validator("points_win", "points_loss", "points_draw")
    @classmethod
    def validate_points(cls, v):
        if v < 0:
            raise ValueError("points must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self


class ChampionshipUpdate(BaseModel):
    name: Optional[str] = None
    format: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    num_groups: Optional[int] = None
    points_win: Optional[int] = None
    points_loss: Optional[int] = None
    points_draw: Optional[int] = None
    status: Optional[str] = None

    @field_validator("format")
    @classmethod
    def validate_format(cls, v):
        return _check_format(v)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in CHAMPIONSHIP_STATUSES:
            raise ValueError(f"status must be one of {', '.join(CHAMPIONSHIP_STATUSES)}")
        return v

    @model_validator(mode="after")
    def validate_date_range(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be >= start_date")
        return self


class ChampionshipResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    format: str
    start_date: date
    end_date: Optional[date] = None
    num_groups: int
    points_win: int
    points_loss: int
    points_draw: int
    status: str
    created_at: datetime


class GenerateFixturesResponse(BaseModel):
    fixtures_count: int
    rounds: int


class StandingsResponse(BaseModel):
    standings: List[StandingWithTeam]
    updated_at: datetime


def _get_championship_or_404(session: Session, championship_id: int) -> Championship:
    championship = session.get(Championship, championship_id)
    if not championship:
        raise HTTPException(status_code=404, detail="Championship not found")
    return championship


@router.get("/championships", response_model=List[ChampionshipResponse])
def list_championships(session: Session = Depends(get_session)):
    """List championships, newest first"""
    return session.exec(select(Championship).order_by(Championship.created_at.desc())).all()


@router.post("/championships", response_model=ChampionshipResponse, status_code=201)
def create_championship(data: ChampionshipCreate, session: Session = Depends(get_session)):
    championship = Championship(**data.model_dump())
    session.add(championship)
    session.commit()
    session.refresh(championship)
    return championship


@router.get("/championships/{championship_id}", response_model=ChampionshipResponse)
def get_championship(championship_id: int, session: Session = Depends(get_session)):
    return _get_championship_or_404(session, championship_id)


@router.put("/championships/{championship_id}", response_model=ChampionshipResponse)
def update_championship(championship_id: int, data: ChampionshipUpdate, session: Session = Depends(get_session)):
    championship = _get_championship_or_404(session, championship_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(championship, field, value)

    if championship.end_date and championship.end_date < championship.start_date:
        session.rollback()
        raise HTTPException(status_code=422, detail="end_date must be >= start_date")

    session.add(championship)
    session.commit()
    session.refresh(championship)
    return championship


@router.delete("/championships/{championship_id}", status_code=204)
def delete_championship(championship_id: int, session: Session = Depends(get_session)):
    """Delete a championship with its teams, matches and standings"""
    championship = _get_championship_or_404(session, championship_id)
    session.delete(championship)
    session.commit()
    discard_lock(championship_id)
    return None


@router.post("/championships/{championship_id}/generate-fixtures", response_model=GenerateFixturesResponse)
def generate_championship_fixtures(championship_id: int, session: Session = Depends(get_session)):
    """
    Replace every match of the championship with a round-robin schedule.

    Each group plays a full round robin; existing matches and results are discarded.
    """
    try:
        fixtures = schedule_fixtures(session, championship_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Championship not found")
    except InsufficientTeams as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (FixtureValidationError, PersistenceFailure) as e:
        raise HTTPException(status_code=500, detail=f"Fixture generation failed: {e}")

    return GenerateFixturesResponse(
        fixtures_count=len(fixtures),
        rounds=max((f.round for f in fixtures), default=0),
    )


@router.get("/championships/{championship_id}/standings", response_model=StandingsResponse)
def get_standings(championship_id: int, session: Session = Depends(get_session)):
    """Recompute and return the standings table, ordered by position"""
    try:
        standings = calculate_standings(session, championship_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Championship not found")
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=f"Standings update failed: {e}")

    return StandingsResponse(standings=standings, updated_at=datetime.utcnow())
