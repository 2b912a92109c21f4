from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict
from sqlmodel import Session, select

from padel.database import get_session
from padel.models.court import Court
from padel.models.match import Match

router = APIRouter()


class CourtCreate(BaseModel):
    name: str
    is_active: bool = True


class CourtUpdate(BaseModel):
    name: Optional[str] = None
    is_active: Optional[bool] = None


class CourtResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_active: bool
    created_at: datetime


@router.get("/courts", response_model=List[CourtResponse])
def list_courts(active_only: bool = False, session: Session = Depends(get_session)):
    query = select(Court).order_by(Court.name)
    if active_only:
        query = query.where(Court.is_active == True)  # noqa: E712
    return session.exec(query).all()


@router.get("/courts/{court_id}", response_model=CourtResponse)
def get_court(court_id: int, session: Session = Depends(get_session)):
    court = session.get(Court, court_id)
    if not court:
        raise HTTPException(status_code=404, detail="Court not found")
    return court


@router.post("/courts", response_model=CourtResponse, status_code=201)
def create_court(data: CourtCreate, session: Session = Depends(get_session)):
    if not data.name.strip():
        raise HTTPException(status_code=422, detail="name is required")
    court = Court(name=data.name.strip(), is_active=data.is_active)
    session.add(court)
    session.commit()
    session.refresh(court)
    return court


@router.put("/courts/{court_id}", response_model=CourtResponse)
def update_court(court_id: int, data: CourtUpdate, session: Session = Depends(get_session)):
    court = session.get(Court, court_id)
    if not court:
        raise HTTPException(status_code=404, detail="Court not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(court, field, value)

    session.add(court)
    session.commit()
    session.refresh(court)
    return court


@router.delete("/courts/{court_id}", status_code=204)
def delete_court(court_id: int, session: Session = Depends(get_session)):
    """Delete a court. Refused while any match is assigned to it."""
    court = session.get(Court, court_id)
    if not court:
        raise HTTPException(status_code=404, detail="Court not found")

    if session.exec(select(Match).where(Match.court_id == court_id)).first():
        raise HTTPException(status_code=400, detail="Cannot delete a court with assigned matches")
    session.delete(court)
    session.commit()
    return None
