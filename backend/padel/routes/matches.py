"""
Match API Routes
Manual match CRUD and result submission. Submitting a result replaces the
match's sets and recomputes the championship standings.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, field_validator
from sqlmodel import Session, select

from padel.database import get_session
from padel.errors import InvalidSetResult, InvalidStatusTransition, NotFound, PersistenceFailure
from padel.models.championship import Championship
from padel.models.court import Court
from padel.models.match import MATCH_STATUSES, Match
from padel.models.match_set import MatchSet
from padel.models.team import Team
from padel.services.match_results import (
    MAX_SETS,
    MIN_SETS,
    SetScore,
    change_match_status,
    delete_match,
    submit_match_result,
)

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class MatchCreateRequest(BaseModel):
    team1_id: int
    team2_id: int
    court_id: Optional[int] = None
    round: int
    group_number: Optional[int] = None
    scheduled_date: Optional[datetime] = None

    @field_validator("round", "group_number")
    @classmethod
    def validate_positive(cls, v):
        if v is not None and v < 1:
            raise ValueError("must be >= 1")
        return v


class MatchUpdateRequest(BaseModel):
    court_id: Optional[int] = None
    scheduled_date: Optional[datetime] = None
    status: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        if v is not None and v not in MATCH_STATUSES:
            raise ValueError(f"status must be one of {', '.join(MATCH_STATUSES)}")
        return v


class SetRequest(BaseModel):
    team1_games: int
    team2_games: int

    @field_validator("team1_games", "team2_games")
    @classmethod
    def validate_games(cls, v):
        if v < 0:
            raise ValueError("games must be >= 0")
        return v


class MatchResultRequest(BaseModel):
    sets: List[SetRequest]

    @field_validator("sets")
    @classmethod
    def validate_set_count(cls, v):
        if not MIN_SETS <= len(v) <= MAX_SETS:
            raise ValueError(f"between {MIN_SETS} and {MAX_SETS} sets required")
        return v


class MatchSetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    set_number: int
    team1_games: int
    team2_games: int


class MatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    championship_id: int
    team1_id: int
    team2_id: int
    court_id: Optional[int] = None
    round: int
    group_number: int
    scheduled_date: Optional[datetime] = None
    status: str
    team1_sets: int
    team2_sets: int
    team1_games: int
    team2_games: int
    winner_id: Optional[int] = None
    created_at: datetime


class MatchDetailResponse(MatchResponse):
    team1_name: Optional[str] = None
    team2_name: Optional[str] = None
    court_name: Optional[str] = None
    sets: List[MatchSetResponse] = []


def _match_detail(session: Session, match: Match) -> MatchDetailResponse:
    court = session.get(Court, match.court_id) if match.court_id else None
    sets = session.exec(select(MatchSet).where(MatchSet.match_id == match.id).order_by(MatchSet.set_number)).all()
    return MatchDetailResponse(
        **MatchResponse.model_validate(match).model_dump(),
        team1_name=match.team1.name if match.team1 else None,
        team2_name=match.team2.name if match.team2 else None,
        court_name=court.name if court else None,
        sets=[MatchSetResponse.model_validate(s) for s in sets],
    )


def _check_court(session: Session, court_id: Optional[int]) -> None:
    if court_id is not None and not session.get(Court, court_id):
        raise HTTPException(status_code=400, detail=f"Court {court_id} does not exist")


# ============================================================================
# Match Endpoints
# ============================================================================


@router.get("/championships/{championship_id}/matches", response_model=List[MatchDetailResponse])
def list_matches(championship_id: int, session: Session = Depends(get_session)):
    """List a championship's matches ordered by round, group, id"""
    if not session.get(Championship, championship_id):
        raise HTTPException(status_code=404, detail="Championship not found")

    matches = session.exec(
        select(Match)
        .where(Match.championship_id == championship_id)
        .order_by(Match.round, Match.group_number, Match.id)
    ).all()
    return [_match_detail(session, m) for m in matches]


@router.get("/matches/{match_id}", response_model=MatchDetailResponse)
def get_match(match_id: int, session: Session = Depends(get_session)):
    match = session.get(Match, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    return _match_detail(session, match)


@router.post("/matches", response_model=MatchResponse, status_code=201)
def create_match(request: MatchCreateRequest, session: Session = Depends(get_session)):
    """
    Create a single match by hand.

    Both teams must exist, differ and belong to the same championship and
    group. The group defaults to the teams' group.
    """
    if request.team1_id == request.team2_id:
        raise HTTPException(status_code=400, detail="A team cannot play against itself")

    team1 = session.get(Team, request.team1_id)
    team2 = session.get(Team, request.team2_id)
    if not team1 or not team2:
        raise HTTPException(status_code=400, detail="One or both teams do not exist")
    if team1.championship_id != team2.championship_id:
        raise HTTPException(status_code=400, detail="Teams must belong to the same championship")
    if team1.group_number != team2.group_number:
        raise HTTPException(status_code=400, detail="Teams must belong to the same group")

    group_number = request.group_number if request.group_number is not None else team1.group_number
    if group_number != team1.group_number:
        raise HTTPException(
            status_code=400, detail=f"group_number must match the teams' group ({team1.group_number})"
        )
    championship = session.get(Championship, team1.championship_id)
    if group_number > championship.num_groups:
        raise HTTPException(
            status_code=400, detail=f"group_number must be between 1 and {championship.num_groups}"
        )
    _check_court(session, request.court_id)

    match = Match(
        championship_id=team1.championship_id,
        group_number=group_number,
        **request.model_dump(exclude={"group_number"}),
    )
    session.add(match)
    session.commit()
    session.refresh(match)
    return match


@router.put("/matches/{match_id}", response_model=MatchResponse)
def update_match(match_id: int, request: MatchUpdateRequest, session: Session = Depends(get_session)):
    """
    Update court, date or status. Results go through POST /matches/{id}/result.

    Moving a finished match back to pending or playing clears its result and
    recomputes the standings.
    """
    match = session.get(Match, match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found")
    _check_court(session, request.court_id)

    updates = request.model_dump(exclude_unset=True)
    status = updates.pop("status", None)
    if status is not None:
        try:
            match = change_match_status(session, match_id, status)
        except InvalidStatusTransition as e:
            raise HTTPException(status_code=400, detail=f"{e}; use POST /api/matches/{match_id}/result")
        except PersistenceFailure as e:
            raise HTTPException(status_code=500, detail=f"Match update failed: {e}")

    for field, value in updates.items():
        if value is not None:
            setattr(match, field, value)

    session.add(match)
    session.commit()
    session.refresh(match)
    return match


@router.delete("/matches/{match_id}", status_code=204)
def remove_match(match_id: int, session: Session = Depends(get_session)):
    """Delete a match; deleting a finished one recomputes the standings"""
    try:
        delete_match(session, match_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Match not found")
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=f"Match delete failed: {e}")
    return None


@router.post("/matches/{match_id}/result", response_model=MatchDetailResponse)
def submit_result(match_id: int, request: MatchResultRequest, session: Session = Depends(get_session)):
    """
    Submit the full set list for a match.

    Prior sets are discarded, the match is marked finished and the
    championship standings are recomputed.
    """
    sets = [SetScore(team1_games=s.team1_games, team2_games=s.team2_games) for s in request.sets]
    try:
        match = submit_match_result(session, match_id, sets)
    except NotFound:
        raise HTTPException(status_code=404, detail="Match not found")
    except InvalidSetResult as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=f"Result update failed: {e}")

    return _match_detail(session, match)
