"""
Match result entry.

A submitted result is the complete list of sets and fully overwrites whatever
was stored before. Sets are validated before anything is written; once the
result transaction commits, the championship's standings are recomputed.
Reopening or deleting a finished match recomputes them as well.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from sqlmodel import Session, select

from padel.database import transaction
from padel.errors import InvalidSetResult, InvalidStatusTransition, NotFound
from padel.models.match import STATUS_FINISHED, Match
from padel.models.match_set import MatchSet
from padel.services.standings_engine import calculate_standings

logger = logging.getLogger(__name__)

MIN_SETS = 1
MAX_SETS = 5
GAMES_TO_WIN_SET = 6


@dataclass(frozen=True)
class SetScore:
    team1_games: int
    team2_games: int


@dataclass
class MatchScore:
    sets: List[Tuple[int, int]]  # (team1_games, team2_games) per set
    team1_sets: int
    team2_sets: int
    team1_games: int
    team2_games: int


def validate_set(set_number: int, score: SetScore) -> None:
    if score.team1_games < 0 or score.team2_games < 0:
        raise InvalidSetResult(f"Set {set_number}: games cannot be negative")
    if score.team1_games < GAMES_TO_WIN_SET and score.team2_games < GAMES_TO_WIN_SET:
        raise InvalidSetResult(
            f"Set {set_number}: must have a winner, minimum {GAMES_TO_WIN_SET} games"
        )
    if score.team1_games == score.team2_games:
        raise InvalidSetResult(f"Set {set_number}: must have a winner, games cannot be tied")


def summarize_sets(sets: Sequence[SetScore]) -> MatchScore:
    """Validate every set and sum sets/games per side.

    Raises:
        InvalidSetResult: wrong number of sets or a set without a clear winner
    """
    if not MIN_SETS <= len(sets) <= MAX_SETS:
        raise InvalidSetResult(f"A result needs between {MIN_SETS} and {MAX_SETS} sets (got {len(sets)})")

    for set_number, score in enumerate(sets, start=1):
        validate_set(set_number, score)

    return MatchScore(
        sets=[(s.team1_games, s.team2_games) for s in sets],
        team1_sets=sum(1 for s in sets if s.team1_games > s.team2_games),
        team2_sets=sum(1 for s in sets if s.team2_games > s.team1_games),
        team1_games=sum(s.team1_games for s in sets),
        team2_games=sum(s.team2_games for s in sets),
    )


def winner_for(match: Match, score: MatchScore) -> Optional[int]:
    """Side with more sets; None when the sets are split evenly."""
    if score.team1_sets > score.team2_sets:
        return match.team1_id
    if score.team2_sets > score.team1_sets:
        return match.team2_id
    return None


def _get_match(session: Session, match_id: int) -> Match:
    match = session.get(Match, match_id)
    if not match:
        raise NotFound("Match", match_id)
    return match


def submit_match_result(session: Session, match_id: int, sets: Sequence[SetScore]) -> Match:
    """
    Store a full match result and refresh the standings.

    Previous sets of the match are deleted and replaced, the aggregates and
    winner are written and the match is marked finished, all in one
    transaction. Validation happens first, so a rejected result writes nothing.

    Raises:
        NotFound: unknown match
        InvalidSetResult: rejected set list
        PersistenceFailure: the write failed and was rolled back
    """
    match = _get_match(session, match_id)

    score = summarize_sets(sets)
    winner_id = winner_for(match, score)

    with transaction(session):
        for old in session.exec(select(MatchSet).where(MatchSet.match_id == match_id)).all():
            session.delete(old)
        session.flush()

        for set_number, (team1_games, team2_games) in enumerate(score.sets, start=1):
            session.add(
                MatchSet(match_id=match_id, set_number=set_number, team1_games=team1_games, team2_games=team2_games)
            )

        match.team1_sets = score.team1_sets
        match.team2_sets = score.team2_sets
        match.team1_games = score.team1_games
        match.team2_games = score.team2_games
        match.winner_id = winner_id
        match.status = STATUS_FINISHED
        session.add(match)

    session.refresh(match)
    logger.info(
        "Result stored for match %d: %d-%d sets, winner %s", match_id, score.team1_sets, score.team2_sets, winner_id
    )

    calculate_standings(session, match.championship_id)

    return match


def change_match_status(session: Session, match_id: int, status: str) -> Match:
    """
    Move a match to ``status`` without entering a result.

    Only submit_match_result finishes a match. Reopening a finished match
    drops its sets, aggregates and winner, then recomputes the standings.

    Raises:
        NotFound: unknown match
        InvalidStatusTransition: ``status`` is finished and the match is not
        PersistenceFailure: the write failed and was rolled back
    """
    match = _get_match(session, match_id)
    if status == match.status:
        return match
    if status == STATUS_FINISHED:
        raise InvalidStatusTransition(f"Match {match_id} can only be finished by submitting its result")

    was_finished = match.status == STATUS_FINISHED
    with transaction(session):
        if was_finished:
            for old in session.exec(select(MatchSet).where(MatchSet.match_id == match_id)).all():
                session.delete(old)
            match.team1_sets = match.team2_sets = 0
            match.team1_games = match.team2_games = 0
            match.winner_id = None
        match.status = status
        session.add(match)

    session.refresh(match)
    if was_finished:
        logger.info("Result cleared for match %d, status now %s", match_id, status)
        calculate_standings(session, match.championship_id)
    return match


def delete_match(session: Session, match_id: int) -> None:
    """Delete a match with its sets; a finished match also triggers a standings recompute."""
    match = _get_match(session, match_id)
    championship_id = match.championship_id
    was_finished = match.status == STATUS_FINISHED

    with transaction(session):
        session.delete(match)

    logger.info("Deleted match %d (%s)", match_id, "finished" if was_finished else "not played")
    if was_finished:
        calculate_standings(session, championship_id)
