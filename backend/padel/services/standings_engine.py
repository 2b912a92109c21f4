"""
Standings computation and tie-break resolution.

The table is always rebuilt from scratch out of the championship's finished
matches. Aggregation and ordering are pure functions; StandingsEngine wires
them to a repository that fetches inputs and persists the result.

Tie-break cascade (first discriminating criterion wins):
    1. points
    2. matches won
    3. games won (americano format only)
    4. head-to-head between the two teams
    5. game difference
    6. sets won
    7. set difference
Teams equal on everything keep their input order.
"""
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Dict, List, Optional, Sequence

from sqlmodel import Session

from padel.models.championship import FORMAT_AMERICANO, Championship
from padel.models.match import Match
from padel.models.standing import StandingWithTeam
from padel.services.championship_repository import ChampionshipRepository, SqlChampionshipRepository

logger = logging.getLogger(__name__)


@dataclass
class StandingCalculation:
    team_id: int
    group_number: int = 1
    points: int = 0
    matches_played: int = 0
    matches_won: int = 0
    matches_lost: int = 0
    matches_drawn: int = 0
    sets_won: int = 0
    sets_lost: int = 0
    games_won: int = 0
    games_lost: int = 0
    # opponent team id -> every direct encounter, in processing order
    head_to_head: Dict[int, List[Match]] = field(default_factory=dict)

    @property
    def game_difference(self) -> int:
        return self.games_won - self.games_lost

    @property
    def set_difference(self) -> int:
        return self.sets_won - self.sets_lost


def aggregate_standings(
    championship: Championship, teams: Sequence[Any], matches: Sequence[Match]
) -> List[StandingCalculation]:
    """
    Build one accumulator per team from the finished matches.

    Sets and games are credited symmetrically. A match with a winner awards
    points_win / points_loss; a match with no winner awards points_draw to
    both sides. Returns accumulators in team input order.
    """
    standings: Dict[int, StandingCalculation] = OrderedDict()
    for team in teams:
        standings[team.id] = StandingCalculation(team_id=team.id, group_number=team.group_number or 1)

    for match in matches:
        s1 = standings.get(match.team1_id)
        s2 = standings.get(match.team2_id)
        if s1 is None or s2 is None:
            logger.warning(
                "Skipping match %s: team %s or %s is not registered in championship %s",
                match.id,
                match.team1_id,
                match.team2_id,
                championship.id,
            )
            continue

        s1.matches_played += 1
        s2.matches_played += 1

        s1.sets_won += match.team1_sets
        s1.sets_lost += match.team2_sets
        s2.sets_won += match.team2_sets
        s2.sets_lost += match.team1_sets

        s1.games_won += match.team1_games
        s1.games_lost += match.team2_games
        s2.games_won += match.team2_games
        s2.games_lost += match.team1_games

        if match.winner_id == match.team1_id:
            winner, loser = s1, s2
        elif match.winner_id == match.team2_id:
            winner, loser = s2, s1
        else:
            winner = loser = None

        if winner is not None:
            winner.matches_won += 1
            winner.points += championship.points_win
            loser.matches_lost += 1
            loser.points += championship.points_loss
        else:
            s1.matches_drawn += 1
            s2.matches_drawn += 1
            s1.points += championship.points_draw
            s2.points += championship.points_draw

        s1.head_to_head.setdefault(match.team2_id, []).append(match)
        s2.head_to_head.setdefault(match.team1_id, []).append(match)

    return list(standings.values())


def head_to_head_winner(a: StandingCalculation, b: StandingCalculation) -> Optional[int]:
    """
    Team id that won more direct encounters between a and b.

    None when they never met, when every encounter was drawn, or when the
    wins are split evenly.
    """
    encounters = a.head_to_head.get(b.team_id, [])
    a_wins = sum(1 for m in encounters if m.winner_id == a.team_id)
    b_wins = sum(1 for m in encounters if m.winner_id == b.team_id)
    if a_wins > b_wins:
        return a.team_id
    if b_wins > a_wins:
        return b.team_id
    return None


def compare_standings(a: StandingCalculation, b: StandingCalculation, championship: Championship) -> int:
    """Comparator for sorted(); negative means a ranks above b, 0 means unresolved."""
    if a.points != b.points:
        return b.points - a.points

    if a.matches_won != b.matches_won:
        return b.matches_won - a.matches_won

    if championship.format == FORMAT_AMERICANO and a.games_won != b.games_won:
        return b.games_won - a.games_won

    h2h = head_to_head_winner(a, b)
    if h2h is not None:
        return -1 if h2h == a.team_id else 1

    if a.game_difference != b.game_difference:
        return b.game_difference - a.game_difference

    if a.sets_won != b.sets_won:
        return b.sets_won - a.sets_won

    if a.set_difference != b.set_difference:
        return b.set_difference - a.set_difference

    return 0


def sort_standings(standings: Sequence[StandingCalculation], championship: Championship) -> List[StandingCalculation]:
    """Order each group independently; groups are concatenated in ascending group number."""
    groups: Dict[int, List[StandingCalculation]] = {}
    for standing in standings:
        groups.setdefault(standing.group_number, []).append(standing)

    key = cmp_to_key(lambda a, b: compare_standings(a, b, championship))
    ordered: List[StandingCalculation] = []
    for group_number in sorted(groups):
        ordered.extend(sorted(groups[group_number], key=key))
    return ordered


# One lock per championship so concurrent result submissions recompute one at a time
_registry_lock = threading.Lock()
_championship_locks: Dict[int, threading.Lock] = {}


def _lock_for(championship_id: int) -> threading.Lock:
    with _registry_lock:
        lock = _championship_locks.get(championship_id)
        if lock is None:
            lock = threading.Lock()
            _championship_locks[championship_id] = lock
        return lock


def discard_lock(championship_id: int) -> None:
    """Forget a deleted championship's lock."""
    with _registry_lock:
        _championship_locks.pop(championship_id, None)


class StandingsEngine:
    """Recomputes and persists a championship's standings through a repository."""

    def __init__(self, repository: ChampionshipRepository):
        self.repository = repository

    def compute(self, championship: Championship) -> List[StandingCalculation]:
        teams = self.repository.fetch_teams(championship.id)
        matches = self.repository.fetch_finished_matches(championship.id)
        return sort_standings(aggregate_standings(championship, teams, matches), championship)

    def calculate_standings(self, championship_id: int) -> List[StandingWithTeam]:
        """
        Fetch, compute, replace and re-read the standings table.

        Raises:
            NotFound: unknown championship (raised before any aggregation)
            PersistenceFailure: the replace transaction failed and was rolled back
        """
        # Locks are only created for championships that exist
        championship = self.repository.fetch_championship(championship_id)
        with _lock_for(championship_id):
            ordered = self.compute(championship)
            self.repository.replace_standings(championship_id, ordered)
            logger.info("Recomputed standings for championship %d: %d teams", championship_id, len(ordered))
            return self.repository.fetch_standings_with_team_info(championship_id)


def calculate_standings(session: Session, championship_id: int) -> List[StandingWithTeam]:
    """Recompute standings using the SQL repository bound to ``session``."""
    return StandingsEngine(SqlChampionshipRepository(session)).calculate_standings(championship_id)
