"""
Round-robin fixture generation (circle / Berger method).

Teams are partitioned by group; inside each group every pair of teams meets
exactly once in the minimum number of rounds. Pure functions, no database
access: callers persist the result (see fixture_service).
"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from padel.errors import InsufficientTeams


@dataclass(frozen=True)
class GeneratedMatch:
    team1_id: int
    team2_id: int
    round: int
    group_number: int


def _group_of(team: Any) -> int:
    return getattr(team, "group_number", None) or 1


def group_teams(teams: Iterable[Any]) -> Dict[int, List[Any]]:
    """Partition teams by group number, keeping input order within each group.

    Groups are returned in ascending group number.
    """
    groups: Dict[int, List[Any]] = {}
    for team in teams:
        groups.setdefault(_group_of(team), []).append(team)
    return OrderedDict(sorted(groups.items()))


def round_count(group_size: int) -> int:
    """
    Return number of rounds for a group of n teams.
    Even n: n-1 rounds. Odd n: n rounds (with BYE).
    """
    if group_size < 2:
        return 0
    if group_size % 2 == 0:
        return group_size - 1
    return group_size


def expected_fixture_count(group_size: int) -> int:
    return group_size * (group_size - 1) // 2


def _round_robin_for_group(team_ids: Sequence[int], group_number: int) -> List[GeneratedMatch]:
    n = len(team_ids)
    if n < 2:
        return []

    # None marks the BYE slot for odd groups
    slots: List[Optional[int]] = list(team_ids)
    if n % 2 == 1:
        slots.append(None)
    size = len(slots)
    half = size // 2

    fixtures: List[GeneratedMatch] = []
    for round_number in range(1, size):
        for i in range(half):
            home, away = slots[i], slots[size - 1 - i]
            if home is None or away is None:
                continue
            fixtures.append(
                GeneratedMatch(team1_id=home, team2_id=away, round=round_number, group_number=group_number)
            )
        # Rotate: keep slot 0, move last to second, shift others
        slots = [slots[0]] + [slots[-1]] + slots[1:-1]

    return fixtures


def generate_fixtures(teams: Sequence[Any]) -> List[GeneratedMatch]:
    """
    Build the full round-robin schedule for every group.

    Args:
        teams: objects exposing ``id`` and ``group_number`` (Team rows work)

    Returns:
        GeneratedMatch list ordered by group, then round, then pairing

    Raises:
        InsufficientTeams: fewer than 2 teams overall. A group holding a
            single team is not an error; it simply yields no fixtures.
    """
    if len(teams) < 2:
        raise InsufficientTeams(len(teams))

    fixtures: List[GeneratedMatch] = []
    for group_number, group in group_teams(teams).items():
        fixtures.extend(_round_robin_for_group([t.id for t in group], group_number))
    return fixtures


def validate_fixtures(teams: Sequence[Any], fixtures: Sequence[GeneratedMatch]) -> bool:
    """
    Integrity check for a generated schedule. No side effects.

    False when a fixture references an unknown team, pairs a team with itself,
    crosses a group boundary, repeats an unordered pair, or when a group's
    fixture count differs from k(k-1)/2.
    """
    group_by_team = {t.id: _group_of(t) for t in teams}
    encounters = set()
    per_group: Dict[int, int] = {}

    for fixture in fixtures:
        if fixture.team1_id not in group_by_team or fixture.team2_id not in group_by_team:
            return False
        if fixture.team1_id == fixture.team2_id:
            return False
        if not (group_by_team[fixture.team1_id] == group_by_team[fixture.team2_id] == fixture.group_number):
            return False

        encounter = frozenset((fixture.team1_id, fixture.team2_id))
        if encounter in encounters:
            return False
        encounters.add(encounter)
        per_group[fixture.group_number] = per_group.get(fixture.group_number, 0) + 1

    for group_number, group in group_teams(teams).items():
        if per_group.get(group_number, 0) != expected_fixture_count(len(group)):
            return False

    return True
