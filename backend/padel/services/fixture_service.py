"""
Fixture scheduling: generate, verify and persist a championship's round robin.
"""
import logging
from typing import List

from sqlmodel import Session

from padel.errors import FixtureValidationError
from padel.services.championship_repository import ChampionshipRepository, SqlChampionshipRepository
from padel.services.fixture_generator import GeneratedMatch, generate_fixtures, validate_fixtures

logger = logging.getLogger(__name__)


def schedule_fixtures_with(repository: ChampionshipRepository, championship_id: int) -> List[GeneratedMatch]:
    """
    Replace the championship's matches with a freshly generated round robin.

    Raises:
        NotFound: unknown championship
        InsufficientTeams: fewer than 2 registered teams
        FixtureValidationError: the generated schedule failed the integrity check
        PersistenceFailure: the replace failed; the previous schedule is intact
    """
    repository.fetch_championship(championship_id)
    teams = repository.fetch_teams(championship_id)

    fixtures = generate_fixtures(teams)
    if not validate_fixtures(teams, fixtures):
        raise FixtureValidationError(f"Generated fixtures for championship {championship_id} failed validation")

    repository.replace_matches(championship_id, fixtures)
    logger.info("Scheduled %d fixtures for %d teams in championship %d", len(fixtures), len(teams), championship_id)
    return fixtures


def schedule_fixtures(session: Session, championship_id: int) -> List[GeneratedMatch]:
    return schedule_fixtures_with(SqlChampionshipRepository(session), championship_id)
