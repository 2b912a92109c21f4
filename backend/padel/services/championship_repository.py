"""
Data access for the championship core.

StandingsEngine and the fixture service only talk to a ChampionshipRepository,
so tests can hand them an in-memory implementation. SqlChampionshipRepository
is the SQLModel-backed one used by the API.
"""
import logging
from datetime import datetime
from typing import TYPE_CHECKING, List, Protocol, Sequence

from sqlmodel import Session, select

from padel.database import transaction
from padel.errors import NotFound
from padel.models.championship import Championship
from padel.models.match import STATUS_FINISHED, STATUS_PENDING, Match
from padel.models.match_set import MatchSet
from padel.models.standing import Standing, StandingWithTeam
from padel.models.team import Team

if TYPE_CHECKING:
    from padel.services.fixture_generator import GeneratedMatch
    from padel.services.standings_engine import StandingCalculation

logger = logging.getLogger(__name__)


class ChampionshipRepository(Protocol):
    def fetch_championship(self, championship_id: int) -> Championship: ...

    def fetch_teams(self, championship_id: int) -> List[Team]: ...

    def fetch_finished_matches(self, championship_id: int) -> List[Match]: ...

    def replace_matches(self, championship_id: int, fixtures: Sequence["GeneratedMatch"]) -> List[Match]: ...

    def replace_standings(self, championship_id: int, standings: Sequence["StandingCalculation"]) -> None: ...

    def fetch_standings_with_team_info(self, championship_id: int) -> List[StandingWithTeam]: ...


class SqlChampionshipRepository:
    def __init__(self, session: Session):
        self.session = session

    def fetch_championship(self, championship_id: int) -> Championship:
        championship = self.session.get(Championship, championship_id)
        if not championship:
            raise NotFound("Championship", championship_id)
        return championship

    def fetch_teams(self, championship_id: int) -> List[Team]:
        return list(
            self.session.exec(select(Team).where(Team.championship_id == championship_id).order_by(Team.id)).all()
        )

    def fetch_finished_matches(self, championship_id: int) -> List[Match]:
        return list(
            self.session.exec(
                select(Match)
                .where(Match.championship_id == championship_id, Match.status == STATUS_FINISHED)
                .order_by(Match.round, Match.id)
            ).all()
        )

    def replace_matches(self, championship_id: int, fixtures: Sequence["GeneratedMatch"]) -> List[Match]:
        """Delete every match (and its sets) of the championship, then insert the fixtures as pending."""
        with transaction(self.session):
            existing = self.session.exec(select(Match).where(Match.championship_id == championship_id)).all()

            # Children first: sets reference matches
            for match in existing:
                for match_set in self.session.exec(select(MatchSet).where(MatchSet.match_id == match.id)).all():
                    self.session.delete(match_set)
            self.session.flush()

            for match in existing:
                self.session.delete(match)
            self.session.flush()

            created = [
                Match(
                    championship_id=championship_id,
                    team1_id=fixture.team1_id,
                    team2_id=fixture.team2_id,
                    round=fixture.round,
                    group_number=fixture.group_number,
                    status=STATUS_PENDING,
                )
                for fixture in fixtures
            ]
            self.session.add_all(created)

        logger.info(
            "Replaced %d matches with %d fixtures for championship %d", len(existing), len(created), championship_id
        )
        return created

    def replace_standings(self, championship_id: int, standings: Sequence["StandingCalculation"]) -> None:
        """Delete the championship's standings and insert the new order, position = index + 1."""
        now = datetime.utcnow()
        with transaction(self.session):
            for row in self.session.exec(select(Standing).where(Standing.championship_id == championship_id)).all():
                self.session.delete(row)
            # Flush deletes before inserts: (championship_id, team_id) is unique
            self.session.flush()

            for index, calc in enumerate(standings):
                self.session.add(
                    Standing(
                        championship_id=championship_id,
                        team_id=calc.team_id,
                        group_number=calc.group_number,
                        points=calc.points,
                        matches_played=calc.matches_played,
                        matches_won=calc.matches_won,
                        matches_lost=calc.matches_lost,
                        matches_drawn=calc.matches_drawn,
                        sets_won=calc.sets_won,
                        sets_lost=calc.sets_lost,
                        games_won=calc.games_won,
                        games_lost=calc.games_lost,
                        position=index + 1,
                        updated_at=now,
                    )
                )

    def fetch_standings_with_team_info(self, championship_id: int) -> List[StandingWithTeam]:
        rows = self.session.exec(
            select(Standing, Team)
            .join(Team, Standing.team_id == Team.id)
            .where(Standing.championship_id == championship_id)
            .order_by(Standing.position)
        ).all()
        return [
            StandingWithTeam(
                **standing.model_dump(),
                team_name=team.name,
                player1_name=team.player1_name,
                player2_name=team.player2_name,
            )
            for standing, team in rows
        ]
