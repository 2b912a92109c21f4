"""
Error taxonomy for the championship core.

Services raise these; route handlers translate them to HTTP responses.
Nothing in the core retries or swallows them.
"""


class PadelError(Exception):
    """Base class for championship domain errors"""

    pass


class InsufficientTeams(PadelError):
    """Raised when fixture generation gets fewer than two teams"""

    def __init__(self, team_count: int):
        self.team_count = team_count
        super().__init__(f"At least 2 teams are required to generate fixtures (got {team_count})")


class NotFound(PadelError):
    """Raised when a referenced championship or match does not exist"""

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InvalidSetResult(PadelError):
    """Raised when a submitted result fails set validation; nothing is written"""

    pass


class FixtureValidationError(PadelError):
    """Raised when a generated schedule fails the integrity check"""

    pass


class PersistenceFailure(PadelError):
    """Raised when a transactional step fails; the transaction has been rolled back"""

    pass


class InvalidStatusTransition(PadelError):
    """Raised when a match status change would bypass result submission"""

    pass
