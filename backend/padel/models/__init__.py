from padel.models.championship import Championship
from padel.models.court import Court
from padel.models.match import Match
from padel.models.match_set import MatchSet
from padel.models.standing import Standing, StandingWithTeam
from padel.models.team import Team

__all__ = [
    "Championship",
    "Court",
    "Match",
    "MatchSet",
    "Standing",
    "StandingWithTeam",
    "Team",
]
