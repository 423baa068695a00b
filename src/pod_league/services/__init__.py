"""League services and their container."""

from pod_league.services.container import LeagueContainer
from pod_league.services.league_session import LeagueSession
from pod_league.services.roster import RosterService
from pod_league.services.round_finalizer import RoundFinalizer
from pod_league.services.round_ledger import RoundLedgerService
from pod_league.services.stats import StatsService
from pod_league.services.tournament_progression import TournamentProgression

__all__ = [
    "LeagueContainer",
    "LeagueSession",
    "RosterService",
    "RoundFinalizer",
    "RoundLedgerService",
    "StatsService",
    "TournamentProgression",
]
