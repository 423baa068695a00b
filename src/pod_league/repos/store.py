import logging
import sqlite3

from pod_league.repos.achievement_repo import SqliteAchievementRepo
from pod_league.repos.game_result_repo import SqliteGameResultRepo
from pod_league.repos.league_state_repo import SqliteLeagueStateRepo
from pod_league.repos.player_repo import SqlitePlayerRepo
from pod_league.repos.tournament_repo import SqliteTournamentRepo

logger = logging.getLogger(__name__)


class SqliteLeagueStore:
    """All league repos sharing one connection; ``commit`` ends the current operation."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._players = SqlitePlayerRepo(conn)
        self._achievements = SqliteAchievementRepo(conn)
        self._tournaments = SqliteTournamentRepo(conn)
        self._game_results = SqliteGameResultRepo(conn)
        self._league_state = SqliteLeagueStateRepo(conn)

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn

    @property
    def players(self) -> SqlitePlayerRepo:
        return self._players

    @property
    def achievements(self) -> SqliteAchievementRepo:
        return self._achievements

    @property
    def tournaments(self) -> SqliteTournamentRepo:
        return self._tournaments

    @property
    def game_results(self) -> SqliteGameResultRepo:
        return self._game_results

    @property
    def league_state(self) -> SqliteLeagueStateRepo:
        return self._league_state

    def commit(self) -> None:
        try:
            self._conn.commit()
        except sqlite3.Error:
            logger.exception("Commit failed, rolling back")
            self._conn.rollback()
            raise

    def rollback(self) -> None:
        self._conn.rollback()
