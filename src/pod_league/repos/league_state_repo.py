import sqlite3

from pod_league.domain.league_state import LeagueState, Screen


class SqliteLeagueStateRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def get(self) -> LeagueState:
        row = self._conn.execute("SELECT * FROM league_state WHERE id = 1").fetchone()
        if row is None:
            return LeagueState()
        return LeagueState(
            screen=Screen(row["screen"]),
            active_tournament_id=row["active_tournament_id"],
        )

    def save(self, state: LeagueState) -> None:
        self._conn.execute(
            """INSERT INTO league_state (id, active_tournament_id, screen)
               VALUES (1, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   active_tournament_id=excluded.active_tournament_id,
                   screen=excluded.screen""",
            (state.active_tournament_id, state.screen.value),
        )
