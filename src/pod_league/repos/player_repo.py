import builtins
import sqlite3

from pod_league.domain.player import Player


class SqlitePlayerRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, player: Player) -> None:
        self._conn.execute(
            """INSERT INTO player (id, name, placement_points, achievement_points,
                                   wins, games_played, tournaments_played)
               VALUES (?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   name=excluded.name,
                   placement_points=excluded.placement_points,
                   achievement_points=excluded.achievement_points,
                   wins=excluded.wins,
                   games_played=excluded.games_played,
                   tournaments_played=excluded.tournaments_played""",
            (
                player.id,
                player.name,
                player.placement_points,
                player.achievement_points,
                player.wins,
                player.games_played,
                player.tournaments_played,
            ),
        )

    def get_by_id(self, player_id: str) -> Player | None:
        row = self._conn.execute("SELECT * FROM player WHERE id = ?", (player_id,)).fetchone()
        return self._row_to_player(row) if row else None

    def get_by_ids(self, player_ids: builtins.list[str]) -> builtins.list[Player]:
        if not player_ids:
            return []
        placeholders = ",".join("?" * len(player_ids))
        rows = self._conn.execute(
            f"SELECT * FROM player WHERE id IN ({placeholders}) ORDER BY rowid",
            player_ids,
        ).fetchall()
        return [self._row_to_player(row) for row in rows]

    def all(self) -> builtins.list[Player]:
        rows = self._conn.execute("SELECT * FROM player ORDER BY rowid").fetchall()
        return [self._row_to_player(row) for row in rows]

    def delete(self, player_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM player WHERE id = ?", (player_id,))
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            id=row["id"],
            name=row["name"],
            placement_points=row["placement_points"],
            achievement_points=row["achievement_points"],
            wins=row["wins"],
            games_played=row["games_played"],
            tournaments_played=row["tournaments_played"],
        )
