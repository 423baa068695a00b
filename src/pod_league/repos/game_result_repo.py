import builtins
import json
import sqlite3

from pod_league.domain.game_result import GameResult


class SqliteGameResultRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, result: GameResult) -> None:
        self._conn.execute(
            """INSERT INTO game_result
                   (id, tournament_id, week, round, player_id, placement, placement_points,
                    achievement_points, achievement_ids_json, pod_id, timestamp)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                result.id,
                result.tournament_id,
                result.week,
                result.round,
                result.player_id,
                result.placement,
                result.placement_points,
                result.achievement_points,
                json.dumps(list(result.achievement_ids)),
                result.pod_id,
                result.timestamp,
            ),
        )

    def get_by_id(self, result_id: str) -> GameResult | None:
        row = self._conn.execute("SELECT * FROM game_result WHERE id = ?", (result_id,)).fetchone()
        return self._row_to_result(row) if row else None

    def get_by_tournament(self, tournament_id: str) -> builtins.list[GameResult]:
        rows = self._conn.execute(
            "SELECT * FROM game_result WHERE tournament_id = ? ORDER BY week, round, rowid",
            (tournament_id,),
        ).fetchall()
        return [self._row_to_result(row) for row in rows]

    def get_by_player(self, player_id: str) -> builtins.list[GameResult]:
        rows = self._conn.execute(
            "SELECT * FROM game_result WHERE player_id = ? ORDER BY timestamp, rowid",
            (player_id,),
        ).fetchall()
        return [self._row_to_result(row) for row in rows]

    def all(self) -> builtins.list[GameResult]:
        rows = self._conn.execute("SELECT * FROM game_result ORDER BY rowid").fetchall()
        return [self._row_to_result(row) for row in rows]

    def delete_by_ids(self, result_ids: builtins.list[str]) -> int:
        if not result_ids:
            return 0
        placeholders = ",".join("?" * len(result_ids))
        cursor = self._conn.execute(f"DELETE FROM game_result WHERE id IN ({placeholders})", result_ids)
        return cursor.rowcount

    @staticmethod
    def _row_to_result(row: sqlite3.Row) -> GameResult:
        return GameResult(
            id=row["id"],
            tournament_id=row["tournament_id"],
            week=row["week"],
            round=row["round"],
            player_id=row["player_id"],
            placement=row["placement"],
            placement_points=row["placement_points"],
            achievement_points=row["achievement_points"],
            achievement_ids=tuple(json.loads(row["achievement_ids_json"])),
            pod_id=row["pod_id"],
            timestamp=row["timestamp"],
        )
