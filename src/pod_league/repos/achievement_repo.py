import builtins
import sqlite3

from pod_league.domain.achievement import Achievement


class SqliteAchievementRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, achievement: Achievement) -> None:
        self._conn.execute(
            """INSERT INTO achievement (id, name, points, always_on)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   name=excluded.name,
                   points=excluded.points,
                   always_on=excluded.always_on""",
            (achievement.id, achievement.name, achievement.points, int(achievement.always_on)),
        )

    def get_by_id(self, achievement_id: str) -> Achievement | None:
        row = self._conn.execute("SELECT * FROM achievement WHERE id = ?", (achievement_id,)).fetchone()
        return self._row_to_achievement(row) if row else None

    def all(self) -> builtins.list[Achievement]:
        rows = self._conn.execute("SELECT * FROM achievement ORDER BY rowid").fetchall()
        return [self._row_to_achievement(row) for row in rows]

    def delete(self, achievement_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM achievement WHERE id = ?", (achievement_id,))
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_achievement(row: sqlite3.Row) -> Achievement:
        return Achievement(
            id=row["id"],
            name=row["name"],
            points=row["points"],
            always_on=bool(row["always_on"]),
        )
