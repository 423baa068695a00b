from __future__ import annotations

import builtins
import json
import sqlite3
from typing import Any

from pod_league.domain.achievement import AchievementCheck
from pod_league.domain.player import PlayerDelta
from pod_league.domain.tournament import PodSnapshot, Tournament, TournamentStatus, WeeklyPlayerPoints


def _weekly_to_json(points: WeeklyPlayerPoints) -> dict[str, int]:
    return {"placement_points": points.placement_points, "achievement_points": points.achievement_points}


def _weekly_from_json(raw: dict[str, Any]) -> WeeklyPlayerPoints:
    return WeeklyPlayerPoints(
        placement_points=int(raw.get("placement_points", 0)),
        achievement_points=int(raw.get("achievement_points", 0)),
    )


def _delta_to_json(delta: PlayerDelta) -> dict[str, int]:
    return {
        "placement_points": delta.placement_points,
        "achievement_points": delta.achievement_points,
        "wins": delta.wins,
        "games_played": delta.games_played,
    }


def _delta_from_json(raw: dict[str, Any]) -> PlayerDelta:
    return PlayerDelta(
        placement_points=int(raw.get("placement_points", 0)),
        achievement_points=int(raw.get("achievement_points", 0)),
        wins=int(raw.get("wins", 0)),
        games_played=int(raw.get("games_played", 0)),
    )


def snapshot_to_json(snapshot: PodSnapshot) -> dict[str, Any]:
    return {
        "player_ids": list(snapshot.player_ids),
        "placements": snapshot.placements,
        "achievement_checks": [
            {"player_id": c.player_id, "achievement_id": c.achievement_id, "points": c.points}
            for c in snapshot.achievement_checks
        ],
        "player_deltas": {pid: _delta_to_json(d) for pid, d in snapshot.player_deltas.items()},
        "weekly_deltas": {pid: _weekly_to_json(w) for pid, w in snapshot.weekly_deltas.items()},
        "game_result_ids": list(snapshot.game_result_ids),
        "week": snapshot.week,
        "round": snapshot.round,
    }


def snapshot_from_json(raw: dict[str, Any]) -> PodSnapshot:
    return PodSnapshot(
        player_ids=tuple(raw.get("player_ids", [])),
        placements={pid: int(place) for pid, place in raw.get("placements", {}).items()},
        achievement_checks=tuple(
            AchievementCheck(player_id=c["player_id"], achievement_id=c["achievement_id"], points=int(c["points"]))
            for c in raw.get("achievement_checks", [])
        ),
        player_deltas={pid: _delta_from_json(d) for pid, d in raw.get("player_deltas", {}).items()},
        weekly_deltas={pid: _weekly_from_json(w) for pid, w in raw.get("weekly_deltas", {}).items()},
        game_result_ids=tuple(raw.get("game_result_ids", [])),
        week=int(raw.get("week", 1)),
        round=int(raw.get("round", 1)),
    )


class SqliteTournamentRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, tournament: Tournament) -> None:
        self._conn.execute(
            """INSERT INTO tournament
                   (id, name, total_weeks, random_achievements_per_week, current_week,
                    current_round, status, achievements_on_this_week, start_date, end_date,
                    present_player_ids_json, active_achievement_ids_json, weekly_points_json,
                    round_placements_json, round_achievement_checks_json, pod_history_json,
                    current_pods_json)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   name=excluded.name,
                   total_weeks=excluded.total_weeks,
                   random_achievements_per_week=excluded.random_achievements_per_week,
                   current_week=excluded.current_week,
                   current_round=excluded.current_round,
                   status=excluded.status,
                   achievements_on_this_week=excluded.achievements_on_this_week,
                   start_date=excluded.start_date,
                   end_date=excluded.end_date,
                   present_player_ids_json=excluded.present_player_ids_json,
                   active_achievement_ids_json=excluded.active_achievement_ids_json,
                   weekly_points_json=excluded.weekly_points_json,
                   round_placements_json=excluded.round_placements_json,
                   round_achievement_checks_json=excluded.round_achievement_checks_json,
                   pod_history_json=excluded.pod_history_json,
                   current_pods_json=excluded.current_pods_json""",
            (
                tournament.id,
                tournament.name,
                tournament.total_weeks,
                tournament.random_achievements_per_week,
                tournament.current_week,
                tournament.current_round,
                tournament.status.value,
                int(tournament.achievements_on_this_week),
                tournament.start_date,
                tournament.end_date,
                json.dumps(tournament.present_player_ids),
                json.dumps(tournament.active_achievement_ids),
                json.dumps({pid: _weekly_to_json(w) for pid, w in tournament.weekly_points_by_player.items()}),
                json.dumps(tournament.round_placements),
                json.dumps(sorted([p_id, a_id] for p_id, a_id in tournament.round_achievement_checks)),
                json.dumps([snapshot_to_json(s) for s in tournament.pod_history_snapshots]),
                json.dumps(tournament.current_pods),
            ),
        )

    def get_by_id(self, tournament_id: str) -> Tournament | None:
        row = self._conn.execute("SELECT * FROM tournament WHERE id = ?", (tournament_id,)).fetchone()
        return self._row_to_tournament(row) if row else None

    def all(self) -> builtins.list[Tournament]:
        rows = self._conn.execute("SELECT * FROM tournament ORDER BY start_date DESC, rowid DESC").fetchall()
        return [self._row_to_tournament(row) for row in rows]

    def delete(self, tournament_id: str) -> bool:
        cursor = self._conn.execute("DELETE FROM tournament WHERE id = ?", (tournament_id,))
        return cursor.rowcount > 0

    @staticmethod
    def _row_to_tournament(row: sqlite3.Row) -> Tournament:
        return Tournament(
            id=row["id"],
            name=row["name"],
            total_weeks=row["total_weeks"],
            random_achievements_per_week=row["random_achievements_per_week"],
            current_week=row["current_week"],
            current_round=row["current_round"],
            status=TournamentStatus(row["status"]),
            achievements_on_this_week=bool(row["achievements_on_this_week"]),
            start_date=row["start_date"],
            end_date=row["end_date"],
            present_player_ids=json.loads(row["present_player_ids_json"]),
            active_achievement_ids=json.loads(row["active_achievement_ids_json"]),
            weekly_points_by_player={
                pid: _weekly_from_json(w) for pid, w in json.loads(row["weekly_points_json"]).items()
            },
            round_placements={pid: int(p) for pid, p in json.loads(row["round_placements_json"]).items()},
            round_achievement_checks={
                (p_id, a_id) for p_id, a_id in json.loads(row["round_achievement_checks_json"])
            },
            pod_history_snapshots=[snapshot_from_json(s) for s in json.loads(row["pod_history_json"])],
            current_pods=json.loads(row["current_pods_json"]),
        )
