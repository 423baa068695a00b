"""Commit, undo and edit finalized rounds.

Finalizing a round turns the round ledger into cumulative player stats,
weekly points and GameResult history, and records a PodSnapshot holding the
exact deltas that were applied. Undo and edit subtract those recorded deltas
rather than recomputing anything from cumulative state, so reversal always
lands on the pre-finalize values.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime

from pod_league.domain.achievement import Achievement, AchievementCheck
from pod_league.domain.game_result import GameResult
from pod_league.domain.scoring import RoundDelta, round_delta
from pod_league.domain.tournament import AchievementCheckKey, PodSnapshot, Tournament, WeeklyPlayerPoints
from pod_league.repos.protocols import LeagueStore
from pod_league.services._support import new_id, unit_of_work, utc_now

logger = logging.getLogger(__name__)


class RoundFinalizer:
    def __init__(
        self,
        store: LeagueStore,
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._store = store
        self._clock = clock
        self._new_id = id_factory

    def finalize_round(self, tournament_id: str) -> PodSnapshot | None:
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None:
                return None
            snapshot = self.commit_ledger(tournament)
            self._store.tournaments.upsert(tournament)
            return snapshot

    def commit_ledger(self, tournament: Tournament) -> PodSnapshot | None:
        """Apply ``tournament``'s round ledger without committing the store.

        Mutates ``tournament`` in place; the caller persists it and commits.
        An empty ledger changes nothing.
        """
        placements = dict(tournament.round_placements)
        if not placements:
            return None

        deltas, checks = self._score(tournament, placements, tournament.round_achievement_checks)
        self._apply(tournament, deltas)
        week, round_ = tournament.current_week, tournament.current_round
        result_ids = self._write_results(tournament.id, week, round_, placements, deltas)
        snapshot = _build_snapshot(placements, deltas, checks, result_ids, week=week, round_=round_)
        tournament.pod_history_snapshots.append(snapshot)
        tournament.clear_round_data()
        logger.info(
            "Finalized week %d round %d of %s (%d players)",
            tournament.current_week,
            tournament.current_round,
            tournament.id,
            len(placements),
        )
        return snapshot

    def undo_last_pod(self, tournament_id: str) -> PodSnapshot | None:
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None or not tournament.pod_history_snapshots:
                return None
            snapshot = tournament.pod_history_snapshots.pop()
            self._reverse(tournament, snapshot)
            deleted = self._store.game_results.delete_by_ids(list(snapshot.game_result_ids))
            self._store.tournaments.upsert(tournament)
            logger.info("Undid last round of %s (%d results removed)", tournament.id, deleted)
            return snapshot

    def apply_edited_round(
        self,
        tournament_id: str,
        placements: Mapping[str, int],
        achievement_checks: Iterable[AchievementCheckKey],
    ) -> PodSnapshot | None:
        """Replace the last finalized round with corrected placements and checks."""
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None or not tournament.pod_history_snapshots:
                return None
            old = tournament.pod_history_snapshots.pop()
            self._reverse(tournament, old)

            new_placements = dict(placements)
            deltas, checks = self._score(tournament, new_placements, set(achievement_checks))
            self._apply(tournament, deltas)

            self._store.game_results.delete_by_ids(list(old.game_result_ids))
            # replacements keep the coordinates of the round they replace
            result_ids = self._write_results(tournament.id, old.week, old.round, new_placements, deltas)

            snapshot = _build_snapshot(new_placements, deltas, checks, result_ids, week=old.week, round_=old.round)
            tournament.pod_history_snapshots.append(snapshot)
            self._store.tournaments.upsert(tournament)
            logger.info("Edited week %d round %d of %s", old.week, old.round, tournament.id)
            return snapshot

    def last_round(self, tournament_id: str) -> PodSnapshot | None:
        tournament = self._store.tournaments.get_by_id(tournament_id)
        if tournament is None or not tournament.pod_history_snapshots:
            return None
        return tournament.pod_history_snapshots[-1]

    def _score(
        self,
        tournament: Tournament,
        placements: Mapping[str, int],
        checks: Iterable[AchievementCheckKey],
    ) -> tuple[dict[str, RoundDelta], list[AchievementCheck]]:
        lookup: dict[str, Achievement] = {a.id: a for a in self._store.achievements.all()}
        checked_by_player: dict[str, list[str]] = {}
        if tournament.achievements_on_this_week:
            for player_id, achievement_id in sorted(checks):
                checked_by_player.setdefault(player_id, []).append(achievement_id)

        deltas: dict[str, RoundDelta] = {}
        records: list[AchievementCheck] = []
        for player_id, place in placements.items():
            delta = round_delta(place, checked_by_player.get(player_id, []), lookup)
            deltas[player_id] = delta
            records.extend(
                AchievementCheck(player_id=player_id, achievement_id=a_id, points=lookup[a_id].points)
                for a_id in delta.achievement_ids
            )
        return deltas, records

    def _apply(self, tournament: Tournament, deltas: Mapping[str, RoundDelta]) -> None:
        for player in self._store.players.get_by_ids(list(deltas)):
            self._store.players.upsert(player.apply(deltas[player.id].player_delta()))
        weekly = tournament.weekly_points_by_player
        for player_id, delta in deltas.items():
            weekly[player_id] = weekly.get(player_id, WeeklyPlayerPoints()).plus(delta.weekly_delta())

    def _reverse(self, tournament: Tournament, snapshot: PodSnapshot) -> None:
        for player in self._store.players.get_by_ids(list(snapshot.player_deltas)):
            self._store.players.upsert(player.revert(snapshot.player_deltas[player.id]))
        weekly = tournament.weekly_points_by_player
        for player_id, delta in snapshot.weekly_deltas.items():
            weekly[player_id] = weekly.get(player_id, WeeklyPlayerPoints()).minus(delta)

    def _write_results(
        self,
        tournament_id: str,
        week: int,
        round_: int,
        placements: Mapping[str, int],
        deltas: Mapping[str, RoundDelta],
    ) -> tuple[str, ...]:
        pod_id = self._new_id()
        timestamp = self._clock().isoformat()
        result_ids: list[str] = []
        for player_id, place in placements.items():
            delta = deltas[player_id]
            result = GameResult(
                id=self._new_id(),
                tournament_id=tournament_id,
                week=week,
                round=round_,
                player_id=player_id,
                placement=place,
                placement_points=delta.placement_points,
                achievement_points=delta.achievement_points,
                achievement_ids=delta.achievement_ids,
                pod_id=pod_id,
                timestamp=timestamp,
            )
            self._store.game_results.insert(result)
            result_ids.append(result.id)
        return tuple(result_ids)


def _build_snapshot(
    placements: Mapping[str, int],
    deltas: Mapping[str, RoundDelta],
    checks: Iterable[AchievementCheck],
    result_ids: tuple[str, ...],
    *,
    week: int,
    round_: int,
) -> PodSnapshot:
    return PodSnapshot(
        player_ids=tuple(placements),
        placements=dict(placements),
        achievement_checks=tuple(checks),
        player_deltas={pid: d.player_delta() for pid, d in deltas.items()},
        weekly_deltas={pid: d.weekly_delta() for pid, d in deltas.items()},
        game_result_ids=result_ids,
        week=week,
        round=round_,
    )
