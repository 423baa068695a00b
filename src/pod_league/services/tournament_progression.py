"""Tournament lifecycle: creation, attendance, pods, and round/week advancement.

Operations take the tournament id explicitly and return the screen the caller
should move to, or ``None`` when the screen should stay where it is. They
never touch the league state record themselves.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from pod_league.domain.achievement_roll import roll_active_achievements
from pod_league.domain.league_state import Screen
from pod_league.domain.player import Player
from pod_league.domain.pods import default_placements, generate_pods
from pod_league.domain.rules import LeagueRules
from pod_league.domain.tournament import Tournament, TournamentStatus, WeeklyPlayerPoints
from pod_league.repos.protocols import LeagueStore
from pod_league.services._support import new_id, unit_of_work, utc_now
from pod_league.services.round_finalizer import RoundFinalizer

logger = logging.getLogger(__name__)


class TournamentProgression:
    def __init__(
        self,
        store: LeagueStore,
        finalizer: RoundFinalizer,
        *,
        rules: LeagueRules | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ) -> None:
        self._store = store
        self._finalizer = finalizer
        self._rules = rules or LeagueRules()
        self._rng = rng or random.Random()
        self._clock = clock
        self._new_id = id_factory

    @property
    def rules(self) -> LeagueRules:
        return self._rules

    def create_tournament(
        self,
        name: str,
        total_weeks: int,
        random_per_week: int,
        player_ids: Iterable[str],
    ) -> Tournament | None:
        trimmed = name.strip()
        if not trimmed:
            return None
        with unit_of_work(self._store):
            random_count = self._rules.clamp_random_per_week(random_per_week)
            tournament = Tournament(
                id=self._new_id(),
                name=trimmed,
                total_weeks=self._rules.clamp_weeks(total_weeks),
                random_achievements_per_week=random_count,
                start_date=self._clock().isoformat(),
            )
            tournament.active_achievement_ids = self._roll(random_count)
            self._store.tournaments.upsert(tournament)

            for player in self._store.players.get_by_ids(list(dict.fromkeys(player_ids))):
                self._store.players.upsert(_joined(player))
            logger.info(
                "Created tournament %r (%d weeks, %d random achievements/week)",
                tournament.name,
                tournament.total_weeks,
                tournament.random_achievements_per_week,
            )
            return tournament

    def confirm_attendance(
        self,
        tournament_id: str,
        present_ids: Iterable[str],
        achievements_on_this_week: bool,
    ) -> Screen | None:
        """Arm a week from scratch for the players who showed up."""
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None:
                return None
            present = list(dict.fromkeys(present_ids))
            tournament.present_player_ids = present
            tournament.achievements_on_this_week = achievements_on_this_week
            tournament.current_round = 1
            tournament.weekly_points_by_player = {pid: WeeklyPlayerPoints() for pid in present}
            tournament.pod_history_snapshots = []
            tournament.current_pods = []
            tournament.clear_round_data()
            self._store.tournaments.upsert(tournament)
            logger.info("Week %d attendance: %d present", tournament.current_week, len(present))
            return Screen.PODS

    def add_weekly_player(self, tournament_id: str | None, name: str) -> Player | None:
        """Create a player mid-tournament and mark them present for this week.

        Without a tournament the player is only added to the roster.
        """
        trimmed = name.strip()
        if not trimmed:
            return None
        with unit_of_work(self._store):
            player = Player(id=self._new_id(), name=trimmed)
            tournament = self._store.tournaments.get_by_id(tournament_id) if tournament_id is not None else None
            if tournament is None:
                self._store.players.upsert(player)
                return player
            player = _joined(player)
            self._store.players.upsert(player)
            tournament.present_player_ids.append(player.id)
            tournament.weekly_points_by_player[player.id] = WeeklyPlayerPoints()
            self._store.tournaments.upsert(tournament)
            return player

    def generate_pods(self, tournament_id: str) -> list[list[str]]:
        """Group this week's players for the current round and seed default placements."""
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None:
                return []
            pods = generate_pods(
                self._store.players.all(),
                tournament.present_player_ids,
                tournament.current_round,
                tournament.weekly_points_by_player,
                rng=self._rng,
                pod_size=self._rules.pod_size,
            )
            tournament.current_pods = pods
            tournament.clear_round_data()
            tournament.round_placements = default_placements(pods, self._rules.pod_size)
            self._store.tournaments.upsert(tournament)
            logger.debug("Generated %d pods for round %d", len(pods), tournament.current_round)
            return pods

    def next_round(self, tournament_id: str) -> Screen | None:
        """Finalize pending placements, then move to the next round or week."""
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None or tournament.is_completed:
                return None
            self._finalizer.commit_ledger(tournament)
            if tournament.current_round < self._rules.rounds_per_week:
                tournament.current_round += 1
                tournament.current_pods = []
                self._store.tournaments.upsert(tournament)
                logger.info("Advanced to week %d round %d", tournament.current_week, tournament.current_round)
                return None
            screen = self._end_week(tournament)
            self._store.tournaments.upsert(tournament)
            return screen

    def close_weekly_standings(self, tournament_id: str) -> Screen | None:
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None or tournament.is_completed:
                return None
            screen = self._end_week(tournament)
            self._store.tournaments.upsert(tournament)
            return screen

    def archive_tournament(self, tournament_id: str) -> Screen | None:
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None:
                return None
            self._complete(tournament)
            self._store.tournaments.upsert(tournament)
            return Screen.TOURNAMENTS

    def _end_week(self, tournament: Tournament) -> Screen:
        if tournament.is_final_week:
            self._complete(tournament)
            return Screen.TOURNAMENT_STANDINGS

        tournament.current_week += 1
        tournament.current_round = 1
        tournament.present_player_ids = []
        tournament.weekly_points_by_player = {}
        tournament.pod_history_snapshots = []
        tournament.current_pods = []
        tournament.active_achievement_ids = self._roll(tournament.random_achievements_per_week)
        logger.info("Tournament %s advanced to week %d", tournament.id, tournament.current_week)
        return Screen.ATTENDANCE

    def _complete(self, tournament: Tournament) -> None:
        tournament.status = TournamentStatus.COMPLETED
        tournament.end_date = self._clock().isoformat()
        logger.info("Tournament %s completed", tournament.id)

    def _roll(self, random_per_week: int) -> list[str]:
        rolled = roll_active_achievements(self._store.achievements.all(), random_per_week, rng=self._rng)
        return [a.id for a in rolled]


def _joined(player: Player) -> Player:
    return replace(player, tournaments_played=player.tournaments_played + 1)
