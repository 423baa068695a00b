"""The league's single navigation record and the active tournament cursor.

The session is the only writer of ``LeagueState``. Engine services are called
with the active tournament id and the screens they return are stored here.
Without an active tournament every tournament operation is a no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

from pod_league.domain.league_state import LEGACY_SCREENS, PRE_TOURNAMENT_SCREENS, LeagueState, Screen
from pod_league.domain.player import Player
from pod_league.domain.tournament import AchievementCheckKey, PodSnapshot, Tournament
from pod_league.repos.protocols import LeagueStore
from pod_league.services._support import unit_of_work
from pod_league.services.round_finalizer import RoundFinalizer
from pod_league.services.round_ledger import RoundLedgerService
from pod_league.services.tournament_progression import TournamentProgression

logger = logging.getLogger(__name__)


class LeagueSession:
    def __init__(
        self,
        store: LeagueStore,
        progression: TournamentProgression,
        finalizer: RoundFinalizer,
        ledger: RoundLedgerService,
    ) -> None:
        self._store = store
        self._progression = progression
        self._finalizer = finalizer
        self._ledger = ledger

    def state(self) -> LeagueState:
        return self._store.league_state.get()

    def active_tournament(self) -> Tournament | None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return None
        return self._store.tournaments.get_by_id(tournament_id)

    def set_screen(self, screen: Screen) -> None:
        self._write(replace(self.state(), screen=screen))

    # -- Tournament lifecycle ------------------------------------------------

    def start_tournament(
        self,
        name: str,
        total_weeks: int,
        random_per_week: int,
        player_ids: Iterable[str],
    ) -> Tournament | None:
        tournament = self._progression.create_tournament(name, total_weeks, random_per_week, player_ids)
        if tournament is None:
            return None
        self._write(LeagueState(screen=Screen.ATTENDANCE, active_tournament_id=tournament.id))
        return tournament

    def confirm_attendance(self, present_ids: Iterable[str], achievements_on_this_week: bool) -> None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return
        self._follow(self._progression.confirm_attendance(tournament_id, present_ids, achievements_on_this_week))

    def add_weekly_player(self, name: str) -> Player | None:
        """Create a player and, when a tournament is running, seat them this week."""
        return self._progression.add_weekly_player(self.state().active_tournament_id, name)

    def generate_pods(self) -> list[list[str]]:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return []
        return self._progression.generate_pods(tournament_id)

    def next_round(self) -> None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return
        self._follow(self._progression.next_round(tournament_id))

    def close_weekly_standings(self) -> None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return
        self._follow(self._progression.close_weekly_standings(tournament_id))

    def exit_weekly_standings(self) -> None:
        self.set_screen(Screen.PODS)

    def close_tournament_standings(self) -> None:
        self._write(LeagueState(screen=Screen.TOURNAMENTS, active_tournament_id=None))

    def archive_tournament(self) -> None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return
        if self._progression.archive_tournament(tournament_id) is not None:
            self._write(LeagueState(screen=Screen.TOURNAMENTS, active_tournament_id=None))

    # -- Round ledger and finalization --------------------------------------

    def set_placement(self, player_id: str, place: int) -> bool:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return False
        return self._ledger.set_placement(tournament_id, player_id, place)

    def set_achievement_check(self, player_id: str, achievement_id: str, checked: bool) -> bool:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return False
        return self._ledger.set_achievement_check(tournament_id, player_id, achievement_id, checked)

    def clear_round_data(self) -> bool:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return False
        return self._ledger.clear_round_data(tournament_id)

    def finalize_round(self) -> PodSnapshot | None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return None
        return self._finalizer.finalize_round(tournament_id)

    def undo_last_pod(self) -> PodSnapshot | None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return None
        return self._finalizer.undo_last_pod(tournament_id)

    def last_round(self) -> PodSnapshot | None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return None
        return self._finalizer.last_round(tournament_id)

    def apply_edited_round(
        self,
        placements: Mapping[str, int],
        achievement_checks: Iterable[AchievementCheckKey],
    ) -> PodSnapshot | None:
        tournament_id = self.state().active_tournament_id
        if tournament_id is None:
            return None
        return self._finalizer.apply_edited_round(tournament_id, placements, achievement_checks)

    # -- Startup repair -------------------------------------------------------

    def validate_and_sanitize_state(self) -> LeagueState:
        """Repair a league state left inconsistent by an earlier session."""
        state = self.state()
        fixed = state
        if state.active_tournament_id is not None:
            tournament = self._store.tournaments.get_by_id(state.active_tournament_id)
            if tournament is None or tournament.is_completed:
                fixed = LeagueState(screen=Screen.TOURNAMENTS, active_tournament_id=None)
        elif state.screen not in PRE_TOURNAMENT_SCREENS:
            fixed = replace(state, screen=Screen.TOURNAMENTS)

        if fixed.screen in LEGACY_SCREENS:
            fixed = replace(fixed, screen=LEGACY_SCREENS[fixed.screen])

        if fixed != state:
            logger.warning("Repaired league state: %s -> %s", state, fixed)
            self._write(fixed)
        return fixed

    def _follow(self, screen: Screen | None) -> None:
        if screen is not None:
            self.set_screen(screen)

    def _write(self, state: LeagueState) -> None:
        with unit_of_work(self._store):
            self._store.league_state.save(state)
