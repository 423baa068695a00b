"""Draft placements and achievement checks for the round being played.

Every call is its own committed write, so an interrupted session loses at most
the last edit.
"""

import logging

from pod_league.repos.protocols import LeagueStore
from pod_league.services._support import unit_of_work

logger = logging.getLogger(__name__)


class RoundLedgerService:
    def __init__(self, store: LeagueStore) -> None:
        self._store = store

    def set_placement(self, tournament_id: str, player_id: str, place: int) -> bool:
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None or player_id not in tournament.present_player_ids:
                return False
            tournament.round_placements[player_id] = place
            self._store.tournaments.upsert(tournament)
            logger.debug("Placement %s -> %d (tournament %s)", player_id, place, tournament_id)
            return True

    def set_achievement_check(self, tournament_id: str, player_id: str, achievement_id: str, checked: bool) -> bool:
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None:
                return False
            key = (player_id, achievement_id)
            if checked:
                tournament.round_achievement_checks.add(key)
            else:
                tournament.round_achievement_checks.discard(key)
            self._store.tournaments.upsert(tournament)
            logger.debug("Achievement %s for %s checked=%s", achievement_id, player_id, checked)
            return True

    def clear_round_data(self, tournament_id: str) -> bool:
        with unit_of_work(self._store):
            tournament = self._store.tournaments.get_by_id(tournament_id)
            if tournament is None:
                return False
            tournament.clear_round_data()
            self._store.tournaments.upsert(tournament)
            return True
