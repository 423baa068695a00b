import logging
from collections.abc import Callable
from dataclasses import replace

from pod_league.domain.achievement import Achievement
from pod_league.domain.player import Player
from pod_league.repos.protocols import LeagueStore
from pod_league.services._support import new_id, unit_of_work

logger = logging.getLogger(__name__)


class RosterService:
    """Players and the achievement catalog."""

    def __init__(self, store: LeagueStore, *, id_factory: Callable[[], str] = new_id) -> None:
        self._store = store
        self._new_id = id_factory

    def players(self) -> list[Player]:
        return self._store.players.all()

    def achievements(self) -> list[Achievement]:
        return self._store.achievements.all()

    def add_player(self, name: str) -> Player | None:
        trimmed = name.strip()
        if not trimmed:
            return None
        player = Player(id=self._new_id(), name=trimmed)
        with unit_of_work(self._store):
            self._store.players.upsert(player)
        logger.info("Added player %r", player.name)
        return player

    def remove_player(self, player_id: str) -> bool:
        with unit_of_work(self._store):
            return self._store.players.delete(player_id)

    def add_achievement(self, name: str, points: int, always_on: bool = False) -> Achievement | None:
        trimmed = name.strip()
        if not trimmed:
            return None
        achievement = Achievement(id=self._new_id(), name=trimmed, points=max(points, 0), always_on=always_on)
        with unit_of_work(self._store):
            self._store.achievements.upsert(achievement)
        logger.info("Added achievement %r (%d pts)", achievement.name, achievement.points)
        return achievement

    def remove_achievement(self, achievement_id: str) -> bool:
        with unit_of_work(self._store):
            return self._store.achievements.delete(achievement_id)

    def set_achievement_always_on(self, achievement_id: str, always_on: bool) -> Achievement | None:
        with unit_of_work(self._store):
            achievement = self._store.achievements.get_by_id(achievement_id)
            if achievement is None:
                return None
            updated = replace(achievement, always_on=always_on)
            self._store.achievements.upsert(updated)
            return updated

    def find_player(self, ref: str) -> Player | None:
        """Look a player up by id, falling back to a case-insensitive name match."""
        player = self._store.players.get_by_id(ref)
        if player is not None:
            return player
        wanted = ref.strip().lower()
        return next((p for p in self._store.players.all() if p.name.lower() == wanted), None)

    def find_achievement(self, ref: str) -> Achievement | None:
        achievement = self._store.achievements.get_by_id(ref)
        if achievement is not None:
            return achievement
        wanted = ref.strip().lower()
        return next((a for a in self._store.achievements.all() if a.name.lower() == wanted), None)
