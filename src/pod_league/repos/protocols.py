from __future__ import annotations

import builtins
from typing import Protocol, runtime_checkable

from pod_league.domain.achievement import Achievement
from pod_league.domain.game_result import GameResult
from pod_league.domain.league_state import LeagueState
from pod_league.domain.player import Player
from pod_league.domain.tournament import Tournament


@runtime_checkable
class PlayerRepo(Protocol):
    def upsert(self, player: Player) -> None: ...

    def get_by_id(self, player_id: str) -> Player | None: ...

    def get_by_ids(self, player_ids: builtins.list[str]) -> builtins.list[Player]: ...

    def all(self) -> builtins.list[Player]: ...

    def delete(self, player_id: str) -> bool: ...


@runtime_checkable
class AchievementRepo(Protocol):
    def upsert(self, achievement: Achievement) -> None: ...

    def get_by_id(self, achievement_id: str) -> Achievement | None: ...

    def all(self) -> builtins.list[Achievement]: ...

    def delete(self, achievement_id: str) -> bool: ...


@runtime_checkable
class TournamentRepo(Protocol):
    def upsert(self, tournament: Tournament) -> None: ...

    def get_by_id(self, tournament_id: str) -> Tournament | None: ...

    def all(self) -> builtins.list[Tournament]: ...

    def delete(self, tournament_id: str) -> bool: ...


@runtime_checkable
class GameResultRepo(Protocol):
    def insert(self, result: GameResult) -> None: ...

    def get_by_id(self, result_id: str) -> GameResult | None: ...

    def get_by_tournament(self, tournament_id: str) -> builtins.list[GameResult]: ...

    def get_by_player(self, player_id: str) -> builtins.list[GameResult]: ...

    def all(self) -> builtins.list[GameResult]: ...

    def delete_by_ids(self, result_ids: builtins.list[str]) -> int: ...


@runtime_checkable
class LeagueStateRepo(Protocol):
    def get(self) -> LeagueState: ...

    def save(self, state: LeagueState) -> None: ...


class LeagueStore(Protocol):
    """Everything the engine reads and writes, committed as one unit per operation."""

    @property
    def players(self) -> PlayerRepo: ...

    @property
    def achievements(self) -> AchievementRepo: ...

    @property
    def tournaments(self) -> TournamentRepo: ...

    @property
    def game_results(self) -> GameResultRepo: ...

    @property
    def league_state(self) -> LeagueStateRepo: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
