from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class PlayerDelta:
    placement_points: int = 0
    achievement_points: int = 0
    wins: int = 0
    games_played: int = 0


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    placement_points: int = 0
    achievement_points: int = 0
    wins: int = 0
    games_played: int = 0
    tournaments_played: int = 0

    @property
    def total_points(self) -> int:
        return self.placement_points + self.achievement_points

    def apply(self, delta: PlayerDelta) -> Player:
        return replace(
            self,
            placement_points=self.placement_points + delta.placement_points,
            achievement_points=self.achievement_points + delta.achievement_points,
            wins=self.wins + delta.wins,
            games_played=self.games_played + delta.games_played,
        )

    def revert(self, delta: PlayerDelta) -> Player:
        return replace(
            self,
            placement_points=self.placement_points - delta.placement_points,
            achievement_points=self.achievement_points - delta.achievement_points,
            wins=self.wins - delta.wins,
            games_played=self.games_played - delta.games_played,
        )
