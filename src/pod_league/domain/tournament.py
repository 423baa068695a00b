from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

from pod_league.domain.achievement import AchievementCheck
from pod_league.domain.player import PlayerDelta


class TournamentStatus(StrEnum):
    ONGOING = "ongoing"
    COMPLETED = "completed"


@dataclass(frozen=True)
class WeeklyPlayerPoints:
    placement_points: int = 0
    achievement_points: int = 0

    @property
    def total(self) -> int:
        return self.placement_points + self.achievement_points

    def plus(self, other: WeeklyPlayerPoints) -> WeeklyPlayerPoints:
        return WeeklyPlayerPoints(
            placement_points=self.placement_points + other.placement_points,
            achievement_points=self.achievement_points + other.achievement_points,
        )

    def minus(self, other: WeeklyPlayerPoints) -> WeeklyPlayerPoints:
        return WeeklyPlayerPoints(
            placement_points=self.placement_points - other.placement_points,
            achievement_points=self.achievement_points - other.achievement_points,
        )


@dataclass(frozen=True)
class PodSnapshot:
    """Everything a finalized round changed, so it can be reversed exactly."""

    player_ids: tuple[str, ...]
    placements: dict[str, int]
    achievement_checks: tuple[AchievementCheck, ...]
    player_deltas: dict[str, PlayerDelta]
    weekly_deltas: dict[str, WeeklyPlayerPoints]
    game_result_ids: tuple[str, ...] = ()
    week: int = 1
    round: int = 1


AchievementCheckKey: TypeAlias = tuple[str, str]


@dataclass
class Tournament:
    """Working record of a tournament, including the current round's ledger.

    ``round_placements`` and ``round_achievement_checks`` hold the draft of the
    round being played; ``pod_history_snapshots`` holds one entry per round
    finalized during the current week.
    """

    id: str
    name: str
    total_weeks: int
    random_achievements_per_week: int
    start_date: str
    current_week: int = 1
    current_round: int = 1
    status: TournamentStatus = TournamentStatus.ONGOING
    achievements_on_this_week: bool = True
    end_date: str | None = None
    present_player_ids: list[str] = field(default_factory=list)
    active_achievement_ids: list[str] = field(default_factory=list)
    weekly_points_by_player: dict[str, WeeklyPlayerPoints] = field(default_factory=dict)
    round_placements: dict[str, int] = field(default_factory=dict)
    round_achievement_checks: set[AchievementCheckKey] = field(default_factory=set)
    pod_history_snapshots: list[PodSnapshot] = field(default_factory=list)
    current_pods: list[list[str]] = field(default_factory=list)

    @property
    def is_final_week(self) -> bool:
        return self.current_week >= self.total_weeks

    @property
    def is_completed(self) -> bool:
        return self.status is TournamentStatus.COMPLETED

    def checks_for_player(self, player_id: str) -> list[str]:
        return sorted(a_id for p_id, a_id in self.round_achievement_checks if p_id == player_id)

    def clear_round_data(self) -> None:
        self.round_placements = {}
        self.round_achievement_checks = set()
