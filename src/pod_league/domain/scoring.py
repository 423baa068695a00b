"""Placement and achievement scoring for a single round."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pod_league.domain.player import PlayerDelta
from pod_league.domain.tournament import WeeklyPlayerPoints

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pod_league.domain.achievement import Achievement

PLACEMENT_POINTS: dict[int, int] = {1: 4, 2: 3, 3: 2, 4: 1}


@dataclass(frozen=True)
class RoundDelta:
    placement_points: int
    achievement_points: int
    is_win: bool
    games_played: int = 1
    achievement_ids: tuple[str, ...] = ()

    def player_delta(self) -> PlayerDelta:
        return PlayerDelta(
            placement_points=self.placement_points,
            achievement_points=self.achievement_points,
            wins=1 if self.is_win else 0,
            games_played=self.games_played,
        )

    def weekly_delta(self) -> WeeklyPlayerPoints:
        return WeeklyPlayerPoints(
            placement_points=self.placement_points,
            achievement_points=self.achievement_points,
        )


def placement_points(place: int) -> int:
    """Points for finishing in ``place``; places outside the table score 0."""
    return PLACEMENT_POINTS.get(place, 0)


def round_delta(
    place: int,
    checked_achievement_ids: Iterable[str],
    achievement_lookup: Mapping[str, Achievement],
) -> RoundDelta:
    """Compute what one player earns for one round.

    Checked ids with no matching achievement are skipped, so checks that
    reference a since-deleted achievement are harmless.
    """
    earned: list[str] = []
    achievement_pts = 0
    for achievement_id in checked_achievement_ids:
        achievement = achievement_lookup.get(achievement_id)
        if achievement is None:
            continue
        achievement_pts += achievement.points
        earned.append(achievement_id)
    return RoundDelta(
        placement_points=placement_points(place),
        achievement_points=achievement_pts,
        is_win=place == 1,
        achievement_ids=tuple(earned),
    )
