"""Pod generation: split the present players into groups for a round."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from pod_league.domain.player import Player
    from pod_league.domain.tournament import WeeklyPlayerPoints

DEFAULT_POD_SIZE = 4


def order_players(
    players: Sequence[Player],
    current_round: int,
    weekly_points: Mapping[str, WeeklyPlayerPoints],
    *,
    rng: random.Random,
) -> list[Player]:
    """Round 1 is shuffled; later rounds go by weekly total, highest first.

    Players with equal weekly totals keep their relative roster order.
    """
    if current_round == 1:
        shuffled = list(players)
        rng.shuffle(shuffled)
        return shuffled

    def _weekly_total(player: Player) -> int:
        points = weekly_points.get(player.id)
        return points.total if points is not None else 0

    return sorted(players, key=_weekly_total, reverse=True)


def chunk(player_ids: Sequence[str], pod_size: int) -> list[list[str]]:
    return [list(player_ids[i : i + pod_size]) for i in range(0, len(player_ids), pod_size)]


def generate_pods(
    players: Sequence[Player],
    present_ids: Iterable[str],
    current_round: int,
    weekly_points: Mapping[str, WeeklyPlayerPoints],
    *,
    rng: random.Random | None = None,
    pod_size: int = DEFAULT_POD_SIZE,
) -> list[list[str]]:
    """Group the present players into pods of ``pod_size``.

    The last pod may be short; it is never dropped or merged.
    """
    present = set(present_ids)
    present_players = [p for p in players if p.id in present]
    if not present_players:
        return []
    ordered = order_players(present_players, current_round, weekly_points, rng=rng or random.Random())
    return chunk([p.id for p in ordered], pod_size)


def default_placements(pods: Sequence[Sequence[str]], pod_size: int = DEFAULT_POD_SIZE) -> dict[str, int]:
    """Seed placements from each player's position inside their pod."""
    placements: dict[str, int] = {}
    for pod in pods:
        for index, player_id in enumerate(pod):
            placements[player_id] = min(index + 1, pod_size)
    return placements
