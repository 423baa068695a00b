from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from pod_league.domain.achievement import Achievement
    from pod_league.domain.game_result import GameResult
    from pod_league.domain.player import Player

PLACES = (1, 2, 3, 4)


@dataclass(frozen=True)
class TournamentPlayerStats:
    games_played: int
    wins: int
    total_points: int
    placement_points: int
    achievement_points: int
    placement_distribution: dict[int, int]
    average_placement: float
    win_rate: float


@dataclass(frozen=True)
class HeadToHeadRecord:
    player1_wins: int
    player2_wins: int
    ties: int

    @property
    def games_together(self) -> int:
        return self.player1_wins + self.player2_wins + self.ties


@dataclass(frozen=True)
class StandingsRow:
    rank: int
    player_id: str
    name: str
    total_points: int
    placement_points: int
    achievement_points: int
    wins: int
    games_played: int


@dataclass(frozen=True)
class AchievementLeaderboardEntry:
    achievement_id: str
    name: str
    times_earned: int


def win_rate(player: Player) -> float:
    if player.games_played <= 0:
        return 0.0
    return player.wins / player.games_played


def points_per_game(player: Player) -> float:
    if player.games_played <= 0:
        return 0.0
    return player.total_points / player.games_played


def average_placement(player_id: str, results: Iterable[GameResult]) -> float:
    placements = [r.placement for r in results if r.player_id == player_id]
    if not placements:
        return 0.0
    return sum(placements) / len(placements)


def placement_distribution(player_id: str, results: Iterable[GameResult]) -> dict[int, int]:
    distribution = dict.fromkeys(PLACES, 0)
    for result in results:
        if result.player_id == player_id:
            distribution[result.placement] = distribution.get(result.placement, 0) + 1
    return distribution


def tournament_player_stats(player_id: str, tournament_id: str, results: Iterable[GameResult]) -> TournamentPlayerStats:
    own = [r for r in results if r.player_id == player_id and r.tournament_id == tournament_id]
    games = len(own)
    wins = sum(1 for r in own if r.is_win)
    return TournamentPlayerStats(
        games_played=games,
        wins=wins,
        total_points=sum(r.total_points for r in own),
        placement_points=sum(r.placement_points for r in own),
        achievement_points=sum(r.achievement_points for r in own),
        placement_distribution=placement_distribution(player_id, own),
        average_placement=sum(r.placement for r in own) / games if games else 0.0,
        win_rate=wins / games if games else 0.0,
    )


def head_to_head(player1_id: str, player2_id: str, results: Iterable[GameResult]) -> HeadToHeadRecord:
    """Compare two players over every pod they shared; the lower placement wins."""
    by_pod: defaultdict[str, dict[str, int]] = defaultdict(dict)
    for result in results:
        if result.player_id in (player1_id, player2_id):
            by_pod[result.pod_id][result.player_id] = result.placement

    p1_wins = p2_wins = ties = 0
    for placements in by_pod.values():
        if player1_id not in placements or player2_id not in placements:
            continue
        p1, p2 = placements[player1_id], placements[player2_id]
        if p1 < p2:
            p1_wins += 1
        elif p2 < p1:
            p2_wins += 1
        else:
            ties += 1
    return HeadToHeadRecord(player1_wins=p1_wins, player2_wins=p2_wins, ties=ties)


def tournament_standings(
    tournament_id: str,
    players: Sequence[Player],
    results: Iterable[GameResult],
) -> list[StandingsRow]:
    """Rank players by points earned in one tournament.

    Ties on points fall back to wins, then name.
    """
    totals: dict[str, list[int]] = {}
    for result in results:
        if result.tournament_id != tournament_id:
            continue
        row = totals.setdefault(result.player_id, [0, 0, 0, 0])
        row[0] += result.placement_points
        row[1] += result.achievement_points
        row[2] += 1 if result.is_win else 0
        row[3] += 1

    names = {p.id: p.name for p in players}
    unranked = [
        (player_id, names.get(player_id, player_id), placement_pts, achievement_pts, wins, games)
        for player_id, (placement_pts, achievement_pts, wins, games) in totals.items()
    ]
    unranked.sort(key=lambda r: (-(r[2] + r[3]), -r[4], r[1].lower()))
    return [
        StandingsRow(
            rank=i,
            player_id=player_id,
            name=name,
            total_points=placement_pts + achievement_pts,
            placement_points=placement_pts,
            achievement_points=achievement_pts,
            wins=wins,
            games_played=games,
        )
        for i, (player_id, name, placement_pts, achievement_pts, wins, games) in enumerate(unranked, start=1)
    ]


def achievement_times_earned(achievement_id: str, results: Iterable[GameResult]) -> int:
    return sum(r.achievement_ids.count(achievement_id) for r in results)


def achievement_leaderboard(
    achievements: Sequence[Achievement],
    results: Sequence[GameResult],
) -> list[AchievementLeaderboardEntry]:
    entries = [
        AchievementLeaderboardEntry(
            achievement_id=a.id,
            name=a.name,
            times_earned=achievement_times_earned(a.id, results),
        )
        for a in achievements
    ]
    entries.sort(key=lambda e: (-e.times_earned, e.name.lower()))
    return entries
