from dataclasses import dataclass

from pod_league.domain.stats import (
    AchievementLeaderboardEntry,
    HeadToHeadRecord,
    StandingsRow,
    TournamentPlayerStats,
    achievement_leaderboard,
    average_placement,
    head_to_head,
    placement_distribution,
    points_per_game,
    tournament_player_stats,
    tournament_standings,
    win_rate,
)
from pod_league.repos.protocols import AchievementRepo, GameResultRepo, PlayerRepo


@dataclass(frozen=True)
class PlayerSummary:
    player_id: str
    name: str
    total_points: int
    wins: int
    games_played: int
    tournaments_played: int
    win_rate: float
    points_per_game: float
    average_placement: float
    placement_distribution: dict[int, int]


class StatsService:
    def __init__(
        self,
        player_repo: PlayerRepo,
        achievement_repo: AchievementRepo,
        game_result_repo: GameResultRepo,
    ) -> None:
        self._player_repo = player_repo
        self._achievement_repo = achievement_repo
        self._game_result_repo = game_result_repo

    def player_summary(self, player_id: str) -> PlayerSummary | None:
        player = self._player_repo.get_by_id(player_id)
        if player is None:
            return None
        results = self._game_result_repo.get_by_player(player_id)
        return PlayerSummary(
            player_id=player.id,
            name=player.name,
            total_points=player.total_points,
            wins=player.wins,
            games_played=player.games_played,
            tournaments_played=player.tournaments_played,
            win_rate=win_rate(player),
            points_per_game=points_per_game(player),
            average_placement=average_placement(player_id, results),
            placement_distribution=placement_distribution(player_id, results),
        )

    def tournament_stats(self, player_id: str, tournament_id: str) -> TournamentPlayerStats:
        results = self._game_result_repo.get_by_tournament(tournament_id)
        return tournament_player_stats(player_id, tournament_id, results)

    def standings(self, tournament_id: str) -> list[StandingsRow]:
        return tournament_standings(
            tournament_id,
            self._player_repo.all(),
            self._game_result_repo.get_by_tournament(tournament_id),
        )

    def head_to_head(self, player1_id: str, player2_id: str) -> HeadToHeadRecord:
        return head_to_head(player1_id, player2_id, self._game_result_repo.all())

    def achievement_leaderboard(self) -> list[AchievementLeaderboardEntry]:
        return achievement_leaderboard(self._achievement_repo.all(), self._game_result_repo.all())
