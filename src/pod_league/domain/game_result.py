from dataclasses import dataclass


@dataclass(frozen=True)
class GameResult:
    id: str
    tournament_id: str
    week: int
    round: int
    player_id: str
    placement: int
    placement_points: int
    achievement_points: int
    pod_id: str
    timestamp: str
    achievement_ids: tuple[str, ...] = ()

    @property
    def total_points(self) -> int:
        return self.placement_points + self.achievement_points

    @property
    def is_win(self) -> bool:
        return self.placement == 1
