from dataclasses import dataclass
from enum import StrEnum


class Screen(StrEnum):
    TOURNAMENTS = "tournaments"
    NEW_TOURNAMENT = "new_tournament"
    ADD_PLAYERS = "add_players"
    ATTENDANCE = "attendance"
    PODS = "pods"
    TOURNAMENT_STANDINGS = "tournament_standings"
    TOURNAMENT_DETAIL = "tournament_detail"
    # Legacy values still found in older databases
    DASHBOARD = "dashboard"
    CONFIRM_NEW_TOURNAMENT = "confirm_new_tournament"


PRE_TOURNAMENT_SCREENS: frozenset[Screen] = frozenset(
    {Screen.TOURNAMENTS, Screen.DASHBOARD, Screen.NEW_TOURNAMENT, Screen.CONFIRM_NEW_TOURNAMENT}
)

LEGACY_SCREENS: dict[Screen, Screen] = {
    Screen.DASHBOARD: Screen.TOURNAMENTS,
    Screen.CONFIRM_NEW_TOURNAMENT: Screen.NEW_TOURNAMENT,
}


@dataclass(frozen=True)
class LeagueState:
    screen: Screen = Screen.TOURNAMENTS
    active_tournament_id: str | None = None

    @property
    def has_active_tournament(self) -> bool:
        return self.active_tournament_id is not None
