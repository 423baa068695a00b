from pod_league.domain.player import Player
from pod_league.domain.tournament import Tournament
from pod_league.services.container import LeagueContainer


def seed_players(league: LeagueContainer, *names: str) -> dict[str, Player]:
    """Add players through the roster service, keyed by name."""
    players: dict[str, Player] = {}
    for name in names:
        player = league.roster.add_player(name)
        assert player is not None
        players[name] = player
    return players


def start_week(
    league: LeagueContainer,
    players: dict[str, Player],
    *,
    weeks: int = 6,
    random_per_week: int = 0,
    achievements_on: bool = True,
) -> Tournament:
    """Start a tournament with every given player and confirm them all present."""
    ids = [p.id for p in players.values()]
    tournament = league.session.start_tournament("Spring League", weeks, random_per_week, ids)
    assert tournament is not None
    league.session.confirm_attendance(ids, achievements_on)
    return active(league)


def active(league: LeagueContainer) -> Tournament:
    tournament = league.session.active_tournament()
    assert tournament is not None
    return tournament


def player(league: LeagueContainer, player_id: str) -> Player:
    found = league.store.players.get_by_id(player_id)
    assert found is not None
    return found
