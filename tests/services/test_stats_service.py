from pod_league.services.container import LeagueContainer
from tests.helpers import active, seed_players, start_week


def _play(league: LeagueContainer, placements: dict[str, int], checks: set[tuple[str, str]] | None = None) -> None:
    for player_id, place in placements.items():
        league.session.set_placement(player_id, place)
    for player_id, achievement_id in checks or set():
        league.session.set_achievement_check(player_id, achievement_id, True)
    league.session.finalize_round()


class TestStatsService:
    def test_player_summary(self, league: LeagueContainer) -> None:
        players = seed_players(league, "Ann", "Bob")
        start_week(league, players)
        ann, bob = players["Ann"].id, players["Bob"].id
        _play(league, {ann: 1, bob: 2}, {(ann, "first-blood")})
        _play(league, {ann: 3, bob: 1})

        summary = league.stats.player_summary(ann)

        assert summary is not None
        assert summary.name == "Ann"
        assert summary.total_points == 7
        assert summary.wins == 1
        assert summary.games_played == 2
        assert summary.tournaments_played == 1
        assert summary.win_rate == 0.5
        assert summary.points_per_game == 3.5
        assert summary.average_placement == 2.0
        assert summary.placement_distribution == {1: 1, 2: 0, 3: 1, 4: 0}

    def test_player_summary_missing(self, league: LeagueContainer) -> None:
        assert league.stats.player_summary("nope") is None

    def test_standings_and_head_to_head(self, league: LeagueContainer) -> None:
        players = seed_players(league, "Ann", "Bob", "Cat")
        start_week(league, players)
        ann, bob, cat = (players[n].id for n in ("Ann", "Bob", "Cat"))
        _play(league, {ann: 1, bob: 2, cat: 3})
        _play(league, {ann: 2, bob: 1})
        tournament_id = active(league).id

        rows = league.stats.standings(tournament_id)
        assert [r.name for r in rows] == ["Ann", "Bob", "Cat"]
        assert [r.total_points for r in rows] == [7, 7, 2]

        record = league.stats.head_to_head(ann, bob)
        assert (record.player1_wins, record.player2_wins, record.ties) == (1, 1, 0)
        assert league.stats.head_to_head(bob, cat).games_together == 1

        stats = league.stats.tournament_stats(cat, tournament_id)
        assert stats.games_played == 1
        assert stats.placement_points == 2

    def test_achievement_leaderboard(self, league: LeagueContainer) -> None:
        league.roster.add_achievement("Alpha Strike", 2)
        players = seed_players(league, "Ann", "Bob")
        start_week(league, players)
        ann, bob = players["Ann"].id, players["Bob"].id
        _play(league, {ann: 1, bob: 2}, {(ann, "first-blood"), (bob, "first-blood")})

        entries = league.stats.achievement_leaderboard()
        assert [(e.name, e.times_earned) for e in entries] == [("First Blood", 2), ("Alpha Strike", 0)]
