import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import Result
from typer.testing import CliRunner

from pod_league.cli.app import app
from pod_league.db.connection import create_connection
from pod_league.domain.tournament import TournamentStatus
from pod_league.repos.store import SqliteLeagueStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("POD_LEAGUE__"):
            monkeypatch.delenv(key)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "league.db"


@pytest.fixture
def store(db_path: Path) -> Generator[SqliteLeagueStore]:
    """A second connection to the CLI's database for inspecting what commands wrote."""
    conn = create_connection(db_path)
    yield SqliteLeagueStore(conn)
    conn.close()


def _invoke(db_path: Path, *args: str) -> Result:
    return runner.invoke(
        app,
        ["--db", str(db_path), "--config", "/nonexistent/pod_league.yaml", *args],
        env={"COLUMNS": "200"},
    )


def _ok(db_path: Path, *args: str) -> Result:
    result = _invoke(db_path, *args)
    assert result.exit_code == 0, result.output
    return result


def _seed_roster(db_path: Path, *names: str) -> None:
    for name in names:
        _ok(db_path, "players", "add", name)


class TestPlayersCommands:
    def test_add_and_list(self, db_path: Path) -> None:
        _seed_roster(db_path, "Ann", "Bob")
        result = _ok(db_path, "players", "list")
        assert "Ann" in result.output
        assert "Bob" in result.output

    def test_empty_list(self, db_path: Path) -> None:
        assert "No players yet." in _ok(db_path, "players", "list").output

    def test_add_blank_name_fails(self, db_path: Path) -> None:
        result = _invoke(db_path, "players", "add", "  ")
        assert result.exit_code == 1
        assert "must not be empty" in result.output

    def test_remove_by_name(self, db_path: Path) -> None:
        _seed_roster(db_path, "Ann")
        assert "Removed" in _ok(db_path, "players", "remove", "ann").output
        assert "No player matches" in _ok(db_path, "players", "remove", "ann").output


class TestAchievementsCommands:
    def test_add_list_and_always_on(self, db_path: Path, store: SqliteLeagueStore) -> None:
        _ok(db_path, "achievements", "add", "Pacifist", "--points", "3")
        _ok(db_path, "achievements", "always-on", "Pacifist")
        result = _ok(db_path, "achievements", "list")
        assert "Pacifist" in result.output
        pacifist = next(a for a in store.achievements.all() if a.name == "Pacifist")
        assert pacifist.points == 3
        assert pacifist.always_on is True

    def test_unknown_achievement_fails(self, db_path: Path) -> None:
        result = _invoke(db_path, "achievements", "always-on", "Nope")
        assert result.exit_code == 1
        assert "no achievement matches" in result.output


class TestTournamentCommands:
    def test_requires_active_tournament(self, db_path: Path) -> None:
        for command in (["pods"], ["next"], ["undo"], ["place", "Ann", "1"]):
            result = _invoke(db_path, "tournament", *command)
            assert result.exit_code == 1
            assert "no active tournament" in result.output

    def test_status_without_tournament(self, db_path: Path) -> None:
        assert "No active tournament." in _ok(db_path, "tournament", "status").output

    def test_full_single_week_tournament(self, db_path: Path) -> None:
        _seed_roster(db_path, "Ann", "Bob", "Cat", "Dan")
        _ok(db_path, "tournament", "new", "Spring", "--weeks", "1", "--random", "0")
        _ok(db_path, "tournament", "attend")
        for _ in range(2):
            _ok(db_path, "tournament", "pods")
            _ok(db_path, "tournament", "next")

        _ok(db_path, "tournament", "pods")
        _ok(db_path, "tournament", "place", "Ann", "1")
        _ok(db_path, "tournament", "place", "Bob", "2")
        _ok(db_path, "tournament", "place", "Cat", "3")
        _ok(db_path, "tournament", "place", "Dan", "4")
        _ok(db_path, "tournament", "check", "Ann", "First Blood")
        result = _ok(db_path, "tournament", "next")

        assert "Spring complete!" in result.output
        assert "Final standings" in result.output
        assert "No active tournament." in _ok(db_path, "tournament", "status").output

        conn = create_connection(db_path)
        store = SqliteLeagueStore(conn)
        (tournament,) = store.tournaments.all()
        assert tournament.status is TournamentStatus.COMPLETED
        assert len(store.game_results.all()) == 12
        ann = next(p for p in store.players.all() if p.name == "Ann")
        assert ann.games_played == 3
        assert ann.achievement_points == 1
        assert ann.tournaments_played == 1
        conn.close()

    def test_place_absent_player_fails(self, db_path: Path) -> None:
        _seed_roster(db_path, "Ann", "Bob")
        _ok(db_path, "tournament", "new", "Spring")
        _ok(db_path, "tournament", "attend", "Ann")
        result = _invoke(db_path, "tournament", "place", "Bob", "1")
        assert result.exit_code == 1
        assert "not present" in result.output

    def test_finalize_edit_and_undo(self, db_path: Path, store: SqliteLeagueStore) -> None:
        _seed_roster(db_path, "Ann", "Bob")
        _ok(db_path, "tournament", "new", "Spring")
        _ok(db_path, "tournament", "attend")
        _ok(db_path, "tournament", "place", "Ann", "1")
        _ok(db_path, "tournament", "place", "Bob", "2")
        assert "Finalized" in _ok(db_path, "tournament", "finalize").output

        assert "Edited" in _ok(db_path, "tournament", "edit", "--place", "Ann=2", "--place", "Bob=1").output
        placements = {r.player_id: r.placement for r in store.game_results.all()}
        names = {p.id: p.name for p in store.players.all()}
        assert {names[pid]: place for pid, place in placements.items()} == {"Ann": 2, "Bob": 1}

        assert "Undid" in _ok(db_path, "tournament", "undo").output
        assert store.game_results.all() == []
        assert "Nothing to undo." in _ok(db_path, "tournament", "undo").output

    def test_edit_rejects_malformed_pair(self, db_path: Path) -> None:
        _seed_roster(db_path, "Ann")
        _ok(db_path, "tournament", "new", "Spring")
        _ok(db_path, "tournament", "attend")
        _ok(db_path, "tournament", "place", "Ann", "1")
        _ok(db_path, "tournament", "finalize")
        result = _invoke(db_path, "tournament", "edit", "--place", "Ann")
        assert result.exit_code == 1
        assert "expected PLAYER=VALUE" in result.output

    def test_close_week_moves_to_attendance(self, db_path: Path, store: SqliteLeagueStore) -> None:
        _seed_roster(db_path, "Ann")
        _ok(db_path, "tournament", "new", "Spring", "--weeks", "2")
        _ok(db_path, "tournament", "attend")
        assert "attendance" in _ok(db_path, "tournament", "close-week").output
        tournament = store.tournaments.all()[0]
        assert tournament.current_week == 2

    def test_archive(self, db_path: Path, store: SqliteLeagueStore) -> None:
        _seed_roster(db_path, "Ann")
        _ok(db_path, "tournament", "new", "Spring")
        assert "Archived" in _ok(db_path, "tournament", "archive").output
        assert store.tournaments.all()[0].is_completed
        assert store.league_state.get().active_tournament_id is None


class TestStatsCommands:
    def test_player_h2h_and_standings(self, db_path: Path) -> None:
        _seed_roster(db_path, "Ann", "Bob")
        _ok(db_path, "tournament", "new", "Spring")
        _ok(db_path, "tournament", "attend")
        _ok(db_path, "tournament", "place", "Ann", "1")
        _ok(db_path, "tournament", "place", "Bob", "2")
        _ok(db_path, "tournament", "finalize")

        standings = _ok(db_path, "stats", "standings").output
        assert standings.index("Ann") < standings.index("Bob")
        assert "Wins: 1 / 1 games" in _ok(db_path, "stats", "player", "Ann").output
        assert "over 1 shared games" in _ok(db_path, "stats", "h2h", "Ann", "Bob").output
        assert "First Blood" in _ok(db_path, "stats", "achievements").output

    def test_unknown_player(self, db_path: Path) -> None:
        result = _invoke(db_path, "stats", "player", "Nobody")
        assert result.exit_code == 1


class TestConfigErrors:
    def test_invalid_rule_exits_with_error(self, db_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POD_LEAGUE__LEAGUE__POD_SIZE", "zero")
        result = _invoke(db_path, "players", "list")
        assert result.exit_code == 1
        assert "league.pod_size" in result.output
