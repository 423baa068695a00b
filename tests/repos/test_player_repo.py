import sqlite3

from pod_league.domain.player import Player
from pod_league.repos.player_repo import SqlitePlayerRepo
from pod_league.repos.protocols import PlayerRepo


class TestSqlitePlayerRepo:
    def test_satisfies_protocol(self, conn: sqlite3.Connection) -> None:
        assert isinstance(SqlitePlayerRepo(conn), PlayerRepo)

    def test_upsert_and_get(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerRepo(conn)
        player = Player(
            id="p1",
            name="Ann",
            placement_points=12,
            achievement_points=3,
            wins=2,
            games_played=5,
            tournaments_played=1,
        )
        repo.upsert(player)
        assert repo.get_by_id("p1") == player

    def test_upsert_updates_on_conflict(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerRepo(conn)
        repo.upsert(Player(id="p1", name="Ann"))
        repo.upsert(Player(id="p1", name="Annie", wins=1))
        result = repo.get_by_id("p1")
        assert result is not None
        assert result.name == "Annie"
        assert result.wins == 1
        assert len(repo.all()) == 1

    def test_get_missing(self, conn: sqlite3.Connection) -> None:
        assert SqlitePlayerRepo(conn).get_by_id("nope") is None

    def test_all_in_insertion_order(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerRepo(conn)
        for pid, name in [("z", "Zed"), ("a", "Amy"), ("m", "Max")]:
            repo.upsert(Player(id=pid, name=name))
        repo.upsert(Player(id="z", name="Zed", wins=3))
        assert [p.id for p in repo.all()] == ["z", "a", "m"]

    def test_get_by_ids(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerRepo(conn)
        for pid in ("a", "b", "c"):
            repo.upsert(Player(id=pid, name=pid.upper()))
        assert [p.id for p in repo.get_by_ids(["c", "a", "missing"])] == ["a", "c"]
        assert repo.get_by_ids([]) == []

    def test_delete(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerRepo(conn)
        repo.upsert(Player(id="p1", name="Ann"))
        assert repo.delete("p1") is True
        assert repo.delete("p1") is False
        assert repo.get_by_id("p1") is None
