import sqlite3
from pathlib import Path

import pytest

from pod_league.db.connection import _MIGRATIONS_DIR, create_connection, get_schema_version, pending_migrations


def _tables(conn: sqlite3.Connection) -> set[str]:
    return {
        row[0]
        for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'")
    }


class TestCreateConnection:
    def test_enables_wal_mode(self, tmp_path: Path) -> None:
        conn = create_connection(tmp_path / "league.db")
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "wal"
        conn.close()

    def test_enables_foreign_keys(self) -> None:
        conn = create_connection(":memory:")
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        conn.close()

    def test_creates_all_tables(self) -> None:
        conn = create_connection(":memory:")
        assert {"schema_version", "player", "achievement", "tournament", "game_result", "league_state"} <= _tables(
            conn
        )
        conn.close()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        db_path = tmp_path / "nested" / "dir" / "league.db"
        conn = create_connection(db_path)
        conn.close()
        assert db_path.exists()

    def test_seeds_league_state_and_default_achievement(self) -> None:
        conn = create_connection(":memory:")
        state = conn.execute("SELECT screen, active_tournament_id FROM league_state WHERE id = 1").fetchone()
        assert tuple(state) == ("tournaments", None)
        names = [row[0] for row in conn.execute("SELECT name FROM achievement")]
        assert names == ["First Blood"]
        conn.close()

    def test_idempotent_reopen(self, tmp_path: Path) -> None:
        db_path = tmp_path / "league.db"
        conn1 = create_connection(db_path)
        version = get_schema_version(conn1)
        conn1.close()
        conn2 = create_connection(db_path)
        assert get_schema_version(conn2) == version
        assert conn2.execute("SELECT COUNT(*) FROM achievement").fetchone()[0] == 1
        conn2.close()


class TestMigrations:
    def test_custom_migrations_dir(self, tmp_path: Path) -> None:
        custom_dir = tmp_path / "migrations"
        custom_dir.mkdir()
        (custom_dir / "001_test.sql").write_text("CREATE TABLE test_custom (id INTEGER PRIMARY KEY);")
        conn = create_connection(tmp_path / "league.db", migrations_dir=custom_dir)
        tables = _tables(conn)
        assert "test_custom" in tables
        assert "player" not in tables
        conn.close()

    def test_failed_migration_does_not_bump_version(self, tmp_path: Path) -> None:
        custom_dir = tmp_path / "migrations"
        custom_dir.mkdir()
        (custom_dir / "001_ok.sql").write_text("CREATE TABLE ok_table (id INTEGER PRIMARY KEY);")
        (custom_dir / "002_bad.sql").write_text("CREATE TABLE half (id INTEGER); INSERT INTO missing VALUES (1);")
        with pytest.raises(sqlite3.OperationalError):
            create_connection(tmp_path / "league.db", migrations_dir=custom_dir)

        conn = sqlite3.connect(str(tmp_path / "league.db"))
        assert get_schema_version(conn) == 1
        assert "half" not in _tables(conn)
        conn.close()

    def test_duplicate_version_rejected(self, tmp_path: Path) -> None:
        custom_dir = tmp_path / "migrations"
        custom_dir.mkdir()
        (custom_dir / "001_players.sql").write_text("CREATE TABLE a (id INTEGER PRIMARY KEY);")
        (custom_dir / "001_games.sql").write_text("CREATE TABLE b (id INTEGER PRIMARY KEY);")
        with pytest.raises(ValueError, match="duplicate migration 1"):
            create_connection(":memory:", migrations_dir=custom_dir)

    def test_nothing_pending_after_open(self) -> None:
        conn = create_connection(":memory:")
        assert pending_migrations(conn, _MIGRATIONS_DIR) == []
        conn.close()
