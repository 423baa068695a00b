import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

_MIGRATIONS_DIR = Path(__file__).parent / "migrations"
_MEMORY = ":memory:"


def create_connection(path: str | Path, *, migrations_dir: Path | None = None) -> sqlite3.Connection:
    """Open the league database and bring its schema up to date.

    File databases get WAL journaling and a created parent directory;
    ``":memory:"`` is used as-is for tests.
    """
    in_memory = str(path) == _MEMORY
    if not in_memory:
        path = Path(path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    if not in_memory:
        conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    _migrate(conn, migrations_dir if migrations_dir is not None else _MIGRATIONS_DIR)
    return conn


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Highest applied migration number, 0 for a fresh database."""
    try:
        row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    except sqlite3.OperationalError:
        return 0
    return row[0] if row and row[0] is not None else 0


def pending_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> list[tuple[int, Path]]:
    """Numbered ``NNN_name.sql`` files newer than the schema, oldest first."""
    by_version: dict[int, Path] = {}
    for migration_file in migrations_dir.glob("*.sql"):
        version = int(migration_file.stem.split("_")[0])
        if version in by_version:
            raise ValueError(f"duplicate migration {version}: {by_version[version].name}, {migration_file.name}")
        by_version[version] = migration_file
    current = get_schema_version(conn)
    return sorted((v, f) for v, f in by_version.items() if v > current)


def _migrate(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_version ("
        "    version INTEGER PRIMARY KEY,"
        "    applied_at TEXT NOT NULL DEFAULT (datetime('now'))"
        ")"
    )
    pending = pending_migrations(conn, migrations_dir)
    for version, migration_file in pending:
        _apply(conn, version, migration_file)
    if pending:
        logger.info("League schema now at version %d", pending[-1][0])
    conn.execute("PRAGMA foreign_keys=ON")


def _apply(conn: sqlite3.Connection, version: int, migration_file: Path) -> None:
    logger.debug("Applying migration %s", migration_file.name)
    statements = [s.strip() for s in migration_file.read_text().split(";") if s.strip()]
    # schema change and version row land together or not at all
    isolation = conn.isolation_level
    conn.isolation_level = None
    try:
        conn.execute("BEGIN")
        for statement in statements:
            conn.execute(statement)
        conn.execute("INSERT INTO schema_version (version) VALUES (?)", (version,))
        conn.execute("COMMIT")
    except sqlite3.Error:
        conn.execute("ROLLBACK")
        raise
    finally:
        conn.isolation_level = isolation
