from collections.abc import Iterator
from contextlib import contextmanager

from config import ConfigurationSet

from pod_league.config import database_path, random_seed
from pod_league.db.connection import create_connection
from pod_league.domain.rules import LeagueRules
from pod_league.repos.store import SqliteLeagueStore
from pod_league.services.container import LeagueContainer


@contextmanager
def build_league_context(cfg: ConfigurationSet, rules: LeagueRules) -> Iterator[LeagueContainer]:
    """Composition root: opens the league DB, repairs league state, yields the container, closes DB."""
    conn = create_connection(database_path(cfg))
    try:
        container = LeagueContainer(SqliteLeagueStore(conn), rules=rules, seed=random_seed(cfg))
        container.session.validate_and_sanitize_state()
        yield container
    finally:
        conn.close()
