import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from pod_league.repos.protocols import LeagueStore


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(UTC)


@contextmanager
def unit_of_work(store: LeagueStore) -> Iterator[None]:
    """Commit everything written inside the block, or roll it all back on error."""
    try:
        yield
    except Exception:
        store.rollback()
        raise
    store.commit()
