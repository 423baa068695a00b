"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

import pytest

from pod_league.db.connection import create_connection
from pod_league.repos.store import SqliteLeagueStore
from pod_league.services.container import LeagueContainer

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def conn() -> Generator[sqlite3.Connection]:
    connection = create_connection(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def store(conn: sqlite3.Connection) -> SqliteLeagueStore:
    return SqliteLeagueStore(conn)


@pytest.fixture
def league(store: SqliteLeagueStore) -> LeagueContainer:
    """A container over a fresh in-memory league with a fixed random seed.

    The migrations seed one achievement ("first-blood"); tests that need an
    empty catalog remove it themselves.
    """
    return LeagueContainer(store, seed=1234)
