"""Wires the league services around one store."""

from __future__ import annotations

import logging
import random
from functools import cached_property
from typing import TYPE_CHECKING

from pod_league.domain.rules import LeagueRules
from pod_league.services.league_session import LeagueSession
from pod_league.services.roster import RosterService
from pod_league.services.round_finalizer import RoundFinalizer
from pod_league.services.round_ledger import RoundLedgerService
from pod_league.services.stats import StatsService
from pod_league.services.tournament_progression import TournamentProgression

if TYPE_CHECKING:
    from pod_league.repos.protocols import LeagueStore

logger = logging.getLogger(__name__)


class LeagueContainer:
    """Lazily-built services sharing a store, rules and random source.

    Pass ``seed`` to make pod shuffles and achievement rolls reproducible.
    """

    def __init__(self, store: LeagueStore, *, rules: LeagueRules | None = None, seed: int | None = None) -> None:
        self._store = store
        self._rules = rules or LeagueRules()
        self._rng = random.Random(seed)
        if seed is not None:
            logger.debug("Random source seeded with %d", seed)

    @property
    def store(self) -> LeagueStore:
        return self._store

    @property
    def rules(self) -> LeagueRules:
        return self._rules

    @cached_property
    def finalizer(self) -> RoundFinalizer:
        return RoundFinalizer(self._store)

    @cached_property
    def ledger(self) -> RoundLedgerService:
        return RoundLedgerService(self._store)

    @cached_property
    def progression(self) -> TournamentProgression:
        return TournamentProgression(self._store, self.finalizer, rules=self._rules, rng=self._rng)

    @cached_property
    def session(self) -> LeagueSession:
        return LeagueSession(self._store, self.progression, self.finalizer, self.ledger)

    @cached_property
    def roster(self) -> RosterService:
        return RosterService(self._store)

    @cached_property
    def stats(self) -> StatsService:
        return StatsService(self._store.players, self._store.achievements, self._store.game_results)
