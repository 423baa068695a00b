"""Tests for the league service container."""

from pod_league.domain.rules import LeagueRules
from pod_league.services.container import LeagueContainer
from tests.fakes.repos import FakeLeagueStore


class TestLeagueContainer:
    def test_services_are_cached(self) -> None:
        container = LeagueContainer(FakeLeagueStore())
        assert container.session is container.session
        assert container.finalizer is container.finalizer
        assert container.progression is container.progression

    def test_default_rules(self) -> None:
        assert LeagueContainer(FakeLeagueStore()).rules == LeagueRules()

    def test_rules_reach_progression(self) -> None:
        rules = LeagueRules(rounds_per_week=2)
        container = LeagueContainer(FakeLeagueStore(), rules=rules)
        assert container.progression.rules is rules

    def test_store_exposed(self) -> None:
        store = FakeLeagueStore()
        assert LeagueContainer(store).store is store
