import random

from pod_league.domain.player import Player
from pod_league.domain.pods import chunk, default_placements, generate_pods
from pod_league.domain.tournament import WeeklyPlayerPoints


def _players(n: int) -> list[Player]:
    return [Player(id=f"p{i}", name=f"Player {i}") for i in range(1, n + 1)]


class TestGeneratePods:
    def test_every_present_player_in_exactly_one_pod(self) -> None:
        players = _players(10)
        present = [p.id for p in players]
        pods = generate_pods(players, present, 1, {}, rng=random.Random(7))
        flat = [pid for pod in pods for pid in pod]
        assert sorted(flat) == sorted(present)
        assert len(flat) == len(set(flat))

    def test_pod_sizes_with_short_last_pod(self) -> None:
        players = _players(10)
        pods = generate_pods(players, [p.id for p in players], 1, {}, rng=random.Random(7))
        assert [len(pod) for pod in pods] == [4, 4, 2]

    def test_single_player_gets_own_pod(self) -> None:
        players = _players(5)
        pods = generate_pods(players, [p.id for p in players], 1, {}, rng=random.Random(0))
        assert [len(pod) for pod in pods] == [4, 1]

    def test_absent_players_excluded(self) -> None:
        players = _players(6)
        pods = generate_pods(players, ["p1", "p3", "p5"], 1, {}, rng=random.Random(1))
        assert sorted(pid for pod in pods for pid in pod) == ["p1", "p3", "p5"]

    def test_unknown_present_ids_ignored(self) -> None:
        players = _players(2)
        pods = generate_pods(players, ["p1", "p2", "ghost"], 1, {}, rng=random.Random(1))
        assert sorted(pid for pod in pods for pid in pod) == ["p1", "p2"]

    def test_no_present_players(self) -> None:
        assert generate_pods(_players(4), [], 1, {}) == []

    def test_round_one_is_reproducible_with_seed(self) -> None:
        players = _players(8)
        present = [p.id for p in players]
        first = generate_pods(players, present, 1, {}, rng=random.Random(42))
        second = generate_pods(players, present, 1, {}, rng=random.Random(42))
        assert first == second

    def test_later_rounds_sorted_by_weekly_points(self) -> None:
        players = _players(8)
        weekly = {f"p{i}": WeeklyPlayerPoints(placement_points=i) for i in range(1, 9)}
        pods = generate_pods(players, [p.id for p in players], 2, weekly)
        assert pods == [["p8", "p7", "p6", "p5"], ["p4", "p3", "p2", "p1"]]

    def test_later_rounds_count_achievement_points(self) -> None:
        players = _players(2)
        weekly = {
            "p1": WeeklyPlayerPoints(placement_points=3, achievement_points=3),
            "p2": WeeklyPlayerPoints(placement_points=4),
        }
        assert generate_pods(players, ["p1", "p2"], 3, weekly) == [["p1", "p2"]]

    def test_ties_keep_roster_order(self) -> None:
        players = _players(5)
        weekly = {
            "p1": WeeklyPlayerPoints(placement_points=2),
            "p2": WeeklyPlayerPoints(placement_points=5),
            "p3": WeeklyPlayerPoints(placement_points=2),
            "p4": WeeklyPlayerPoints(placement_points=5),
        }
        pods = generate_pods(players, [p.id for p in players], 2, weekly)
        assert pods == [["p2", "p4", "p1", "p3"], ["p5"]]

    def test_custom_pod_size(self) -> None:
        players = _players(7)
        pods = generate_pods(players, [p.id for p in players], 2, {}, pod_size=3)
        assert [len(pod) for pod in pods] == [3, 3, 1]


class TestChunk:
    def test_exact_multiple(self) -> None:
        assert chunk(["a", "b", "c", "d"], 2) == [["a", "b"], ["c", "d"]]

    def test_empty(self) -> None:
        assert chunk([], 4) == []


class TestDefaultPlacements:
    def test_position_in_pod(self) -> None:
        placements = default_placements([["a", "b", "c", "d"], ["e", "f"]])
        assert placements == {"a": 1, "b": 2, "c": 3, "d": 4, "e": 1, "f": 2}

    def test_capped_at_pod_size(self) -> None:
        placements = default_placements([["a", "b", "c"]], pod_size=2)
        assert placements == {"a": 1, "b": 2, "c": 2}
