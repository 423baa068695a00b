from collections.abc import Mapping, Sequence

from rich.console import Console
from rich.table import Table

from pod_league.domain.achievement import Achievement
from pod_league.domain.player import Player
from pod_league.domain.stats import AchievementLeaderboardEntry, HeadToHeadRecord, StandingsRow
from pod_league.domain.tournament import PodSnapshot, Tournament
from pod_league.services.stats import PlayerSummary

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_info(message: str) -> None:
    console.print(message)


def print_players(players: Sequence[Player]) -> None:
    if not players:
        console.print("No players yet.")
        return
    table = Table(title="Players")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Points", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Games", justify="right")
    table.add_column("Tournaments", justify="right")
    for p in players:
        table.add_row(p.id, p.name, str(p.total_points), str(p.wins), str(p.games_played), str(p.tournaments_played))
    console.print(table)


def print_achievements(achievements: Sequence[Achievement], active_ids: Sequence[str] = ()) -> None:
    if not achievements:
        console.print("No achievements yet.")
        return
    table = Table(title="Achievements")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Points", justify="right")
    table.add_column("Always on")
    table.add_column("Active")
    for a in achievements:
        table.add_row(
            a.id,
            a.name,
            str(a.points),
            "yes" if a.always_on else "",
            "[green]yes[/green]" if a.id in active_ids else "",
        )
    console.print(table)


def print_tournament_status(tournament: Tournament, screen: str, names: Mapping[str, str]) -> None:
    console.print(f"[bold]{tournament.name}[/bold] ({tournament.status.value})")
    console.print(f"  Week {tournament.current_week}/{tournament.total_weeks}, round {tournament.current_round}")
    console.print(f"  Screen: {screen}")
    console.print(f"  Achievements this week: {'on' if tournament.achievements_on_this_week else 'off'}")
    present = ", ".join(names.get(pid, pid) for pid in tournament.present_player_ids) or "(none)"
    console.print(f"  Present: {present}")
    console.print(f"  Finalized rounds this week: {len(tournament.pod_history_snapshots)}")
    if tournament.weekly_points_by_player:
        table = Table(title="Weekly points")
        table.add_column("Player")
        table.add_column("Placement", justify="right")
        table.add_column("Achievement", justify="right")
        table.add_column("Total", justify="right")
        ranked = sorted(tournament.weekly_points_by_player.items(), key=lambda kv: -kv[1].total)
        for pid, points in ranked:
            table.add_row(
                names.get(pid, pid), str(points.placement_points), str(points.achievement_points), str(points.total)
            )
        console.print(table)


def print_pods(pods: Sequence[Sequence[str]], placements: Mapping[str, int], names: Mapping[str, str]) -> None:
    if not pods:
        console.print("No players present, no pods generated.")
        return
    for i, pod in enumerate(pods, start=1):
        table = Table(title=f"Pod {i}")
        table.add_column("Player")
        table.add_column("Place", justify="right")
        for pid in pod:
            place = placements.get(pid)
            table.add_row(names.get(pid, pid), str(place) if place is not None else "-")
        console.print(table)


def print_snapshot(snapshot: PodSnapshot, names: Mapping[str, str], *, verb: str) -> None:
    console.print(f"[bold green]{verb}[/bold green] round with {len(snapshot.player_ids)} players")
    for pid in sorted(snapshot.placements, key=lambda p: snapshot.placements[p]):
        delta = snapshot.player_deltas.get(pid)
        gained = (delta.placement_points + delta.achievement_points) if delta else 0
        console.print(f"  {snapshot.placements[pid]}. {names.get(pid, pid)} ({gained:+d})")


def print_standings(rows: Sequence[StandingsRow], title: str) -> None:
    if not rows:
        console.print("No results recorded.")
        return
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Player")
    table.add_column("Total", justify="right")
    table.add_column("Placement", justify="right")
    table.add_column("Achievement", justify="right")
    table.add_column("Wins", justify="right")
    table.add_column("Games", justify="right")
    for r in rows:
        table.add_row(
            str(r.rank),
            r.name,
            str(r.total_points),
            str(r.placement_points),
            str(r.achievement_points),
            str(r.wins),
            str(r.games_played),
        )
    console.print(table)


def print_player_summary(summary: PlayerSummary) -> None:
    console.print(f"[bold]{summary.name}[/bold]")
    console.print(f"  Total points: {summary.total_points}")
    console.print(f"  Wins: {summary.wins} / {summary.games_played} games ({summary.win_rate:.1%})")
    console.print(f"  Points per game: {summary.points_per_game:.2f}")
    console.print(f"  Average placement: {summary.average_placement:.2f}")
    console.print(f"  Tournaments played: {summary.tournaments_played}")
    dist = "  ".join(f"{place}: {count}" for place, count in sorted(summary.placement_distribution.items()))
    console.print(f"  Placements: {dist}")


def print_head_to_head(name1: str, name2: str, record: HeadToHeadRecord) -> None:
    console.print(f"[bold]{name1}[/bold] vs [bold]{name2}[/bold] over {record.games_together} shared games")
    console.print(f"  {name1}: {record.player1_wins}  {name2}: {record.player2_wins}  ties: {record.ties}")


def print_achievement_leaderboard(entries: Sequence[AchievementLeaderboardEntry]) -> None:
    if not entries:
        console.print("No achievements yet.")
        return
    table = Table(title="Achievements earned")
    table.add_column("Achievement")
    table.add_column("Times earned", justify="right")
    for e in entries:
        table.add_row(e.name, str(e.times_earned))
    console.print(table)
