from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Annotated

import typer

from pod_league.cli._logging import configure_logging
from pod_league.cli._output import (
    print_achievement_leaderboard,
    print_achievements,
    print_error,
    print_head_to_head,
    print_info,
    print_player_summary,
    print_players,
    print_pods,
    print_snapshot,
    print_standings,
    print_tournament_status,
)
from pod_league.cli.factory import build_league_context
from pod_league.config import create_config, load_league_rules
from pod_league.domain.achievement import Achievement
from pod_league.domain.player import Player
from pod_league.domain.result import Err, Ok
from pod_league.domain.tournament import Tournament
from pod_league.services.container import LeagueContainer

app = typer.Typer(name="league", help="Pod league tracker: weekly pods, achievements and tournaments")


@dataclass(frozen=True)
class _CliOptions:
    db_path: str | None
    config_path: str


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    db: Annotated[str | None, typer.Option("--db", help="Path to the league database")] = None,
    config_path: Annotated[str, typer.Option("--config", help="YAML config file")] = "pod_league.yaml",
) -> None:
    """Pod league tracker."""
    configure_logging(verbose=verbose)
    ctx.obj = _CliOptions(db_path=db, config_path=config_path)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


@contextmanager
def _league(ctx: typer.Context) -> Iterator[LeagueContainer]:
    options: _CliOptions = ctx.find_root().obj
    cfg = create_config(yaml_path=options.config_path, db_path=options.db_path)
    match load_league_rules(cfg):
        case Ok(rules):
            pass
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)
    with build_league_context(cfg, rules) as league:
        yield league


def _names(league: LeagueContainer) -> dict[str, str]:
    return {p.id: p.name for p in league.roster.players()}


def _require_player(league: LeagueContainer, ref: str) -> Player:
    player = league.roster.find_player(ref)
    if player is None:
        print_error(f"no player matches '{ref}'")
        raise typer.Exit(code=1)
    return player


def _require_achievement(league: LeagueContainer, ref: str) -> Achievement:
    achievement = league.roster.find_achievement(ref)
    if achievement is None:
        print_error(f"no achievement matches '{ref}'")
        raise typer.Exit(code=1)
    return achievement


def _require_active(league: LeagueContainer) -> Tournament:
    tournament = league.session.active_tournament()
    if tournament is None:
        print_error("no active tournament; start one with 'league tournament new'")
        raise typer.Exit(code=1)
    return tournament


def _split_pair(raw: str, what: str) -> tuple[str, str]:
    left, sep, right = raw.partition("=")
    if not sep or not left.strip() or not right.strip():
        print_error(f"invalid {what} '{raw}', expected PLAYER=VALUE")
        raise typer.Exit(code=1)
    return left.strip(), right.strip()


# --- players -----------------------------------------------------------------

players_app = typer.Typer(name="players", help="Manage the player roster")
app.add_typer(players_app, name="players")


@players_app.command("add")
def players_add(ctx: typer.Context, name: Annotated[str, typer.Argument(help="Player name")]) -> None:
    with _league(ctx) as league:
        player = league.roster.add_player(name)
        if player is None:
            print_error("player name must not be empty")
            raise typer.Exit(code=1)
        print_info(f"[bold green]Added[/bold green] {player.name} ({player.id})")


@players_app.command("list")
def players_list(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        print_players(league.roster.players())


@players_app.command("remove")
def players_remove(ctx: typer.Context, player: Annotated[str, typer.Argument(help="Player id or name")]) -> None:
    with _league(ctx) as league:
        found = league.roster.find_player(player)
        if found is None or not league.roster.remove_player(found.id):
            print_info(f"No player matches '{player}'.")
            return
        print_info(f"[bold]Removed[/bold] {found.name}")


# --- achievements --------------------------------------------------------------

achievements_app = typer.Typer(name="achievements", help="Manage the achievement catalog")
app.add_typer(achievements_app, name="achievements")


@achievements_app.command("add")
def achievements_add(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Achievement name")],
    points: Annotated[int, typer.Option("--points", "-p", help="Points awarded")] = 1,
    always_on: Annotated[bool, typer.Option("--always-on", help="Active every week")] = False,
) -> None:
    with _league(ctx) as league:
        achievement = league.roster.add_achievement(name, points, always_on)
        if achievement is None:
            print_error("achievement name must not be empty")
            raise typer.Exit(code=1)
        print_info(f"[bold green]Added[/bold green] {achievement.name} ({achievement.points} pts)")


@achievements_app.command("list")
def achievements_list(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        tournament = league.session.active_tournament()
        active = tournament.active_achievement_ids if tournament is not None else []
        print_achievements(league.roster.achievements(), active)


@achievements_app.command("remove")
def achievements_remove(
    ctx: typer.Context, achievement: Annotated[str, typer.Argument(help="Achievement id or name")]
) -> None:
    with _league(ctx) as league:
        found = league.roster.find_achievement(achievement)
        if found is None or not league.roster.remove_achievement(found.id):
            print_info(f"No achievement matches '{achievement}'.")
            return
        print_info(f"[bold]Removed[/bold] {found.name}")


@achievements_app.command("always-on")
def achievements_always_on(
    ctx: typer.Context,
    achievement: Annotated[str, typer.Argument(help="Achievement id or name")],
    on: Annotated[bool, typer.Option("--on/--off", help="Whether the achievement is always active")] = True,
) -> None:
    with _league(ctx) as league:
        found = _require_achievement(league, achievement)
        league.roster.set_achievement_always_on(found.id, on)
        print_info(f"{found.name}: always-on {'enabled' if on else 'disabled'}")


# --- tournament ----------------------------------------------------------------

tournament_app = typer.Typer(name="tournament", help="Run the active tournament")
app.add_typer(tournament_app, name="tournament")


@tournament_app.command("new")
def tournament_new(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Tournament name")],
    weeks: Annotated[int | None, typer.Option("--weeks", help="Number of weeks")] = None,
    random_per_week: Annotated[
        int | None, typer.Option("--random", help="Random achievements rolled each week")
    ] = None,
    player: Annotated[
        list[str] | None, typer.Option("--player", help="Participating player (default: everyone)")
    ] = None,
) -> None:
    with _league(ctx) as league:
        if player:
            player_ids = [_require_player(league, ref).id for ref in player]
        else:
            player_ids = [p.id for p in league.roster.players()]
        tournament = league.session.start_tournament(
            name,
            weeks if weeks is not None else league.rules.default_total_weeks,
            random_per_week if random_per_week is not None else league.rules.default_random_per_week,
            player_ids,
        )
        if tournament is None:
            print_error("tournament name must not be empty")
            raise typer.Exit(code=1)
        print_info(f"[bold green]Started[/bold green] {tournament.name} ({tournament.total_weeks} weeks)")


@tournament_app.command("attend")
def tournament_attend(
    ctx: typer.Context,
    players: Annotated[list[str] | None, typer.Argument(help="Present players (default: everyone)")] = None,
    achievements: Annotated[
        bool, typer.Option("--achievements/--no-achievements", help="Count achievements this week")
    ] = True,
) -> None:
    with _league(ctx) as league:
        _require_active(league)
        if players:
            present = [_require_player(league, ref).id for ref in players]
        else:
            present = [p.id for p in league.roster.players()]
        league.session.confirm_attendance(present, achievements)
        print_info(f"{len(present)} players present; achievements {'on' if achievements else 'off'}")


@tournament_app.command("add-player")
def tournament_add_player(ctx: typer.Context, name: Annotated[str, typer.Argument(help="Player name")]) -> None:
    with _league(ctx) as league:
        _require_active(league)
        player = league.session.add_weekly_player(name)
        if player is None:
            print_error("player name must not be empty")
            raise typer.Exit(code=1)
        print_info(f"[bold green]Added[/bold green] {player.name} to this week")


@tournament_app.command("pods")
def tournament_pods(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        _require_active(league)
        pods = league.session.generate_pods()
        tournament = _require_active(league)
        print_pods(pods, tournament.round_placements, _names(league))


@tournament_app.command("place")
def tournament_place(
    ctx: typer.Context,
    player: Annotated[str, typer.Argument(help="Player id or name")],
    place: Annotated[int, typer.Argument(help="Finishing place")],
) -> None:
    with _league(ctx) as league:
        _require_active(league)
        found = _require_player(league, player)
        if not league.session.set_placement(found.id, place):
            print_error(f"{found.name} is not present this week")
            raise typer.Exit(code=1)
        print_info(f"{found.name}: place {place}")


@tournament_app.command("check")
def tournament_check(
    ctx: typer.Context,
    player: Annotated[str, typer.Argument(help="Player id or name")],
    achievement: Annotated[str, typer.Argument(help="Achievement id or name")],
    uncheck: Annotated[bool, typer.Option("--uncheck", help="Remove the check")] = False,
) -> None:
    with _league(ctx) as league:
        _require_active(league)
        found_player = _require_player(league, player)
        found_achievement = _require_achievement(league, achievement)
        league.session.set_achievement_check(found_player.id, found_achievement.id, not uncheck)
        verb = "unchecked" if uncheck else "checked"
        print_info(f"{found_player.name}: {found_achievement.name} {verb}")


@tournament_app.command("clear")
def tournament_clear(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        _require_active(league)
        league.session.clear_round_data()
        print_info("Round placements and checks cleared")


@tournament_app.command("finalize")
def tournament_finalize(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        _require_active(league)
        snapshot = league.session.finalize_round()
        if snapshot is None:
            print_info("Nothing to finalize.")
            return
        print_snapshot(snapshot, _names(league), verb="Finalized")


@tournament_app.command("next")
def tournament_next(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        _require_active(league)
        league.session.next_round()
        tournament = _require_active(league)
        if tournament.is_completed:
            print_info(f"[bold green]{tournament.name} complete![/bold green]")
            print_standings(league.stats.standings(tournament.id), title="Final standings")
        else:
            print_info(f"Week {tournament.current_week}, round {tournament.current_round}")


@tournament_app.command("undo")
def tournament_undo(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        _require_active(league)
        snapshot = league.session.undo_last_pod()
        if snapshot is None:
            print_info("Nothing to undo.")
            return
        print_snapshot(snapshot, _names(league), verb="Undid")


@tournament_app.command("edit")
def tournament_edit(
    ctx: typer.Context,
    place: Annotated[list[str] | None, typer.Option("--place", help="PLAYER=PLACE correction")] = None,
    check: Annotated[list[str] | None, typer.Option("--check", help="PLAYER=ACHIEVEMENT earned")] = None,
    uncheck: Annotated[list[str] | None, typer.Option("--uncheck", help="PLAYER=ACHIEVEMENT not earned")] = None,
) -> None:
    """Correct the last finalized round; unspecified values keep their current state."""
    with _league(ctx) as league:
        _require_active(league)
        last = league.session.last_round()
        if last is None:
            print_info("No finalized round to edit.")
            return
        placements = dict(last.placements)
        checks = {(c.player_id, c.achievement_id) for c in last.achievement_checks}
        for raw in place or []:
            player_ref, value = _split_pair(raw, "placement")
            try:
                placements[_require_player(league, player_ref).id] = int(value)
            except ValueError:
                print_error(f"invalid place '{value}'")
                raise typer.Exit(code=1)
        for raw in check or []:
            player_ref, achievement_ref = _split_pair(raw, "check")
            checks.add((_require_player(league, player_ref).id, _require_achievement(league, achievement_ref).id))
        for raw in uncheck or []:
            player_ref, achievement_ref = _split_pair(raw, "check")
            checks.discard(
                (_require_player(league, player_ref).id, _require_achievement(league, achievement_ref).id)
            )
        snapshot = league.session.apply_edited_round(placements, checks)
        if snapshot is not None:
            print_snapshot(snapshot, _names(league), verb="Edited")


@tournament_app.command("close-week")
def tournament_close_week(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        _require_active(league)
        league.session.close_weekly_standings()
        print_info(f"Screen: {league.session.state().screen.value}")


@tournament_app.command("exit-standings")
def tournament_exit_standings(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        _require_active(league)
        league.session.exit_weekly_standings()


@tournament_app.command("close-standings")
def tournament_close_standings(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        league.session.close_tournament_standings()
        print_info("Back to tournaments")


@tournament_app.command("archive")
def tournament_archive(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        tournament = _require_active(league)
        league.session.archive_tournament()
        print_info(f"[bold]Archived[/bold] {tournament.name}")


@tournament_app.command("status")
def tournament_status(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        tournament = league.session.active_tournament()
        if tournament is None:
            print_info("No active tournament.")
            return
        names = _names(league)
        print_tournament_status(tournament, league.session.state().screen.value, names)
        if tournament.current_pods:
            print_pods(tournament.current_pods, tournament.round_placements, names)


# --- stats -----------------------------------------------------------------------

stats_app = typer.Typer(name="stats", help="Read-only league statistics")
app.add_typer(stats_app, name="stats")


@stats_app.command("standings")
def stats_standings(
    ctx: typer.Context,
    tournament_id: Annotated[str | None, typer.Option("--tournament", help="Tournament id (default: active)")] = None,
) -> None:
    with _league(ctx) as league:
        if tournament_id is None:
            tournament_id = _require_active(league).id
        tournament = league.store.tournaments.get_by_id(tournament_id)
        if tournament is None:
            print_error(f"no tournament with id '{tournament_id}'")
            raise typer.Exit(code=1)
        print_standings(league.stats.standings(tournament.id), title=f"{tournament.name} standings")


@stats_app.command("player")
def stats_player(ctx: typer.Context, player: Annotated[str, typer.Argument(help="Player id or name")]) -> None:
    with _league(ctx) as league:
        found = _require_player(league, player)
        summary = league.stats.player_summary(found.id)
        if summary is not None:
            print_player_summary(summary)


@stats_app.command("h2h")
def stats_h2h(
    ctx: typer.Context,
    player1: Annotated[str, typer.Argument(help="First player")],
    player2: Annotated[str, typer.Argument(help="Second player")],
) -> None:
    with _league(ctx) as league:
        first = _require_player(league, player1)
        second = _require_player(league, player2)
        print_head_to_head(first.name, second.name, league.stats.head_to_head(first.id, second.id))


@stats_app.command("achievements")
def stats_achievements(ctx: typer.Context) -> None:
    with _league(ctx) as league:
        print_achievement_leaderboard(league.stats.achievement_leaderboard())
