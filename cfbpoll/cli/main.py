"""CLI interface for the college-football ranking engine.

Provides commands for generating rankings, showing team detail,
comparing snapshots, all-time lists and snapshot validation.
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cfbpoll.data.assembler import (
    assemble_season_data,
    cutoff_label,
    postseason_week,
    week_label,
)
from cfbpoll.data.loader import (
    dump_rankings_result,
    load_config_file,
    load_rankings_result,
    load_season_file,
)
from cfbpoll.data.models import EngineConfig, Record, RankingsResult, SeasonData
from cfbpoll.data.profiles import get_profile, get_profile_description, list_profiles
from cfbpoll.ranking.all_time import build_all_time
from cfbpoll.ranking.comparison import SnapshotComparator
from cfbpoll.ranking.engine import InvalidSeasonDataError, RankingEngine
from cfbpoll.ranking.team_detail import get_team_detail
from cfbpoll.validation import check_rankings

app = typer.Typer(
    name="cfbpoll",
    help="College football rankings from records and propagated strength of schedule.",
)
console = Console()


# =============================================================================
# Helper Functions (can be mocked in tests)
# =============================================================================


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load_config(
    profile: str | None = None,
    config_file: str | None = None,
) -> EngineConfig:
    """
    Load configuration from profile or file.

    Args:
        profile: Profile name (standard, results_first, schedule_first, no_stabilization)
        config_file: Path to JSON config file

    Returns:
        EngineConfig instance
    """
    if config_file:
        try:
            return load_config_file(config_file)
        except FileNotFoundError:
            console.print(f"[red]Config file not found: {config_file}[/red]")
            raise typer.Exit(1)
        except ValidationError as e:
            console.print(f"[red]Invalid config file: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    if profile:
        try:
            return get_profile(profile)
        except ValueError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)

    return EngineConfig()


def _load_snapshot(path: str) -> RankingsResult:
    try:
        return load_rankings_result(path)
    except FileNotFoundError:
        console.print(f"[red]Rankings file not found: {path}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid rankings file {path}: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def load_season_data(season_file: str, week: int | None = None) -> SeasonData:
    """
    Load a season file and assemble the SeasonData for a week.

    Args:
        season_file: Path to the season JSON file
        week: Cutoff week (defaults to the final week, bowls included)

    Returns:
        SeasonData
    """
    try:
        raw = load_season_file(season_file)
    except FileNotFoundError:
        console.print(f"[red]Season file not found: {season_file}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Invalid season file: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if week is None:
        week = postseason_week(raw.regular_games)

    return assemble_season_data(
        raw.season, week, raw.teams, raw.regular_games, raw.postseason_games
    )


def get_rankings(
    season_data: SeasonData,
    config: EngineConfig | None = None,
    prior: RankingsResult | None = None,
) -> RankingsResult:
    """
    Run the engine on assembled season data.

    Args:
        season_data: Season data for one week
        config: Optional EngineConfig
        prior: Optional prior-season final rankings

    Returns:
        RankingsResult
    """
    engine = RankingEngine(config=config)
    try:
        return engine.rank(season_data, prior=prior)
    except InvalidSeasonDataError as e:
        console.print(f"[red]Invalid season data: {escape(str(e))}[/red]")
        raise typer.Exit(1)


def _record(record: Record) -> str:
    return f"{record.wins}-{record.losses}"


# =============================================================================
# CLI Commands
# =============================================================================


@app.command()
def rank(
    season_file: Annotated[str, typer.Argument(help="Path to season JSON file")],
    week: Annotated[int | None, typer.Option("--week", "-w", help="Cutoff week (default: final)")] = None,
    top: Annotated[int, typer.Option("--top", "-t", help="Number of teams to display")] = 25,
    prior_file: Annotated[
        str | None,
        typer.Option("--prior", help="Prior season's final rankings JSON (early-season blending)"),
    ] = None,
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-p", help="Config profile (standard, results_first, schedule_first, no_stabilization)"),
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("--config", "-c", help="Path to JSON config file"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Write the full rankings as JSON"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Generate rankings for a season and week."""
    setup_logging(verbose)
    config = _load_config(profile=profile, config_file=config_file)
    prior = _load_snapshot(prior_file) if prior_file else None

    season_data = load_season_data(season_file, week)
    result = get_rankings(season_data, config=config, prior=prior)

    if output:
        Path(output).write_text(dump_rankings_result(result))
        console.print(f"[green]Wrote {len(result.rankings)} teams to {output}[/green]")

    if not result.rankings:
        console.print("[yellow]No rankings available for the specified parameters.[/yellow]")
        return

    table = Table(title=f"College Football Rankings - {result.season} {cutoff_label(season_data)}")
    table.add_column("Rank", justify="right", style="cyan")
    table.add_column("Team", style="bold")
    table.add_column("Conf")
    table.add_column("Record", justify="center")
    table.add_column("Rating", justify="right", style="green")
    table.add_column("SOS", justify="right")
    table.add_column("Wtd SOS", justify="right")
    table.add_column("SOS Rank", justify="right")

    for t in result.rankings[:top]:
        table.add_row(
            str(t.rank),
            t.team_name,
            t.conference,
            f"{t.wins}-{t.losses}",
            f"{t.rating:.4f}",
            f"{t.strength_of_schedule:.3f}",
            f"{t.weighted_sos:.3f}",
            str(t.sos_ranking),
        )

    console.print(table)


@app.command()
def team(
    season_file: Annotated[str, typer.Argument(help="Path to season JSON file")],
    team_name: Annotated[str, typer.Argument(help="Team name (e.g., Georgia)")],
    week: Annotated[int | None, typer.Option("--week", "-w", help="Cutoff week (default: final)")] = None,
    prior_file: Annotated[str | None, typer.Option("--prior", help="Prior season's final rankings JSON")] = None,
    profile: Annotated[str | None, typer.Option("--profile", "-p", help="Config profile")] = None,
    config_file: Annotated[str | None, typer.Option("--config", "-c", help="Path to JSON config file")] = None,
) -> None:
    """Show rating breakdown, record splits and schedule for a team."""
    config = _load_config(profile=profile, config_file=config_file)
    prior = _load_snapshot(prior_file) if prior_file else None

    season_data = load_season_data(season_file, week)
    result = get_rankings(season_data, config=config, prior=prior)
    detail = get_team_detail(result, season_data, team_name)

    if detail is None:
        console.print(f"[red]Team '{team_name}' not found or no data available.[/red]")
        raise typer.Exit(1)

    ranked = detail.ranked_team

    # Header
    console.print()
    console.print(f"[bold cyan]{ranked.team_name.upper()}[/bold cyan] ({ranked.conference})")
    console.print(f"Rank: [bold]#{ranked.rank}[/bold]  Record: {ranked.wins}-{ranked.losses}")
    console.print(f"Rating: [green]{ranked.rating:.4f}[/green]")
    console.print(
        f"SOS: {ranked.strength_of_schedule:.3f}  Weighted SOS: {ranked.weighted_sos:.3f} "
        f"(#{ranked.sos_ranking})"
    )
    console.print()

    components = Table(title="Rating Components")
    components.add_column("Component", style="bold")
    components.add_column("Contribution", justify="right", style="green")
    for name, value in ranked.rating_components.items():
        components.add_row(name, f"{value:.4f}")
    console.print(components)

    splits = Table(title="Record Splits")
    splits.add_column("Split", style="bold")
    splits.add_column("Record", justify="center")
    d = ranked.details
    for label, record in (
        ("Home", d.home),
        ("Away", d.away),
        ("Neutral", d.neutral),
        ("vs 1-10", d.vs_rank_1_to_10),
        ("vs 11-25", d.vs_rank_11_to_25),
        ("vs 26-50", d.vs_rank_26_to_50),
        ("vs 51-100", d.vs_rank_51_to_100),
        ("vs 101+", d.vs_rank_101_plus),
    ):
        splits.add_row(label, _record(record))
    console.print(splits)

    if detail.schedule:
        schedule = Table(title="Schedule")
        schedule.add_column("Week", justify="right")
        schedule.add_column("Opponent", style="bold")
        schedule.add_column("Opp Rank", justify="right")
        schedule.add_column("Location", justify="center")
        schedule.add_column("Result", justify="center")

        for entry in detail.schedule:
            label = week_label(entry.week, entry.season_type)
            if entry.completed:
                outcome = "[green]W[/green]" if entry.is_win else "[red]L[/red]"
                result_label = f"{outcome} {entry.team_points}-{entry.opponent_points}"
            else:
                result_label = "-"
            schedule.add_row(
                label,
                entry.opponent,
                str(entry.opponent_rank) if entry.opponent_rank else "-",
                entry.location[:1].upper(),
                result_label,
            )

        console.print(schedule)
    else:
        console.print("[yellow]No games found.[/yellow]")


@app.command()
def compare(
    previous_file: Annotated[str, typer.Argument(help="Earlier rankings JSON")],
    current_file: Annotated[str, typer.Argument(help="Later rankings JSON")],
    limit: Annotated[int, typer.Option("--limit", "-l", help="Number of movers to show")] = 10,
) -> None:
    """Compare two ranking snapshots (e.g. week over week)."""
    previous = _load_snapshot(previous_file)
    current = _load_snapshot(current_file)

    comparator = SnapshotComparator()
    comparison = comparator.compare(previous, current)
    movers = comparator.biggest_movers(previous, current, limit=limit)

    console.print()
    console.print(
        f"[bold]Week {comparison.previous_week} -> Week {comparison.current_week}[/bold] "
        f"({comparison.teams_compared} teams)"
    )
    console.print(f"Spearman correlation: [cyan]{comparison.spearman_correlation:.3f}[/cyan]")
    console.print()

    if movers:
        table = Table(title="Biggest Movers")
        table.add_column("Team", style="bold")
        table.add_column("Previous", justify="right")
        table.add_column("Current", justify="right")
        table.add_column("Change", justify="right")

        for m in movers:
            change = f"[green]+{m.change}[/green]" if m.change > 0 else f"[red]{m.change}[/red]"
            table.add_row(m.team_name, str(m.previous_rank), str(m.current_rank), change)

        console.print(table)
    else:
        console.print("[yellow]No rank changes.[/yellow]")

    if comparison.new_teams:
        console.print(f"New: {', '.join(comparison.new_teams)}")
    if comparison.dropped_teams:
        console.print(f"Dropped: {', '.join(comparison.dropped_teams)}")


@app.command("all-time")
def all_time(
    snapshot_files: Annotated[list[str], typer.Argument(help="Final rankings JSON files, one per season")],
    top: Annotated[int, typer.Option("--top", "-t", help="Entries to show per list")] = 10,
) -> None:
    """Show all-time best teams, worst teams and hardest schedules."""
    snapshots = [_load_snapshot(path) for path in snapshot_files]
    result = build_all_time(snapshots)

    for title, entries, value in (
        ("Best Teams", result.best_teams, lambda e: f"{e.rating:.4f}"),
        ("Worst Teams", result.worst_teams, lambda e: f"{e.rating:.4f}"),
        ("Hardest Schedules", result.hardest_schedules, lambda e: f"{e.weighted_sos:.3f}"),
    ):
        table = Table(title=title)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Season", justify="right")
        table.add_column("Team", style="bold")
        table.add_column("Record", justify="center")
        table.add_column("Value", justify="right", style="green")

        for e in entries[:top]:
            table.add_row(str(e.all_time_rank), str(e.season), e.team_name, f"{e.wins}-{e.losses}", value(e))

        console.print(table)


@app.command()
def validate(
    snapshot_file: Annotated[str, typer.Argument(help="Rankings JSON file to check")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the report as JSON")] = False,
) -> None:
    """Check a rankings snapshot against its invariants."""
    snapshot = _load_snapshot(snapshot_file)
    report = check_rankings(snapshot)

    if as_json:
        console.print_json(
            json.dumps(
                {
                    "season": report.season,
                    "week": report.week,
                    "teams_checked": report.teams_checked,
                    "ok": report.ok,
                    "violations": [
                        {"check": v.check, "team_name": v.team_name, "message": v.message}
                        for v in report.violations
                    ],
                }
            )
        )
    elif report.ok:
        console.print(
            f"[green]{report.season} week {report.week}: {report.teams_checked} teams, all invariants hold[/green]"
        )
    else:
        for check, violations in report.by_check().items():
            console.print(f"[bold red]{check}[/bold red]")
            for v in violations:
                prefix = f"{v.team_name}: " if v.team_name else ""
                console.print(f"  {prefix}{v.message}")

    if not report.ok:
        raise typer.Exit(1)


@app.command()
def profiles() -> None:
    """List available configuration profiles."""
    table = Table(title="Configuration Profiles")
    table.add_column("Profile", style="cyan")
    table.add_column("Description")

    for name in list_profiles():
        table.add_row(name, get_profile_description(name))

    console.print(table)


if __name__ == "__main__":
    app()
