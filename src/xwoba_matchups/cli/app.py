from pathlib import Path
from typing import Annotated

import typer

from xwoba_matchups.cli._logging import configure_logging
from xwoba_matchups.cli._output import (
    console,
    print_error,
    print_game_matchups,
    print_ingest_result,
    print_refresh_report,
    print_run_report,
    print_top_matchups,
)
from xwoba_matchups.cli.factory import build_compute_container, build_ingest_container, build_report_container
from xwoba_matchups.config import Settings, create_config, load_settings
from xwoba_matchups.domain.result import Err, Ok
from xwoba_matchups.ingest.column_maps import make_savant_split_mapper, parse_savant_filename
from xwoba_matchups.ingest.csv_source import CsvSource
from xwoba_matchups.ingest.date_utils import parse_date, today_in
from xwoba_matchups.ingest.loader import Loader

app = typer.Typer(name="xwoba", help="Daily batter-vs-pitcher xwOBA matchups")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config: Annotated[str, typer.Option("--config", help="YAML config file")] = "xwoba.yaml",
    db: Annotated[str | None, typer.Option("--db", help="SQLite database path (overrides db.path)")] = None,
) -> None:
    """Daily batter-vs-pitcher xwOBA matchups."""
    configure_logging(verbose=verbose)
    overrides = {"db": {"path": db}} if db is not None else None
    ctx.obj = load_settings(create_config(yaml_path=config, overrides=overrides))
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


def _settings(ctx: typer.Context) -> Settings:
    settings = ctx.find_root().obj
    assert isinstance(settings, Settings)
    return settings


def _resolve_date(value: str | None, settings: Settings) -> str:
    if value is None:
        return today_in(settings.timezone).isoformat()
    try:
        return parse_date(value).isoformat()
    except ValueError as exc:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from exc


_DateOpt = Annotated[str | None, typer.Option("--date", help="Game date YYYY-MM-DD (default: today in schedule.timezone)")]


# --- ingest subcommand group ---

ingest_app = typer.Typer(name="ingest", help="Load schedule and split statistics")
app.add_typer(ingest_app, name="ingest")


@ingest_app.command("schedule")
def ingest_schedule(
    ctx: typer.Context,
    start: Annotated[str | None, typer.Option("--start", help="First date YYYY-MM-DD (default: today)")] = None,
    days: Annotated[int | None, typer.Option("--days", help="Number of days (default: schedule.refresh_days)")] = None,
) -> None:
    """Refresh stored games, probable pitchers and posted lineups."""
    settings = _settings(ctx)
    start_date = parse_date(_resolve_date(start, settings))
    with build_ingest_container(settings) as container:
        report = container.schedule_refresher.refresh(start_date, days or settings.refresh_days)
    print_refresh_report(report)
    if report.failed_dates:
        raise typer.Exit(code=1)


def _expand_csv_paths(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.glob("*.csv")))
        else:
            files.append(path)
    return files


@ingest_app.command("splits")
def ingest_splits(
    ctx: typer.Context,
    paths: Annotated[list[Path], typer.Argument(help="Savant CSV files or directories of them")],
) -> None:
    """Load Baseball Savant split exports named savant_stats_<season>_<batter|pitcher>_vs_<L|R>H.csv."""
    settings = _settings(ctx)
    failed = False
    with build_ingest_container(settings) as container:
        for csv_path in _expand_csv_paths(paths):
            parsed = parse_savant_filename(csv_path)
            if parsed is None:
                print_error(f"{csv_path}: file name does not identify season, role and hand")
                failed = True
                continue
            season, role, hand = parsed
            loader = Loader(
                CsvSource(csv_path, required_columns=("player_id",)),
                container.split_repo,
                container.log_repo,
                make_savant_split_mapper(season, role, hand),
                "player_split",
                conn=container.conn,
            )
            match loader.load():
                case Ok(log):
                    print_ingest_result(log)
                case Err(e):
                    print_error(e.message)
                    failed = True
    if failed:
        raise typer.Exit(code=1)


# --- compute subcommand group ---

compute_app = typer.Typer(name="compute", help="Compute matchups and composite splits")
app.add_typer(compute_app, name="compute")


@compute_app.command("matchups")
def compute_matchups(
    ctx: typer.Context,
    date: _DateOpt = None,
    prune_stale: Annotated[
        bool | None,
        typer.Option("--prune-stale/--keep-stale", help="Delete rows for this date's games not produced by this run"),
    ] = None,
) -> None:
    """Compute batter-vs-probable-starter matchups for a date and upsert them."""
    settings = _settings(ctx)
    game_date = _resolve_date(date, settings)
    with build_compute_container(settings) as container:
        match container.matchup_pipeline(prune_stale=prune_stale).run(game_date):
            case Ok(report):
                print_run_report(report)
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@compute_app.command("weighted-splits")
def compute_weighted_splits(ctx: typer.Context) -> None:
    """Build season-0 composite splits from the configured recent seasons."""
    settings = _settings(ctx)
    with build_compute_container(settings) as container:
        count = container.weighted_split_service.compute_and_persist()
        container.conn.commit()
    console.print(f"  {count} composite split(s) written")
    console.print("[bold green]Done.[/bold green]")


# --- report subcommand group ---

report_app = typer.Typer(name="report", help="Show stored matchups")
app.add_typer(report_app, name="report")


@report_app.command("matchups")
def report_matchups(ctx: typer.Context, date: _DateOpt = None) -> None:
    """Games for a date with both sides' matchups, in batting-order order."""
    settings = _settings(ctx)
    game_date = _resolve_date(date, settings)
    with build_report_container(settings) as container:
        games = container.report_service.games_for_date(game_date)
    print_game_matchups(games)


@report_app.command("top")
def report_top(
    ctx: typer.Context,
    date: _DateOpt = None,
    top: Annotated[int, typer.Option("--top", help="Number of matchups to show")] = 25,
) -> None:
    """Best matchups of the day by averaged xwOBA."""
    settings = _settings(ctx)
    game_date = _resolve_date(date, settings)
    with build_report_container(settings) as container:
        matchups = container.report_service.top_matchups(game_date, top)
    print_top_matchups(matchups)
