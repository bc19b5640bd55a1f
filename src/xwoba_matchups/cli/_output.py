from rich.console import Console
from rich.table import Table

from xwoba_matchups.domain.load_log import LoadLog
from xwoba_matchups.domain.matchup import DailyMatchup, GameMatchups, MatchupRunReport, ProbablePitcher, ScheduleRefreshReport

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_ingest_result(log: LoadLog) -> None:
    console.print(f"[bold green]Ingest complete:[/bold green] {log.rows_loaded} rows loaded into {log.target_table}")
    console.print(f"  Source: {log.source_detail}")
    console.print(f"  Status: {log.status}")
    if not log.succeeded and log.error_message:
        console.print(f"  [red]Error: {log.error_message}[/red]")


def print_refresh_report(report: ScheduleRefreshReport) -> None:
    console.print(
        f"[bold green]Schedule refreshed:[/bold green] {report.games_written} games"
        f" from {report.start_date} over {report.days} day(s)"
    )
    for day in report.failed_dates:
        console.print(f"  [red]Failed: {day}[/red]")


def print_run_report(report: MatchupRunReport) -> None:
    console.print(f"[bold green]Matchups computed[/bold green] for [bold]{report.game_date}[/bold]")
    console.print(f"  Games: {report.games_resolved}")
    console.print(f"  Pairs generated: {report.pairs_generated}")
    console.print(f"  Rows written: {report.rows_written}")
    if report.rows_pruned:
        console.print(f"  Stale rows pruned: {report.rows_pruned}")
    for reason, count in sorted(report.skip_counts().items()):
        console.print(f"  Skipped ({reason}): {count}")


def _fmt(value: float | None, fmt: str = ".3f") -> str:
    return format(value, fmt) if value is not None else "-"


def _pitcher_label(pitcher: ProbablePitcher | None) -> str:
    if pitcher is None:
        return "TBD"
    name = pitcher.full_name or str(pitcher.player_id)
    return f"{name} ({pitcher.throws})" if pitcher.throws else name


def _matchup_table(title: str, matchups: tuple[DailyMatchup, ...]) -> Table:
    table = Table(title=title, show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Batter")
    table.add_column("B", justify="center")
    table.add_column("xwOBA", justify="right")
    table.add_column("EV", justify="right")
    table.add_column("LA", justify="right")
    table.add_column("Brl/PA", justify="right")
    table.add_column("HH%", justify="right")
    table.add_column("K%", justify="right")
    table.add_column("HR/PA", justify="right")
    for m in matchups:
        table.add_row(
            str(m.lineup_position) if m.lineup_position is not None else "-",
            m.batter_name or str(m.batter_id),
            m.batter_hand,
            _fmt(m.avg_xwoba),
            _fmt(m.avg_exit_velocity, ".1f"),
            _fmt(m.avg_launch_angle, ".1f"),
            _fmt(m.avg_barrels_per_pa),
            _fmt(m.avg_hard_hit_pct),
            _fmt(m.avg_k_percent),
            _fmt(m.avg_hr_per_pa, ".4f"),
        )
    return table


def print_game_matchups(games: list[GameMatchups]) -> None:
    if not games:
        console.print("No games found.")
        return
    for game in games:
        venue = game.venue.name if game.venue is not None else "venue unknown"
        console.print(
            f"\n[bold]{game.away_team} @ {game.home_team}[/bold]"
            f"  {game.game_datetime_utc or ''}  [dim]{game.detailed_state or ''} | {venue}[/dim]"
        )
        console.print(f"  {game.away_team}: {_pitcher_label(game.away_pitcher)}")
        console.print(f"  {game.home_team}: {_pitcher_label(game.home_pitcher)}")
        if game.away_batters:
            console.print(_matchup_table(f"{game.away_team} batters vs {game.home_team} starter", game.away_batters))
        if game.home_batters:
            console.print(_matchup_table(f"{game.home_team} batters vs {game.away_team} starter", game.home_batters))


def print_top_matchups(matchups: list[DailyMatchup]) -> None:
    if not matchups:
        console.print("No matchups found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Batter")
    table.add_column("Team")
    table.add_column("Pitcher")
    table.add_column("Team")
    table.add_column("Hands", justify="center")
    table.add_column("xwOBA", justify="right")
    table.add_column("HR/PA", justify="right")
    for m in matchups:
        table.add_row(
            m.batter_name or str(m.batter_id),
            m.batter_team,
            m.pitcher_name or str(m.pitcher_id),
            m.pitcher_team,
            f"{m.batter_side}/{m.pitcher_hand}",
            _fmt(m.avg_xwoba),
            _fmt(m.avg_hr_per_pa, ".4f"),
        )
    console.print(table)
