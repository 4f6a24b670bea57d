from rich.console import Console
from rich.table import Table

from blaseball_stats.services.jobs import CountReport, LeadersJobReport, StandingsJobReport, StatJobReport

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_stat_report(report: StatJobReport) -> None:
    console.print(
        f"[bold green]Reduced[/bold green] {report.role} stats for {report.players} players"
        f" (reprocessing from season {report.from_season})"
    )
    table = Table(show_header=True, header_style="bold")
    table.add_column("Ticks read", justify="right")
    table.add_column("Processed", justify="right")
    table.add_column("Below floor", justify="right")
    table.add_column("Duplicates", justify="right")
    table.add_column("Snapshots", justify="right")
    table.add_column("Events", justify="right")
    table.add_column("Incinerations", justify="right")
    reduce = report.reduce
    table.add_row(
        str(reduce.ticks_read),
        str(reduce.ticks_processed),
        str(reduce.ticks_below_floor),
        str(reduce.duplicate_ticks + reduce.duplicate_snapshots),
        str(reduce.snapshots_processed),
        str(reduce.events_applied),
        str(reduce.incinerations),
    )
    console.print(table)
    console.print(f"  Roster size: {report.roster_size}")


def print_leaders_report(report: LeadersJobReport) -> None:
    console.print(
        f"[bold green]Ranked[/bold green] {report.categories} categories across {report.seasons} seasons"
    )


def print_standings_report(report: StandingsJobReport) -> None:
    console.print(
        f"[bold green]Built[/bold green] standings for {report.seasons} seasons ({report.teams} team records)"
    )
    console.print(f"  Seasons fetched: {report.seasons_fetched}")
    if report.structure_refreshed:
        console.print("  League structure refreshed")


def print_count_report(label: str, report: CountReport) -> None:
    console.print(f"[bold green]Wrote[/bold green] {report.written} {label}")
