"""
TalentScope Command Line Interface

Provides CLI commands for inspecting configuration, preparing the database
indexes, and printing visibility sets and pipeline reports.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="talentscope",
    help="Hierarchical visibility and pipeline reports for a recruitment tracker",
    add_completion=False,
)
console = Console()


@app.callback()
def main():
    """Configure logging before any command runs."""
    from talentscope.utils.logger import setup_logging

    setup_logging()


@app.command()
def version():
    """Show application version."""
    from talentscope import __version__, __app_name__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from talentscope.utils.config import get_settings

    settings = get_settings()

    table = Table(title="TalentScope Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Candidates Collection", settings.database.candidates_collection)
    table.add_row("Default Page Size", str(settings.reports.default_page_size))
    table.add_row("Open Job Status", settings.reports.open_job_status)
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Create the indexes the reporting queries rely on."""
    import asyncio

    from pymongo.errors import PyMongoError

    from talentscope.data.database import get_database_manager

    console.print("[yellow]Initializing database indexes...[/yellow]")

    try:
        db_manager = get_database_manager()

        console.print("  Checking database connection...")
        if not db_manager.check_sync_connection():
            console.print("[red]Error: Could not connect to MongoDB.[/red]")
            console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
            raise typer.Exit(1)

        console.print("  [green]✓[/green] Connected to MongoDB")

        console.print("  Creating indexes...")
        asyncio.run(db_manager.ensure_indexes())
        console.print("  [green]✓[/green] Indexes created")

        console.print("\n[green]Database initialized successfully![/green]")

    except PyMongoError as e:
        console.print(f"[red]Error initializing database: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def visible_users(
    actor_id: str = typer.Argument(..., help="Id of the acting user"),
    designation: str = typer.Option(..., "--designation", "-d", help="Actor designation"),
):
    """List the users whose work an actor may see."""
    from pymongo.errors import PyMongoError

    from talentscope.core.reporting import get_report_service

    try:
        service = get_report_service()
        resolver = service.hierarchy()
        visible = resolver.resolve(actor_id, designation)
    except PyMongoError as e:
        console.print(f"[red]Error reading users: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Visible users for {actor_id} ({designation})")
    table.add_column("Id", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Designation", style="green")

    for uid in sorted(visible, key=str):
        user = resolver.get_user(uid)
        table.add_row(str(uid), user.name if user else "?", user.designation if user else "?")

    console.print(table)
    console.print(f"\n[dim]{len(visible)} user(s)[/dim]")


def _build_filters(
    page: int,
    limit: Optional[int],
    search: str,
    status: Optional[str],
    start: Optional[str],
    end: Optional[str],
    shortcut: Optional[str],
    local_mode: str,
    local_start: Optional[str],
    local_end: Optional[str],
):
    from talentscope.core.reporting import DateRange, ReportFilters

    date_range = DateRange.from_shortcut(shortcut) if shortcut else DateRange.parse(start, end)
    values = {
        "page": page,
        "search": search,
        "status_filter": status,
        "date_range": date_range,
        "local_mode": local_mode,
        "local_range": DateRange.parse(local_start, local_end),
    }
    if limit is not None:
        values["limit"] = limit
    return ReportFilters(**values)


def _print_page(title: str, page, lineup: bool = False) -> None:
    from talentscope.core.reporting import column_keys

    keys = column_keys()
    table = Table(title=title)
    if lineup:
        table.add_column("Uploaded", style="dim")
        table.add_column("Recruiter", style="cyan")
    else:
        table.add_column("Received", style="dim")
    table.add_column("Client", style="cyan")
    table.add_column("Job", style="green")
    if not lineup:
        table.add_column("Positions", justify="right")
    for key in keys:
        table.add_column(key, justify="right")

    for row in page.rows:
        data = row.to_dict()
        leading = [data["uploadDate"], row.recruiter_name or ""] if lineup else [data["dateReceived"] or ""]
        leading += [row.client_name, row.job_title]
        if not lineup:
            leading.append(str(row.no_of_positions or ""))
        table.add_row(*leading, *(str(row.counts.get(key, 0)) for key in keys))

    console.print(table)

    totals = " | ".join(f"{key}: {page.totals.get(key, 0)}" for key in keys)
    console.print(f"[bold]Totals[/bold] {totals}")
    console.print(
        f"[dim]Page {page.current_page} of {page.total_pages} "
        f"({page.total_count} row(s))[/dim]"
    )


@app.command()
def client_report(
    actor_id: str = typer.Argument(..., help="Id of the acting user"),
    designation: str = typer.Option(..., "--designation", "-d", help="Actor designation"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Rows per page"),
    search: str = typer.Option("", "--search", "-s", help="Search text"),
    status: Optional[str] = typer.Option(None, "--status", help="Job status ('all' for every status)"),
    start: Optional[str] = typer.Option(None, "--from", help="Job created on or after (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--to", help="Job created on or before (YYYY-MM-DD)"),
    shortcut: Optional[str] = typer.Option(None, "--range", help="T, Y, W or L"),
    local_mode: str = typer.Option("none", "--local-mode", help="none, total, status or both"),
    local_start: Optional[str] = typer.Option(None, "--local-from", help="Local window start"),
    local_end: Optional[str] = typer.Option(None, "--local-to", help="Local window end"),
):
    """Print the client/job pipeline report."""
    from pymongo.errors import PyMongoError

    from talentscope.core.reporting import get_report_service

    try:
        filters = _build_filters(
            page, limit, search, status, start, end, shortcut, local_mode, local_start, local_end
        )
        result = get_report_service().client_job_report(actor_id, designation, filters)
    except ValueError as e:
        console.print(f"[red]Invalid filters: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except PyMongoError as e:
        console.print(f"[red]Error building report: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    _print_page("Client / Job Report", result)


@app.command()
def lineup_report(
    actor_id: str = typer.Argument(..., help="Id of the acting user"),
    designation: str = typer.Option(..., "--designation", "-d", help="Actor designation"),
    page: int = typer.Option(1, "--page", "-p", help="Page number"),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Rows per page"),
    search: str = typer.Option("", "--search", "-s", help="Search text"),
    status: Optional[str] = typer.Option(None, "--status", help="Job status filter"),
    start: Optional[str] = typer.Option(None, "--from", help="Uploaded on or after (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--to", help="Uploaded on or before (YYYY-MM-DD)"),
    shortcut: Optional[str] = typer.Option(None, "--range", help="T, Y, W or L"),
    local_mode: str = typer.Option("none", "--local-mode", help="none, total, status or both"),
    local_start: Optional[str] = typer.Option(None, "--local-from", help="Local window start"),
    local_end: Optional[str] = typer.Option(None, "--local-to", help="Local window end"),
):
    """Print the daily lineup report."""
    from pymongo.errors import PyMongoError

    from talentscope.core.reporting import get_report_service

    try:
        filters = _build_filters(
            page, limit, search, status, start, end, shortcut, local_mode, local_start, local_end
        )
        result = get_report_service().daily_lineup_report(actor_id, designation, filters)
    except ValueError as e:
        console.print(f"[red]Invalid filters: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except PyMongoError as e:
        console.print(f"[red]Error building report: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    _print_page("Daily Lineup Report", result, lineup=True)


if __name__ == "__main__":
    app()
