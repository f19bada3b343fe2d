"""
Talent-Match Command Line Interface

Provides CLI commands for managing the Talent-Match service,
including database setup, manual re-matching and the API server.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

# Ensure src is in path
sys.path.insert(0, str(Path(__file__).parent.parent))

app = typer.Typer(
    name="talent-match",
    help="Classification-based candidate auto-matching CLI",
    add_completion=False,
)
console = Console()


@app.command()
def version():
    """Show application version."""
    from src import __version__, __app_name__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from src.utils.config import get_settings

    settings = get_settings()

    table = Table(title="Talent-Match Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Pool Strategy", settings.matching.pool_strategy)
    table.add_row("Max Concurrency", str(settings.matching.max_concurrency))
    table.add_row(
        "Score Weights",
        f"base {settings.matching.base_score} / skills {settings.matching.skills_weight}"
        f" / experience {settings.matching.experience_weight}",
    )
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required collections and indexes."""
    import asyncio
    from src.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    try:
        db_manager = get_database_manager()

        # Check connection first
        console.print("  Checking database connection...")
        if not db_manager.check_sync_connection():
            console.print("[red]Error: Could not connect to MongoDB.[/red]")
            console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
            raise typer.Exit(1)

        console.print("  [green]✓[/green] Connected to MongoDB")

        # Create indexes
        console.print("  Creating indexes...")
        asyncio.run(db_manager.ensure_indexes())
        console.print("  [green]✓[/green] Indexes created")

        console.print("\n[green]Database initialized successfully![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def rematch(
    job_id: str = typer.Argument(..., help="ID of the job to re-match"),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c", min=1, help="Candidates scored in parallel"
    ),
):
    """Run auto-matching for a job and show the scores."""
    import asyncio
    from bson import ObjectId
    from src.core.matching import MatchOrchestrator, get_matching_store
    from src.data.database import get_database_manager
    from src.data.exceptions import StorageError
    from src.utils.logger import setup_logging

    setup_logging()

    if not ObjectId.is_valid(job_id):
        console.print(f"[red]Error: Invalid job ID: {job_id}[/red]")
        raise typer.Exit(1)

    db_manager = get_database_manager()
    if not db_manager.check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)

    orchestrator = MatchOrchestrator(get_matching_store(), max_concurrency=concurrency)

    console.print(f"[yellow]Matching candidates for job {job_id}...[/yellow]")
    try:
        result = asyncio.run(orchestrator.run(job_id))
    except StorageError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    finally:
        db_manager.close_all()

    if result.matches is None:
        console.print(f"[yellow]{result.message}[/yellow]")
        return

    if result.matches:
        table = Table(title=f"Matches for job {job_id}")
        table.add_column("Candidate", style="cyan")
        table.add_column("Score", justify="right", style="green")
        for match in sorted(result.matches, key=lambda m: m.match_score, reverse=True):
            table.add_row(str(match.candidate_id), str(match.match_score))
        console.print(table)

    color = "yellow" if result.cancelled else "green"
    console.print(f"[{color}]{result.message}[/{color}]")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start the HTTP API server."""
    import uvicorn
    from src.utils.config import get_settings
    from src.utils.logger import setup_logging

    settings = get_settings()
    setup_logging()

    host = host or settings.api.host
    port = port or settings.api.port
    console.print(f"[green]Serving Talent-Match API on http://{host}:{port}[/green]")

    uvicorn.run(
        "src.api:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.logging.level.lower(),
    )


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
