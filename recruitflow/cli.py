"""
RecruitFlow Command Line Interface

Provides CLI commands for inspecting and managing the hiring workflow:
database setup, job and candidate listings, fit scoring and job removal.
"""

from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from recruitflow.utils.exceptions import RecruitFlowError
from recruitflow.utils.logger import setup_logging

app = typer.Typer(
    name="recruitflow",
    help="RecruitFlow hiring workflow CLI",
    add_completion=False,
)
console = Console()

JOB_STATUS_COLORS = {
    "draft": "dim",
    "published": "green",
    "closed": "red",
}

CANDIDATE_STATUS_COLORS = {
    "new": "cyan",
    "reviewed": "yellow",
    "sent_to_manager": "green",
}


def _fail(error: RecruitFlowError) -> NoReturn:
    console.print(f"[red]Error: {error.message}[/red]")
    raise typer.Exit(1)


def _truncate(text: str, width: int) -> str:
    return text[:width] + "..." if len(text) > width else text


@app.callback()
def main():
    """RecruitFlow hiring workflow CLI."""
    setup_logging()


@app.command()
def version():
    """Show application version."""
    from recruitflow import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from recruitflow.utils.config import get_settings

    settings = get_settings()

    table = Table(title="RecruitFlow Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Transactions", str(settings.database.use_transactions))
    table.add_row("Max Page Size", str(settings.workflow.max_page_size))
    table.add_row("Forward-only Candidates", str(settings.workflow.candidate_forward_only))
    table.add_row("Application Base URL", settings.workflow.application_base_url)
    table.add_row("Resume Directory", str(settings.storage.resume_dir))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Initialize the database with required indexes."""
    from pymongo.errors import PyMongoError

    from recruitflow.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()

    console.print("  Checking database connection...")
    if not db_manager.check_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)

    console.print("  [green]✓[/green] Connected to MongoDB")

    try:
        console.print("  Creating indexes...")
        db_manager.ensure_indexes()
        console.print("  [green]✓[/green] Indexes created")
    except PyMongoError as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)

    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def jobs(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status (draft/published/closed)"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Text to find in title or description"),
    page: int = typer.Option(1, "--page", "-p", help="Page number (1-based)"),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", help="Jobs per page"),
):
    """List jobs, newest first."""
    from recruitflow.services import JobService

    try:
        result = JobService().list_jobs(
            status=status, search=search, page=page, page_size=page_size
        )
    except RecruitFlowError as e:
        _fail(e)

    if not result.items:
        console.print(f"[yellow]No jobs found.[/yellow] [dim]({result.total} total)[/dim]")
        raise typer.Exit(0)

    table = Table(
        title=f"Jobs (page {result.page} of {result.total_pages}, {result.total} total)"
    )
    table.add_column("ID", style="dim", width=24)
    table.add_column("Title", style="cyan")
    table.add_column("Status", justify="center")
    table.add_column("Skills", justify="right")
    table.add_column("Application Link")

    for job in result.items:
        status_color = JOB_STATUS_COLORS.get(job.status, "white")
        table.add_row(
            job.id,
            _truncate(job.title, 40),
            f"[{status_color}]{job.status.upper()}[/{status_color}]",
            str(len(job.performance.skills)),
            job.application_link,
        )

    console.print(table)


@app.command()
def job_stats():
    """Show job counts by status."""
    from recruitflow.services import JobService

    try:
        stats = JobService().get_job_stats()
    except RecruitFlowError as e:
        _fail(e)

    table = Table(title="Job Statistics")
    table.add_column("Status", style="cyan")
    table.add_column("Jobs", justify="right", style="green")

    table.add_row("Draft", str(stats.draft))
    table.add_row("Published", str(stats.published))
    table.add_row("Closed", str(stats.closed))
    table.add_row("[bold]Total[/bold]", f"[bold]{stats.total}[/bold]")

    console.print(table)


@app.command()
def candidates(
    job_id: str = typer.Argument(..., help="Job ID to list candidates for"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status (new/reviewed/sent_to_manager)"),
    page: int = typer.Option(1, "--page", "-p", help="Page number (1-based)"),
    page_size: Optional[int] = typer.Option(None, "--page-size", "-n", help="Candidates per page"),
):
    """List a job's candidates, newest first."""
    from recruitflow.services import CandidateService

    service = CandidateService()
    try:
        result = service.list_candidates(
            job_id, status=status, page=page, page_size=page_size
        )
    except RecruitFlowError as e:
        _fail(e)

    if not result.items:
        console.print(f"[yellow]No candidates found.[/yellow] [dim]({result.total} total)[/dim]")
        raise typer.Exit(0)

    table = Table(
        title=f"Candidates (page {result.page} of {result.total_pages}, {result.total} total)"
    )
    table.add_column("ID", style="dim", width=24)
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Status", justify="center")
    table.add_column("Fit", justify="right")

    for candidate in result.items:
        status_color = CANDIDATE_STATUS_COLORS.get(candidate.status, "white")
        fit = str(candidate.fit_score.overall_score) if candidate.fit_score else "-"
        table.add_row(
            candidate.id,
            _truncate(candidate.name, 30),
            _truncate(candidate.email, 30),
            f"[{status_color}]{candidate.status.upper()}[/{status_color}]",
            fit,
        )

    console.print(table)
    counts = service.get_status_counts(job_id)
    summary = ", ".join(f"{name}: {count}" for name, count in counts.items())
    console.print(f"[dim]By status: {summary}[/dim]")


@app.command()
def score(
    candidate_id: str = typer.Argument(..., help="Candidate ID"),
    job_id: str = typer.Argument(..., help="Job ID the candidate applied to"),
    actor: Optional[str] = typer.Option(None, "--actor", help="User performing the action"),
):
    """Calculate and store a candidate's fit score."""
    from recruitflow.services import CandidateService

    try:
        candidate = CandidateService().calculate_fit_score(candidate_id, job_id, actor=actor)
    except RecruitFlowError as e:
        _fail(e)

    fit = candidate.fit_score
    table = Table(title=f"Fit Score: {candidate.name}")
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right", style="green")

    table.add_row("Technical", str(fit.technical_score))
    table.add_row("Cultural", str(fit.cultural_score))
    table.add_row("Behavioral", str(fit.behavioral_score))
    table.add_row("[bold]Overall[/bold]", f"[bold]{fit.overall_score}[/bold]")

    console.print(table)
    console.print(f"[dim]{fit.ai_analysis}[/dim]")


@app.command()
def delete_job(
    job_id: str = typer.Argument(..., help="Job ID to delete"),
    actor: Optional[str] = typer.Option(None, "--actor", help="User performing the action"),
):
    """Delete a job that has no candidates."""
    from recruitflow.services import JobService

    try:
        JobService().delete_job(job_id, actor=actor)
    except RecruitFlowError as e:
        _fail(e)

    console.print(f"[green]✓ Deleted job {job_id}[/green]")


if __name__ == "__main__":
    app()
