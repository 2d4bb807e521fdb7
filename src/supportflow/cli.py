"""
SupportFlow CLI

Command-line interface for SupportFlow operations.
"""

import asyncio
from uuid import uuid4

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from supportflow.observability import configure_logging

app = typer.Typer(
    name="supportflow",
    help="SupportFlow - Support Ticket Classification",
    add_completion=False,
)

console = Console()


@app.callback()
def main(log_level: str = typer.Option("WARNING", help="Log level for pipeline logs")):
    """Configure logging before any command runs."""
    configure_logging(level=log_level)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Host to bind to"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
):
    """Start the SupportFlow API server."""
    import uvicorn

    console.print(
        Panel.fit(
            "[bold blue]SupportFlow[/bold blue] API Server",
            subtitle=f"http://{host}:{port}",
        )
    )

    uvicorn.run(
        "supportflow.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


@app.command()
def classify(
    subject: str = typer.Argument(..., help="Ticket subject"),
    description: str = typer.Argument(..., help="Ticket description"),
    name: str = typer.Option(None, help="Customer name"),
    email: str = typer.Option(None, help="Customer email"),
    priority: str = typer.Option(None, help="Customer priority (VIP or Standard)"),
    source: str = typer.Option(None, help="Ticket source (email, web, api)"),
    ticket_id: str = typer.Option(None, help="Ticket ID (generated if omitted)"),
):
    """Classify a single ticket from the command line."""
    from pydantic import ValidationError

    from supportflow.exceptions import ClassificationFailedError, ConfigurationError
    from supportflow.models.ticket import CustomerInfo, TicketInput
    from supportflow.services.classification import get_classification_engine

    try:
        customer_info = None
        if name or email or priority:
            customer_info = CustomerInfo(email=email, name=name, priority=priority)

        ticket = TicketInput(
            subject=subject,
            description=description,
            customer_info=customer_info,
            source=source,
        )
    except ValidationError as e:
        console.print(f"[bold red]✗ Invalid ticket:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=2) from e

    ticket_id = ticket_id or f"CLI-{uuid4().hex[:8]}"

    async def run_classification():
        engine = get_classification_engine()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Classifying ticket...", total=None)
            result = await engine.process_ticket(ticket_id, ticket)
            progress.update(task, completed=True)

        return result

    try:
        result = asyncio.run(run_classification())
    except (ClassificationFailedError, ConfigurationError) as e:
        console.print(f"[bold red]✗ {escape(e.message)}[/bold red]")
        raise typer.Exit(code=1) from e

    classification = result.classification

    table = Table(title=f"Ticket {result.ticket_id}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Category", classification.category)
    table.add_row("Priority", classification.priority.value)
    table.add_row("Severity", classification.severity.value)
    table.add_row("Impact", classification.impact_level.value)
    table.add_row("Urgency", classification.urgency_level.value)
    table.add_row("Confidence", f"{classification.confidence:.0f}")
    table.add_row("Escalation", "yes" if classification.escalation_required else "no")
    table.add_row("Estimated Time", classification.estimated_resolution_time)
    table.add_row("Tags", ", ".join(classification.tags))
    table.add_row("Model", result.model_version)
    table.add_row("Processing", f"{result.processing_time_ms} ms")

    console.print(table)
    console.print(f"\n[bold]Summary:[/bold] {classification.summary}")
    console.print(f"\n[bold]Response:[/bold] {classification.personalized_response}")

    if result.needs_manual_review:
        console.print("\n[bold yellow]⚠ Needs manual review (low confidence)[/bold yellow]")
    else:
        console.print("\n[bold green]✓ Confidence above threshold[/bold green]")


@app.command()
def config():
    """Show the current classification configuration."""
    from supportflow.services.classification import get_classification_engine

    stats = get_classification_engine().get_stats()

    table = Table(title="SupportFlow Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Confidence Threshold", str(stats["confidence_threshold"]))
    table.add_row("Retry Attempts", str(stats["retry_attempts"]))
    table.add_row("Model", stats["model_version"])

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from supportflow import __version__

    console.print(f"SupportFlow v{__version__}")


if __name__ == "__main__":
    app()
