"""cronlens CLI entry point."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from cronlens import __version__

app = typer.Typer(
    name="cronlens",
    help="Report scheduled cron jobs from the local store or the gateway.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    _configure_logging(verbose)
    if version:
        console.print(f"cronlens [dim]v{__version__}[/dim]")
        raise typer.Exit()


def _load_settings(source: Optional[str], store: Optional[str]):
    from cronlens.config.settings import get_settings

    settings = get_settings()
    updates: dict = {}
    if source:
        updates["source"] = source
    if store:
        updates["store"] = store
    if updates:
        settings = settings.model_copy(
            update={"cron": settings.cron.model_copy(update=updates)}
        )
    return settings


@app.command("list")
def list_jobs(
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Job source override: store | gateway"
    ),
    store: Optional[str] = typer.Option(
        None, "--store", help="Path to the cron store file (store source only)"
    ),
):
    """Print the /cron report for every configured job."""
    from cronlens.commands.base import CommandContext
    from cronlens.commands.cron import CronJobsCommand
    from cronlens.scheduler.sources import build_job_source

    if source and source not in ("store", "gateway"):
        console.print(f"[red]Unknown source: {source}[/red] (use 'store' or 'gateway')")
        raise typer.Exit(2)

    settings = _load_settings(source, store)
    command = CronJobsCommand(build_job_source(settings))

    # The local operator is always authorized.
    context = CommandContext(
        command_body="/cron", is_authorized_sender=True, sender_id="cli", channel="cli"
    )
    result = asyncio.run(command.handle(context))
    reply = result.reply if result else None
    if reply is None:
        raise typer.Exit()

    if reply.is_error:
        console.print(reply.text, markup=False, style="red")
        raise typer.Exit(1)
    console.print(reply.text, markup=False, highlight=False)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
):
    """Run the HTTP command endpoint in the foreground."""
    import uvicorn

    from cronlens.config.settings import get_settings
    from cronlens.server.app import create_app

    settings = get_settings()
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port

    console.print(
        f"  [bold]cronlens[/bold] [dim]v{__version__}[/dim] "
        f"on http://{bind_host}:{bind_port} (source: {settings.job_source})"
    )
    uvicorn.run(
        create_app(settings),
        host=bind_host,
        port=bind_port,
        access_log=False,
        log_level="warning",
    )


if __name__ == "__main__":
    app()
