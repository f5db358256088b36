"""ollama-bridge CLI (Typer).

Thin front end over the bridge operations: each command awaits one
operation and renders its result. Envelope results print as the same
pretty JSON a GUI front end receives.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Optional, TypeVar

import typer
from rich.console import Console

from adapters.catalog import CatalogFetcher
from adapters.launcher import open_app
from cli import doctor
from cli.ui_components import build_error_panel, print_banner, render_listing
from core.config import AppSettings
from core.domain.errors import BridgeError
from core.domain.models import OperationResult
from core.logging import configure_logging
from core.services.daemon_bridge import DaemonBridge

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Bridge between a desktop front end and a local inference daemon.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    json_logs: Optional[bool] = typer.Option(None, "--json-logs/--no-json-logs", help="Render logs as JSON lines."),
    banner: bool = typer.Option(False, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    configure_logging(AppSettings(), json_logs=json_logs)
    if banner:
        print_banner(_err_console)


def _run(awaitable: Awaitable[T]) -> T:
    try:
        return asyncio.run(awaitable)
    except BridgeError as exc:
        _err_console.print(build_error_panel(exc.message))
        raise typer.Exit(code=1) from exc


def _emit_envelope(result: OperationResult, table: bool = False) -> None:
    if table:
        render_listing(_console, result)
    else:
        typer.echo(result.to_json())
    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def models(table: bool = typer.Option(False, "--table", help="Render as a table instead of JSON.")) -> None:
    """List installed models."""

    _emit_envelope(_run(DaemonBridge().list_models()), table=table)


@app.command()
def generate(model: str, prompt: str) -> None:
    """Generate text with MODEL for PROMPT."""

    typer.echo(_run(DaemonBridge().generate(model, prompt)))


@app.command()
def pull(name: str, table: bool = typer.Option(False, "--table", help="Render the listing as a table.")) -> None:
    """Install model NAME and print the refreshed listing."""

    _emit_envelope(_run(DaemonBridge().pull(name)), table=table)


@app.command()
def delete(name: str, table: bool = typer.Option(False, "--table", help="Render the listing as a table.")) -> None:
    """Remove model NAME and print the refreshed listing."""

    _emit_envelope(_run(DaemonBridge().delete(name)), table=table)


@app.command()
def catalog() -> None:
    """Fetch the remote model catalog lists."""

    _emit_envelope(_run(CatalogFetcher().fetch_catalog()))


@app.command(name="open")
def open_command(name: str) -> None:
    """Launch executable NAME detached from this process."""

    try:
        pid = open_app(name)
    except BridgeError as exc:
        _err_console.print(build_error_panel(exc.message))
        raise typer.Exit(code=1) from exc
    typer.echo(f"started {name} (pid {pid})")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
