"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.domain.models import TransportKind

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


def _check_executable(name: str) -> tuple[bool, str]:
    path = shutil.which(name)
    if path is None:
        return False, f"'{name}' not found on PATH"
    return True, path


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="ollama-bridge Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Daemon URL", "OK", settings.daemon_base_url)
    table.add_row("Catalog URL", "OK", settings.catalog_url)
    table.add_row("Transport", "OK", settings.daemon_transport.value)
    table.add_row("Body encoding", "OK", settings.body_encoding.value)

    ok_exe = True
    if settings.daemon_transport is TransportKind.CURL:
        ok_exe, detail_exe = _check_executable(settings.http_client_executable)
        table.add_row("HTTP client", "OK" if ok_exe else "FAIL", detail_exe)

    tags_url = settings.daemon_base_url.rstrip("/") + "/api/tags"
    ok_daemon, detail_daemon = asyncio.run(_check_http(tags_url, settings))
    table.add_row("Daemon reachable", "OK" if ok_daemon else "FAIL", detail_daemon)

    ok_catalog, detail_catalog = asyncio.run(_check_http(settings.catalog_url, settings))
    table.add_row("Catalog reachable", "OK" if ok_catalog else "FAIL", detail_catalog)

    _console.print(table)

    if not ok_exe:
        _console.print(
            "\n[yellow]Note:[/yellow] install curl or set OLLAMA_BRIDGE_DAEMON_TRANSPORT=httpx."
        )
    if not ok_daemon:
        _console.print("\n[yellow]Note:[/yellow] start the inference daemon (e.g. `ollama serve`).")


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    base_url = typer.prompt("Daemon base URL", default=settings.daemon_base_url, show_default=True).strip()
    transport = typer.prompt(
        "Transport (curl/httpx)",
        default=settings.daemon_transport.value,
        show_default=True,
    ).strip().lower()

    if not base_url:
        raise typer.BadParameter("daemon base URL is required")
    try:
        TransportKind(transport)
    except ValueError as exc:
        raise typer.BadParameter(f"unknown transport: {transport}") from exc

    env_path = write_user_env_vars(
        {
            "OLLAMA_BRIDGE_DAEMON_BASE_URL": base_url,
            "OLLAMA_BRIDGE_DAEMON_TRANSPORT": transport,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
