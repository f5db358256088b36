"""CLI UI components (Rich).

Keeps command logic apart from visual details so tables and panels can be
reused across commands.
"""

from __future__ import annotations

import json
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import OperationResult


def print_banner(console: Console) -> None:
    """Print the welcome banner (disabled in non-interactive/JSON use)."""

    title = Text("ollama-bridge", style="bold cyan")
    subtitle = Text("Local models • Generation • Catalog", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _human_size(value: Any) -> str:
    if not isinstance(value, (int, float)):
        return "-"
    size = float(value)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def parse_model_rows(listing: str) -> list[dict[str, str]] | None:
    """Extract `name`/`size`/`modified_at` rows from a daemon listing.

    Returns None when the listing is not the expected `{"models": [...]}`
    document; the caller then shows the raw text instead.
    """

    try:
        payload = json.loads(listing)
    except json.JSONDecodeError:
        return None
    if not isinstance(payload, dict) or not isinstance(payload.get("models"), list):
        return None

    rows: list[dict[str, str]] = []
    for entry in payload["models"]:
        if not isinstance(entry, dict):
            continue
        rows.append(
            {
                "name": str(entry.get("name") or entry.get("model") or "?"),
                "size": _human_size(entry.get("size")),
                "modified_at": str(entry.get("modified_at") or "-"),
            }
        )
    return rows


def build_models_table(rows: list[dict[str, str]]) -> Table:
    table = Table(title="Installed Models")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Size", style="green", justify="right")
    table.add_column("Modified", style="dim")
    for row in rows:
        table.add_row(row["name"], row["size"], row["modified_at"])
    return table


def build_error_panel(message: str) -> Panel:
    return Panel(Text(message, style="red"), title=Text("Error", style="bold red"), border_style="red")


def render_listing(console: Console, result: OperationResult) -> None:
    """Show a listing envelope as a table, falling back to raw text."""

    if not result.success:
        console.print(build_error_panel(result.error or "unknown error"))
        return
    rows = parse_model_rows(result.data or "")
    if rows is None:
        console.print(result.data or "", markup=False)
        return
    console.print(build_models_table(rows))
