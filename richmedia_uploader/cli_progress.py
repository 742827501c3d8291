"""Console rendering helpers for the uploader CLI."""
from __future__ import annotations

from typing import Any, Dict, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()


def _echo(message: str) -> None:
    console.print(message)


def render_configuration_summary(config: Dict[str, Any]) -> None:
    """Render startup configuration summary."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")

    for key, value in config.items():
        rendered = "-" if value is None else str(value)
        table.add_row(key, rendered)

    panel = Panel(
        table,
        title="[bold green]creative-up[/bold green]",
        subtitle="[dim]rich-media uploader CLI[/dim]",
        border_style="blue",
    )
    console.print(panel)


def render_publish_result(result: Any) -> None:
    """Print uploaded keys per package."""
    manifests = getattr(result, "manifests", None) or []
    for manifest in manifests:
        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Key")
        for index, key in enumerate(manifest.keys, start=1):
            table.add_row(str(index), key)
        console.print(table)

    root_key: Optional[str] = getattr(result, "root_markup_key", None)
    total = sum(len(manifest) for manifest in manifests)
    _echo(
        f"[bold]Finished[/bold] packages={len(manifests)} objects={total} "
        f"upload_id={getattr(result, 'upload_id', '-')} root={root_key or '-'}"
    )
