"""Shared CLI output formatters."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table

from imago_mcp.config import UploadSettings  # noqa: TC001
from imago_mcp.providers import PROVIDER_ENV_VARS

console = Console()


def print_tools_table(tools: list[dict[str, Any]]) -> None:
    """Pretty-print ``tools/list`` descriptors as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        schema = tool.get("inputSchema", {})
        table.add_row(
            tool.get("name", "?"),
            _truncate(tool.get("description", "")),
            ", ".join(schema.get("required", [])) or "-",
        )

    console.print(table)


def print_providers_table(available: list[str]) -> None:
    """Pretty-print every supported provider with its credential status."""
    table = Table(title="Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Credential")
    table.add_column("Status")

    for provider, env_var in PROVIDER_ENV_VARS.items():
        status = "[green]available[/green]" if provider in available else "[red]missing[/red]"
        table.add_row(provider, env_var, status)

    console.print(table)


def print_upload_settings(settings: UploadSettings) -> None:
    """Pretty-print the current upload configuration."""
    console.print("\n[bold]Upload[/bold]")
    if not settings.enabled:
        console.print("  Disabled (UPLOAD_URL is not set); images are returned inline")
        return
    console.print(f"  Endpoint: {settings.url}")
    console.print(f"  Expiration: {settings.expiration}h")
    console.print(f"  User agent: {settings.user_agent}")
    console.print(f"  On network error: {settings.on_error.value}")


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
