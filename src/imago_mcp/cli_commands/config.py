"""``imago-mcp config`` — inspect provider credentials and upload settings."""

from __future__ import annotations

import click

from imago_mcp.cli_commands._output import console, print_providers_table, print_upload_settings


@click.command("config")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def config_cmd(as_json: bool) -> None:
    """Show which providers are available and how uploads are configured."""
    from imago_mcp.config import UploadConfig
    from imago_mcp.providers import ProviderRegistry

    available = ProviderRegistry().available_providers()
    settings = UploadConfig().snapshot()

    if as_json:
        console.print_json(
            data={"providers": available, "upload": settings.model_dump(mode="json")}
        )
        return

    print_providers_table(available)
    print_upload_settings(settings)
