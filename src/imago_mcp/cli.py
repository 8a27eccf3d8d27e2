"""Imago MCP CLI entrypoint."""

from __future__ import annotations

import click

from imago_mcp import SERVER_NAME, __version__


@click.group()
@click.version_option(version=__version__, prog_name=SERVER_NAME)
def main() -> None:
    """Imago MCP — image generation tools for MCP clients."""


# Register subcommands
from imago_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
