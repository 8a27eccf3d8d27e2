"""``imago-mcp tools`` — show the tool list the server would advertise."""

from __future__ import annotations

import json

import click

from imago_mcp.cli_commands._output import console, print_tools_table


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw tools/list payload.")
def tools(as_json: bool) -> None:
    """Show the tools advertised by ``tools/list``."""
    from imago_mcp.schema.tools import ToolsSchema

    descriptors = ToolsSchema().all()
    if as_json:
        console.print_json(json.dumps({"tools": descriptors}))
        return
    print_tools_table(descriptors)
