"""``imago-mcp serve`` — run the MCP server over stdio."""

from __future__ import annotations

import logging
import sys

import click

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(name)s] %(levelname)s %(message)s"


@click.command()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="IMAGO_LOG_LEVEL",
    show_default=True,
    help="Log level for stderr diagnostics.",
)
@click.option("--trace-stderr", is_flag=True, help="Export OpenTelemetry spans to stderr.")
@click.option("--otlp-endpoint", default=None, help="Export OpenTelemetry spans via OTLP/gRPC.")
def serve(log_level: str, trace_stderr: bool, otlp_endpoint: str | None) -> None:
    """Serve JSON-RPC requests on stdin/stdout until end of input.

    Diagnostics go to stderr; stdout carries only protocol messages.
    """
    from imago_mcp.config import UploadConfig
    from imago_mcp.server.stdio import StdioServer
    from imago_mcp.utils.telemetry import configure_telemetry

    logging.basicConfig(stream=sys.stderr, level=log_level.upper(), format=LOG_FORMAT)

    if trace_stderr or otlp_endpoint:
        configure_telemetry(export_to_stderr=trace_stderr, otlp_endpoint=otlp_endpoint)

    settings = UploadConfig().snapshot()
    logger.debug(
        "Server initialized. UPLOAD_URL: %r, UPLOAD_EXPIRATION: %d, UPLOAD_USER_AGENT: %r",
        settings.url,
        settings.expiration,
        settings.user_agent,
    )

    server = StdioServer(input=sys.stdin.buffer, output=sys.stdout.buffer)
    try:
        server.run()
    except KeyboardInterrupt:
        logger.debug("Interrupted, shutting down")
