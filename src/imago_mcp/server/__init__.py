"""MCP server — tool handlers, request router, and stdio transport."""

from imago_mcp.server.handlers import ToolHandlers
from imago_mcp.server.router import RequestRouter
from imago_mcp.server.stdio import StdioServer

__all__ = ["RequestRouter", "StdioServer", "ToolHandlers"]
