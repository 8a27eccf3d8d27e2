"""Imago MCP — stdio MCP server for multi-provider image generation."""

from __future__ import annotations

__version__ = "1.0.0"

SERVER_NAME = "imago-mcp"
