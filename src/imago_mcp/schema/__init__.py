"""Tool descriptors handed back by ``tools/list``."""

from imago_mcp.schema.tools import ToolsSchema

__all__ = ["ToolsSchema"]
