"""JSON-RPC 2.0 envelopes and MCP tool payloads.

Implements the message shapes used by the Model Context Protocol for tool
discovery (``tools/list``) and execution (``tools/call``).
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

# Echoed back verbatim, so it is never coerced.
RequestId = Any

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification."""

    jsonrpc: str = JSONRPC_VERSION
    method: str | None = None
    id: RequestId = None
    params: dict[str, Any] | None = None

    @property
    def arguments(self) -> dict[str, Any]:
        return self.params or {}


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response carrying either ``result`` or ``error``."""

    jsonrpc: str = JSONRPC_VERSION
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId, result: dict[str, Any]) -> JsonRpcResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: RequestId, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    @classmethod
    def tool_success(cls, request_id: RequestId, payload: Any) -> JsonRpcResponse:
        """Wrap a tool's return value as JSON text content."""
        return cls.success(request_id, {"content": [_text(json.dumps(payload))]})

    @classmethod
    def tool_error(cls, request_id: RequestId, message: str) -> JsonRpcResponse:
        """Report a tool-level failure inside a successful envelope."""
        return cls.success(request_id, {"content": [_text(message)], "isError": True})

    def to_wire(self) -> dict[str, Any]:
        """Return the wire shape: always ``id``, exactly one of result/error."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error.model_dump()
        else:
            data["result"] = self.result if self.result is not None else {}
        return data


def _text(text: str) -> dict[str, str]:
    return {"type": "text", "text": text}


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ToolDef(BaseModel):
    """A tool descriptor as returned by ``tools/list``."""

    model_config = {"populate_by_name": True}

    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
