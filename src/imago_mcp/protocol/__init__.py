"""JSON-RPC wire models and protocol error types."""

from imago_mcp.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    ToolError,
    UnknownToolError,
)
from imago_mcp.protocol.models import (
    PROTOCOL_VERSION,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ToolDef,
)

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "PROTOCOL_VERSION",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MethodNotFoundError",
    "ProtocolError",
    "ToolDef",
    "ToolError",
    "UnknownToolError",
]
