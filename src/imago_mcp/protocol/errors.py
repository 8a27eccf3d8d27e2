"""Error types for the JSON-RPC layer.

Two families, never conflated:

* :class:`ProtocolError` subclasses become JSON-RPC ``error`` objects.
* :class:`ToolError` subclasses become successful responses whose result
  carries ``isError: true``.
"""

from __future__ import annotations

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for failures reported as JSON-RPC error objects."""

    code = INTERNAL_ERROR


class InvalidRequestError(ProtocolError):
    """The message is valid JSON but not a JSON-RPC request object."""

    code = INVALID_REQUEST

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid Request" + (f": {detail}" if detail else ""))


class MethodNotFoundError(ProtocolError):
    """No handler is registered for the requested method."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: object) -> None:
        self.method = method
        super().__init__(f"Method not found: {method if method is not None else ''}")


class UnknownToolError(ProtocolError):
    """``tools/call`` named a tool this server does not expose."""

    code = INVALID_PARAMS

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ToolError(Exception):
    """A tool ran but could not do its job; reported to the agent as text."""
