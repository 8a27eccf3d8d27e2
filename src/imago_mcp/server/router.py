"""RequestRouter — JSON-RPC method dispatch for the MCP server."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from imago_mcp import SERVER_NAME, __version__
from imago_mcp.generation.errors import GenerationError, format_generation_error
from imago_mcp.protocol.errors import (
    InvalidRequestError,
    MethodNotFoundError,
    ProtocolError,
    ToolError,
    UnknownToolError,
)
from imago_mcp.protocol.models import PROTOCOL_VERSION, JsonRpcRequest, JsonRpcResponse
from imago_mcp.schema.tools import GENERATE_IMAGE, LIST_MODELS, LIST_PROVIDERS, ToolsSchema
from imago_mcp.server.handlers import ToolHandlers
from imago_mcp.utils.telemetry import ATTR_RPC_METHOD, ATTR_TOOL_ERROR, ATTR_TOOL_NAME, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

NOTIFICATION_INITIALIZED = "notifications/initialized"


class RequestRouter:
    """Maps a JSON-RPC request to exactly one response, or none.

    Usage::

        router = RequestRouter()
        response = router.route({"jsonrpc": "2.0", "id": 1, "method": "ping"})
        # JsonRpcResponse(id=1, result={})

    Protocol failures (unknown method, unknown tool) become JSON-RPC errors.
    Tool failures become ``isError`` results. Anything else propagates to
    the transport.
    """

    def __init__(
        self,
        tools_schema: ToolsSchema | None = None,
        tool_handlers: ToolHandlers | None = None,
    ) -> None:
        self._tools_schema = tools_schema or ToolsSchema()
        self._tool_handlers = tool_handlers or ToolHandlers()
        self._methods: dict[str, Callable[[JsonRpcRequest], JsonRpcResponse]] = {
            "initialize": self._handle_initialize,
            "ping": self._handle_ping,
            "tools/list": self._handle_tools_list,
            "tools/call": self._handle_tools_call,
        }
        self._tools: dict[str, Callable[[Mapping[str, Any]], Any]] = {
            GENERATE_IMAGE: self._tool_handlers.generate_image,
            LIST_MODELS: self._tool_handlers.list_models,
            LIST_PROVIDERS: lambda _args: self._tool_handlers.list_providers(),
        }

    def route(self, message: Mapping[str, Any]) -> JsonRpcResponse | None:
        """Dispatch one decoded message; ``None`` means send nothing."""
        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError as exc:
            invalid = InvalidRequestError(_describe_validation_error(exc))
            logger.info("Rejected malformed request: %s", invalid)
            return JsonRpcResponse.failure(message.get("id"), invalid.code, str(invalid))
        if request.method == NOTIFICATION_INITIALIZED:
            return None

        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, str(request.method))
            try:
                handler = self._methods.get(request.method or "")
                if handler is None:
                    raise MethodNotFoundError(request.method)
                return handler(request)
            except ProtocolError as exc:
                logger.info("Protocol error for %s: %s", request.method, exc)
                return JsonRpcResponse.failure(request.id, exc.code, str(exc))

    def _handle_initialize(self, request: JsonRpcRequest) -> JsonRpcResponse:
        return JsonRpcResponse.success(
            request.id,
            {
                "protocolVersion": PROTOCOL_VERSION,
                "capabilities": {"tools": {}},
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
            },
        )

    def _handle_ping(self, request: JsonRpcRequest) -> JsonRpcResponse:
        return JsonRpcResponse.success(request.id, {})

    def _handle_tools_list(self, request: JsonRpcRequest) -> JsonRpcResponse:
        return JsonRpcResponse.success(request.id, {"tools": self._tools_schema.all()})

    def _handle_tools_call(self, request: JsonRpcRequest) -> JsonRpcResponse:
        params = request.arguments
        name = params.get("name")
        arguments = params.get("arguments") or {}

        tool = self._tools.get(name) if isinstance(name, str) else None
        if tool is None:
            raise UnknownToolError(name)

        with _tracer.start_as_current_span("tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                result = tool(arguments)
            except GenerationError as exc:
                span.set_attribute(ATTR_TOOL_ERROR, True)
                logger.warning("Tool %s failed: %s", name, exc)
                return JsonRpcResponse.tool_error(request.id, format_generation_error(exc))
            except ToolError as exc:
                span.set_attribute(ATTR_TOOL_ERROR, True)
                logger.warning("Tool %s failed: %s", name, exc)
                return JsonRpcResponse.tool_error(request.id, str(exc))

        return JsonRpcResponse.tool_success(request.id, result)


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "request"
    return f"{location}: {first.get('msg', 'invalid value')}"
