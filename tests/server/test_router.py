"""Tests for RequestRouter dispatch."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from imago_mcp.config import MappingSource, UploadConfig
from imago_mcp.generation.errors import (
    ApiError,
    AuthenticationError,
    InvalidRequestError,
    RateLimitError,
)
from imago_mcp.providers import ProviderRegistry
from imago_mcp.schema.tools import ToolsSchema
from imago_mcp.server.handlers import ToolHandlers
from imago_mcp.server.router import RequestRouter
from imago_mcp.upload.processor import ImageProcessor
from imago_mcp.upload.uploader import ImageUploader, UploadFailure
from tests.conftest import rpc


def _router(
    registry: ProviderRegistry,
    client_factory: MagicMock,
    uploader: ImageUploader | None = None,
    upload_url: str | None = None,
) -> RequestRouter:
    config = UploadConfig(MappingSource({"UPLOAD_URL": upload_url} if upload_url else {}))
    handlers = ToolHandlers(
        registry=registry,
        image_processor=ImageProcessor(config, uploader),
        client_factory=client_factory,
    )
    return RequestRouter(ToolsSchema(registry), handlers)


def _call(router: RequestRouter, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
    response = router.route(rpc("tools/call", {"name": name, "arguments": arguments or {}}, 7))
    assert response is not None
    return response.to_wire()


def _tool_payload(wire: dict[str, Any]) -> Any:
    return json.loads(wire["result"]["content"][0]["text"])


class TestLifecycleMethods:
    def test_initialize(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        wire = _router(registry, client_factory).route(rpc("initialize", request_id=1)).to_wire()  # type: ignore[union-attr]
        assert wire["id"] == 1
        assert wire["result"] == {
            "protocolVersion": "2024-11-05",
            "capabilities": {"tools": {}},
            "serverInfo": {"name": "imago-mcp", "version": "1.0.0"},
        }

    def test_initialized_notification_has_no_response(
        self, registry: ProviderRegistry, client_factory: MagicMock
    ) -> None:
        router = _router(registry, client_factory)
        assert router.route(rpc("notifications/initialized", request_id=None)) is None

    def test_ping(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        wire = _router(registry, client_factory).route(rpc("ping", request_id="p-1")).to_wire()  # type: ignore[union-attr]
        assert wire == {"jsonrpc": "2.0", "id": "p-1", "result": {}}

    def test_unknown_method(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        wire = _router(registry, client_factory).route(rpc("unknown/method", request_id=18)).to_wire()  # type: ignore[union-attr]
        assert wire["id"] == 18
        assert wire["error"]["code"] == -32601
        assert "unknown/method" in wire["error"]["message"]
        assert "result" not in wire

    def test_missing_params(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        response = _router(registry, client_factory).route({"jsonrpc": "2.0", "id": 2, "method": "ping"})
        assert response is not None
        assert response.result == {}

    @pytest.mark.parametrize(
        "message",
        [
            {"jsonrpc": "2.0", "id": 3, "method": "tools/call", "params": ["generate_image"]},
            {"jsonrpc": "2.0", "id": 3, "method": 42},
        ],
    )
    def test_malformed_request_is_invalid_request(
        self, registry: ProviderRegistry, client_factory: MagicMock, message: dict[str, Any]
    ) -> None:
        response = _router(registry, client_factory).route(message)
        assert response is not None
        wire = response.to_wire()
        assert wire["id"] == 3
        assert wire["error"]["code"] == -32600
        assert wire["error"]["message"].startswith("Invalid Request: ")
        client_factory.assert_not_called()


class TestToolsList:
    def test_returns_all_tools(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        wire = _router(registry, client_factory).route(rpc("tools/list", request_id=2)).to_wire()  # type: ignore[union-attr]
        names = [t["name"] for t in wire["result"]["tools"]]
        assert names == ["generate_image", "list_models", "list_providers"]

    def test_enum_follows_credentials(self, client_factory: MagicMock) -> None:
        registry = ProviderRegistry(MappingSource({"OPENAI_API_KEY": "a"}))
        wire = _router(registry, client_factory).route(rpc("tools/list", request_id=3)).to_wire()  # type: ignore[union-attr]
        generate = next(t for t in wire["result"]["tools"] if t["name"] == "generate_image")
        assert generate["inputSchema"]["properties"]["provider"]["enum"] == ["openai"]


class TestToolsCall:
    def test_list_providers(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        wire = _call(_router(registry, client_factory), "list_providers")
        assert wire["id"] == 7
        assert _tool_payload(wire) == {"providers": ["openai", "gemini", "xai"]}

    def test_list_models(
        self, registry: ProviderRegistry, client_factory: MagicMock, fake_client: MagicMock
    ) -> None:
        fake_client.models = ["grok-2-image", "grok-2-image-1212"]
        wire = _call(_router(registry, client_factory), "list_models", {"provider": "xai"})
        assert _tool_payload(wire) == {"provider": "xai", "models": ["grok-2-image", "grok-2-image-1212"]}

    def test_generate_image(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        wire = _call(_router(registry, client_factory), "generate_image", {"provider": "openai", "prompt": "t"})
        assert _tool_payload(wire)["images"][0]["url"] == "https://example.com/image.png"
        assert "isError" not in wire["result"]

    def test_null_arguments_default_to_empty(
        self, registry: ProviderRegistry, client_factory: MagicMock
    ) -> None:
        router = _router(registry, client_factory)
        response = router.route(rpc("tools/call", {"name": "list_providers", "arguments": None}, 4))
        assert response is not None
        assert _tool_payload(response.to_wire())["providers"]

    def test_unknown_tool(self, registry: ProviderRegistry, client_factory: MagicMock) -> None:
        wire = _call(_router(registry, client_factory), "unknown_tool")
        assert wire["error"]["code"] == -32602
        assert wire["error"]["message"] == "Unknown tool: unknown_tool"

    @pytest.mark.parametrize(
        ("error", "text"),
        [
            (AuthenticationError("Invalid API key"), "Authentication failed: Invalid API key"),
            (RateLimitError("Too many requests"), "Rate limit exceeded: Too many requests"),
            (InvalidRequestError("Bad request"), "Invalid request: Bad request"),
            (ApiError("Service down", status_code=503), "API error (503): Service down"),
        ],
    )
    def test_generation_errors_are_tool_errors(
        self, registry: ProviderRegistry, error: Exception, text: str
    ) -> None:
        factory = MagicMock(side_effect=error)
        wire = _call(_router(registry, factory), "generate_image", {"provider": "openai", "prompt": "t"})
        assert "error" not in wire
        assert wire["result"]["isError"] is True
        assert wire["result"]["content"][0]["text"] == text

    def test_unknown_provider_is_tool_error(self, registry: ProviderRegistry) -> None:
        router = RequestRouter(ToolsSchema(registry), ToolHandlers(registry=registry))
        wire = _call(router, "generate_image", {"provider": "midjourney", "prompt": "t"})
        assert wire["result"]["isError"] is True
        assert wire["result"]["content"][0]["text"].startswith("Provider not found")

    def test_no_images_is_tool_error(
        self, registry: ProviderRegistry, client_factory: MagicMock, fake_client: MagicMock
    ) -> None:
        fake_client.generate.return_value = {"images": []}
        wire = _call(_router(registry, client_factory), "generate_image", {"provider": "openai", "prompt": "t"})
        assert wire["result"]["isError"] is True
        assert "no images" in wire["result"]["content"][0]["text"]

    def test_upload_failure_is_tool_error(
        self, registry: ProviderRegistry, client_factory: MagicMock, fake_client: MagicMock
    ) -> None:
        fake_client.generate.return_value = {"images": [{"b64_json": "aGVsbG8="}]}
        uploader = MagicMock(spec=ImageUploader)
        uploader.upload.return_value = UploadFailure(status_code=500, body="Internal Server Error")
        router = _router(registry, client_factory, uploader, upload_url="https://0x0.st")

        wire = _call(router, "generate_image", {"provider": "openai", "prompt": "t"})
        assert wire["result"]["isError"] is True
        assert "500" in wire["result"]["content"][0]["text"]
        assert "aGVsbG8=" not in json.dumps(wire)

    def test_unexpected_errors_propagate(
        self, registry: ProviderRegistry, client_factory: MagicMock, fake_client: MagicMock
    ) -> None:
        fake_client.generate.side_effect = KeyError("boom")
        with pytest.raises(KeyError):
            _call(_router(registry, client_factory), "generate_image", {"provider": "openai", "prompt": "t"})
