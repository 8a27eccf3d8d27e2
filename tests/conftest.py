"""Shared fixtures for the Imago MCP test suite."""

from __future__ import annotations

import base64
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from imago_mcp.config import MappingSource, UploadConfig
from imago_mcp.providers import ProviderRegistry

ALL_KEYS = {
    "OPENAI_API_KEY": "test-openai-key",
    "GEMINI_API_KEY": "test-gemini-key",
    "XAI_API_KEY": "test-xai-key",
}

PNG_B64 = base64.b64encode(b"\x89PNG fake image bytes").decode()


@pytest.fixture
def make_source() -> Callable[..., MappingSource]:
    def _make(**values: str) -> MappingSource:
        return MappingSource(values)

    return _make


@pytest.fixture
def registry() -> ProviderRegistry:
    return ProviderRegistry(MappingSource(ALL_KEYS))


@pytest.fixture
def upload_config() -> UploadConfig:
    return UploadConfig(MappingSource({"UPLOAD_URL": "https://0x0.st", "UPLOAD_EXPIRATION": "24"}))


@pytest.fixture
def fake_client() -> MagicMock:
    """A generation client double returning one hosted image."""
    client = MagicMock()
    client.generate.return_value = {"images": [{"url": "https://example.com/image.png"}]}
    client.models = ["dall-e-3", "dall-e-2"]
    return client


@pytest.fixture
def client_factory(fake_client: MagicMock) -> MagicMock:
    return MagicMock(return_value=fake_client)


def rpc(method: str, params: dict[str, Any] | None = None, request_id: Any = 1) -> dict[str, Any]:
    message: dict[str, Any] = {"jsonrpc": "2.0", "method": method, "params": params or {}}
    if request_id is not None:
        message["id"] = request_id
    return message
