"""ToolHandlers — the three tools exposed through ``tools/call``."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from imago_mcp.generation.client import ClientFactory, GenerationClient, LiteLLMImageClient
from imago_mcp.generation.images import normalize_keys
from imago_mcp.generation.options import build_options
from imago_mcp.providers import ProviderRegistry
from imago_mcp.upload.processor import ImageProcessor

logger = logging.getLogger(__name__)


class ToolHandlers:
    """Runs ``generate_image``, ``list_models`` and ``list_providers``.

    Generation errors and tool errors propagate to the router, which turns
    them into ``isError`` results.
    """

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        image_processor: ImageProcessor | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._registry = registry or ProviderRegistry()
        self._image_processor = image_processor or ImageProcessor()
        self._client_factory = client_factory or self._default_client

    def generate_image(self, arguments: Mapping[str, Any]) -> Mapping[str, Any]:
        client = self._client_factory(arguments.get("provider"), arguments.get("model"))
        options = build_options(arguments)
        logger.debug("generate_image provider=%s options=%s", arguments.get("provider"), sorted(options))
        result = client.generate(arguments.get("prompt"), options)
        return self._image_processor.process(normalize_keys(result))

    def list_models(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        provider = arguments.get("provider")
        client = self._client_factory(provider, None)
        return {"provider": provider, "models": list(client.models)}

    def list_providers(self) -> dict[str, Any]:
        return {"providers": self._registry.available_providers()}

    def _default_client(self, provider: str, model: str | None) -> GenerationClient:
        return LiteLLMImageClient(provider, model, registry=self._registry)
