"""ToolsSchema — builds the tool list, keyed to the available providers."""

from __future__ import annotations

from typing import Any

from imago_mcp.protocol.models import ToolDef
from imago_mcp.providers import ProviderRegistry
from imago_mcp.schema.properties import (
    enum_property,
    image_input_schema,
    integer_property,
    object_schema,
    string_property,
)

GENERATE_IMAGE = "generate_image"
LIST_MODELS = "list_models"
LIST_PROVIDERS = "list_providers"

TOOL_NAMES: tuple[str, ...] = (GENERATE_IMAGE, LIST_MODELS, LIST_PROVIDERS)


class ToolsSchema:
    """Produces the ``tools/list`` payload.

    Provider enums are rebuilt from the registry on every call so a newly
    configured credential shows up without a restart.
    """

    def __init__(self, registry: ProviderRegistry | None = None) -> None:
        self._registry = registry or ProviderRegistry()

    def all(self) -> list[dict[str, Any]]:
        return [tool.to_wire() for tool in self.definitions()]

    def definitions(self) -> list[ToolDef]:
        providers = self._registry.available_providers()
        return [
            ToolDef(
                name=GENERATE_IMAGE,
                description="Generate images from a text prompt using AI image generation services",
                input_schema=generate_image_schema(providers),
            ),
            ToolDef(
                name=LIST_MODELS,
                description="List available image generation models for a provider",
                input_schema=list_models_schema(providers),
            ),
            ToolDef(
                name=LIST_PROVIDERS,
                description="List all supported image generation providers",
                input_schema={"type": "object", "properties": {}},
            ),
        ]


def generate_image_schema(providers: list[str]) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "provider": enum_property(providers, "The AI provider to use (openai, gemini, or xai)"),
        "prompt": string_property("The text prompt describing the image to generate"),
        "model": string_property("Specific model to use (optional, uses provider default if omitted)"),
        "n": integer_property("Number of images to generate (default: 1)", minimum=1, maximum=10),
        "size": string_property(
            "Image size (OpenAI only): 256x256, 512x512, 1024x1024, 1792x1024, 1024x1792"
        ),
        "quality": enum_property(["standard", "hd"], "Image quality (OpenAI only): standard or hd"),
        "aspect_ratio": string_property("Aspect ratio (Gemini only): e.g., 16:9, 4:3, 1:1"),
        "negative_prompt": string_property("Terms to exclude from generation (Gemini only)"),
        "seed": integer_property("Seed for reproducibility (Gemini only)"),
        "response_format": enum_property(
            ["url", "b64_json"], "Response format (OpenAI/xAI): url or b64_json"
        ),
        "images": image_input_schema(),
    }
    return object_schema(properties, ["provider", "prompt"])


def list_models_schema(providers: list[str]) -> dict[str, Any]:
    return object_schema(
        {"provider": enum_property(providers, "The AI provider to query (openai, gemini, or xai)")},
        ["provider"],
    )
