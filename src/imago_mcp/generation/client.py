"""Image generation clients.

The server talks to providers through the :class:`GenerationClient`
protocol. :class:`LiteLLMImageClient` is the default implementation: it wraps
LiteLLM's image endpoints and translates LiteLLM failures into the
:mod:`imago_mcp.generation.errors` taxonomy.
"""

from __future__ import annotations

import base64
import binascii
import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

import litellm

from imago_mcp.generation.errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    GenerationError,
    InvalidRequestError,
    ProviderNotFoundError,
    RateLimitError,
    UnsupportedFeatureError,
)
from imago_mcp.generation.images import DEFAULT_MIME_TYPE, ImageRef, InlineImage, UrlImage, describe_image
from imago_mcp.providers import ProviderRegistry
from imago_mcp.utils.telemetry import ATTR_IMAGE_COUNT, ATTR_MODEL, ATTR_PROVIDER, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_MODELS: dict[str, str] = {
    "openai": "dall-e-3",
    "gemini": "imagen-3.0-generate-002",
    "xai": "grok-2-image",
}

# Options every LiteLLM image backend understands.
_COMMON_PARAMS = ("n", "size", "quality", "response_format")
# Options only Gemini's Imagen models accept.
_GEMINI_PARAMS = ("aspect_ratio", "negative_prompt", "seed")
# Providers whose models accept input images for editing.
_EDIT_PROVIDERS = frozenset({"openai", "gemini"})
# Leading bytes of the image formats providers return.
_IMAGE_SIGNATURES = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


@runtime_checkable
class GenerationClient(Protocol):
    """A provider-bound image generation client."""

    def generate(self, prompt: str, options: Mapping[str, Any]) -> Mapping[str, Any]: ...

    @property
    def models(self) -> list[str]: ...


ClientFactory = Callable[[str, str | None], GenerationClient]


class LiteLLMImageClient:
    """Generates images through LiteLLM for one provider/model pair.

    Usage::

        client = LiteLLMImageClient("openai", "dall-e-3")
        result = client.generate("a lighthouse at dusk", {"n": 1})
        # {"provider": "openai", "model": "dall-e-3", "images": [{"url": ...}]}
    """

    def __init__(
        self,
        provider: str,
        model: str | None = None,
        registry: ProviderRegistry | None = None,
    ) -> None:
        self._registry = registry or ProviderRegistry()
        if not self._registry.is_supported(provider):
            raise ProviderNotFoundError(provider)
        self.provider = provider
        self.model = model or DEFAULT_MODELS[provider]

    @property
    def models(self) -> list[str]:
        """Image generation models LiteLLM knows for this provider."""
        names: set[str] = set()
        for key, info in litellm.model_cost.items():
            if not isinstance(info, Mapping) or info.get("mode") != "image_generation":
                continue
            if not str(info.get("litellm_provider", "")).startswith(self.provider):
                continue
            names.add(key.rsplit("/", 1)[-1])
        return sorted(names)

    def generate(self, prompt: str, options: Mapping[str, Any]) -> dict[str, Any]:
        """Generate images for *prompt* and return a plain result mapping."""
        if not prompt:
            raise InvalidRequestError("prompt is required")
        api_key = self._require_credential()
        images = options.get("images") or []

        with _tracer.start_as_current_span("generation.call") as span:
            span.set_attribute(ATTR_PROVIDER, self.provider)
            span.set_attribute(ATTR_MODEL, self.model)

            call_kwargs = self._call_kwargs(options, api_key)
            try:
                if images:
                    response = litellm.image_edit(
                        image=self._edit_inputs(images),
                        prompt=prompt,
                        **call_kwargs,
                    )
                else:
                    response = litellm.image_generation(prompt=prompt, **call_kwargs)
            except GenerationError:
                raise
            except Exception as exc:
                raise translate_error(exc) from exc

            result = self._to_result(response)
            span.set_attribute(ATTR_IMAGE_COUNT, len(result["images"]))
            return result

    def _require_credential(self) -> str:
        api_key = self._registry.credential(self.provider)
        if api_key is None:
            env_var = self._registry.env_var(self.provider)
            msg = f"{env_var} is not set"
            raise ConfigurationError(msg)
        return api_key

    def _call_kwargs(self, options: Mapping[str, Any], api_key: str) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": f"{self.provider}/{self.model}",
            "api_key": api_key,
            "drop_params": True,
        }
        for key in _COMMON_PARAMS:
            if key in options:
                kwargs[key] = options[key]
        if self.provider == "gemini":
            for key in _GEMINI_PARAMS:
                if key in options:
                    kwargs[key] = options[key]
        return kwargs

    def _edit_inputs(self, images: list[Any]) -> list[tuple[str, bytes, str]]:
        """Decode input images into ``(filename, bytes, mime)`` file tuples."""
        if self.provider not in _EDIT_PROVIDERS:
            msg = f"{self.provider} does not support input images"
            raise UnsupportedFeatureError(msg)

        files: list[tuple[str, bytes, str]] = []
        for index, entry in enumerate(images):
            descriptor = describe_image(entry)
            if isinstance(descriptor, UrlImage | ImageRef):
                msg = "URL image inputs are not supported; pass base64 data instead"
                raise UnsupportedFeatureError(msg)
            if not isinstance(descriptor, InlineImage):
                msg = f"images[{index}] is not a recognized image entry"
                raise InvalidRequestError(msg)
            try:
                raw = base64.b64decode(descriptor.data, validate=True)
            except (binascii.Error, ValueError) as exc:
                msg = f"images[{index}] is not valid base64"
                raise InvalidRequestError(msg) from exc
            extension = descriptor.mime_type.rsplit("/", 1)[-1]
            files.append((f"input-{index}.{extension}", raw, descriptor.mime_type))
        return files

    def _to_result(self, response: Any) -> dict[str, Any]:
        """Convert a LiteLLM ``ImageResponse`` into a plain mapping."""
        images: list[dict[str, Any]] = []
        revised: list[str] = []
        for item in getattr(response, "data", None) or []:
            b64_json = getattr(item, "b64_json", None)
            url = getattr(item, "url", None)
            if b64_json:
                mime_type = getattr(item, "mime_type", None) or sniff_mime_type(b64_json)
                images.append({"b64_json": b64_json, "mime_type": mime_type or DEFAULT_MIME_TYPE})
            elif url:
                images.append({"url": url})
            revised_prompt = getattr(item, "revised_prompt", None)
            if revised_prompt:
                revised.append(revised_prompt)

        result: dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "images": images,
        }
        if revised:
            result["revised_prompts"] = revised
        return result


def sniff_mime_type(b64_data: str) -> str | None:
    """Guess the image MIME type from the leading bytes of base64 data."""
    try:
        head = base64.b64decode(b64_data[:16], validate=True)
    except (binascii.Error, ValueError):
        return None
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime_type in _IMAGE_SIGNATURES:
        if head.startswith(signature):
            return mime_type
    return None


def translate_error(exc: Exception) -> GenerationError:
    """Map a LiteLLM exception onto the generation error taxonomy."""
    message = str(getattr(exc, "message", None) or exc)
    if isinstance(exc, litellm.AuthenticationError):
        return AuthenticationError(message)
    if isinstance(exc, litellm.RateLimitError):
        return RateLimitError(message)
    if isinstance(exc, litellm.BadRequestError):
        return InvalidRequestError(message)
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int):
        return ApiError(message, status_code=status_code)
    logger.debug("Unclassified generation failure: %r", exc)
    return GenerationError(message)


def create_client(provider: str, model: str | None = None) -> GenerationClient:
    """Build the default client, rejecting unsupported providers."""
    return LiteLLMImageClient(provider, model)
