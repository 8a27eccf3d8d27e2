"""Image generation — options, image descriptors, and provider clients."""

from imago_mcp.generation.client import ClientFactory, GenerationClient, LiteLLMImageClient, create_client
from imago_mcp.generation.errors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    GenerationError,
    InvalidRequestError,
    ProviderNotFoundError,
    RateLimitError,
    UnsupportedFeatureError,
    format_generation_error,
)
from imago_mcp.generation.images import ImageDescriptor, ImageRef, InlineImage, UrlImage, describe_image
from imago_mcp.generation.options import build_options

__all__ = [
    "ApiError",
    "AuthenticationError",
    "ClientFactory",
    "ConfigurationError",
    "GenerationClient",
    "GenerationError",
    "ImageDescriptor",
    "ImageRef",
    "InlineImage",
    "InvalidRequestError",
    "LiteLLMImageClient",
    "ProviderNotFoundError",
    "RateLimitError",
    "UnsupportedFeatureError",
    "UrlImage",
    "build_options",
    "create_client",
    "describe_image",
    "format_generation_error",
]
