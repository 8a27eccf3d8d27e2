"""Error taxonomy raised by image generation clients."""

from __future__ import annotations


class GenerationError(Exception):
    """Base error for all image generation failures."""

    prefix = "Error"


class AuthenticationError(GenerationError):
    """The provider rejected the credential."""

    prefix = "Authentication failed"


class RateLimitError(GenerationError):
    """The provider throttled the request."""

    prefix = "Rate limit exceeded"


class InvalidRequestError(GenerationError):
    """The provider rejected the request parameters or prompt."""

    prefix = "Invalid request"


class ApiError(GenerationError):
    """The provider answered with an unexpected HTTP status."""

    def __init__(self, message: str, status_code: int | str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def prefix(self) -> str:  # type: ignore[override]
        return f"API error ({self.status_code})"


class ConfigurationError(GenerationError):
    """The client is missing configuration, usually a credential."""

    prefix = "Configuration error"


class ProviderNotFoundError(GenerationError):
    """The requested provider is not one of the supported providers."""

    prefix = "Provider not found"

    def __init__(self, provider: object) -> None:
        self.provider = provider
        super().__init__(f"Unknown provider: {provider}")


class UnsupportedFeatureError(GenerationError):
    """The provider or model cannot honour a requested feature."""

    prefix = "Unsupported feature"


def format_generation_error(error: GenerationError) -> str:
    """Render *error* as the agent-facing ``"<category>: <message>"`` text."""
    return f"{error.prefix}: {error}"
