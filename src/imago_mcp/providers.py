"""Provider registry — the fixed provider table and live availability."""

from __future__ import annotations

from imago_mcp.config import ConfigSource, EnvironSource

SUPPORTED_PROVIDERS: tuple[str, ...] = ("openai", "gemini", "xai")

PROVIDER_ENV_VARS: dict[str, str] = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "xai": "XAI_API_KEY",
}


class ProviderRegistry:
    """Answers which providers are supported and which have credentials.

    Availability is recomputed on every call; nothing is cached.
    """

    def __init__(self, source: ConfigSource | None = None) -> None:
        self._source = source or EnvironSource()

    def is_supported(self, provider: str | None) -> bool:
        return provider in PROVIDER_ENV_VARS

    def env_var(self, provider: str) -> str | None:
        return PROVIDER_ENV_VARS.get(provider)

    def credential(self, provider: str) -> str | None:
        """Return the non-empty credential for *provider*, or ``None``."""
        env_var = self.env_var(provider)
        if env_var is None:
            return None
        return self._source.get(env_var) or None

    def is_available(self, provider: str) -> bool:
        return self.credential(provider) is not None

    def available_providers(self) -> list[str]:
        return [p for p in SUPPORTED_PROVIDERS if self.is_available(p)]
