"""Configuration sources and upload settings.

Every value is read from a :class:`ConfigSource` at the moment it is needed,
never cached at startup, so a long-running server observes environment
changes without a restart.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from imago_mcp import SERVER_NAME, __version__

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_HOURS = 1
DEFAULT_USER_AGENT = f"{SERVER_NAME}/{__version__}"

UPLOAD_URL_VAR = "UPLOAD_URL"
UPLOAD_EXPIRATION_VAR = "UPLOAD_EXPIRATION"
UPLOAD_USER_AGENT_VAR = "UPLOAD_USER_AGENT"
UPLOAD_ON_ERROR_VAR = "UPLOAD_ON_ERROR"


@runtime_checkable
class ConfigSource(Protocol):
    """Looks up a configuration value by name."""

    def get(self, name: str) -> str | None: ...


class EnvironSource:
    """Reads the live process environment on every lookup."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)


class MappingSource:
    """Serves values from a fixed mapping."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, name: str) -> str | None:
        return self._values.get(name)


class UploadErrorPolicy(str, Enum):
    """What to do when the upload request itself raises (network failure).

    ``raise`` lets the exception reach the transport, which answers with an
    internal error. ``keep`` leaves the original inline image in the result.
    """

    RAISE = "raise"
    KEEP_ORIGINAL = "keep"


class UploadSettings(BaseModel):
    """A point-in-time view of the upload configuration."""

    model_config = {"frozen": True}

    url: str | None = None
    expiration: int = DEFAULT_EXPIRATION_HOURS
    user_agent: str = DEFAULT_USER_AGENT
    on_error: UploadErrorPolicy = UploadErrorPolicy.RAISE

    @property
    def enabled(self) -> bool:
        return bool(self.url)


class UploadConfig:
    """Upload endpoint configuration backed by a :class:`ConfigSource`."""

    def __init__(self, source: ConfigSource | None = None) -> None:
        self._source = source or EnvironSource()

    @property
    def url(self) -> str | None:
        return self._source.get(UPLOAD_URL_VAR)

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    @property
    def expiration(self) -> int:
        raw = self._source.get(UPLOAD_EXPIRATION_VAR)
        if raw is None or not raw.strip():
            return DEFAULT_EXPIRATION_HOURS
        try:
            value = int(raw.strip())
        except ValueError:
            logger.warning(
                "Ignoring non-integer %s=%r, using %d",
                UPLOAD_EXPIRATION_VAR,
                raw,
                DEFAULT_EXPIRATION_HOURS,
            )
            return DEFAULT_EXPIRATION_HOURS
        if value < 1:
            logger.warning(
                "Ignoring non-positive %s=%r, using %d",
                UPLOAD_EXPIRATION_VAR,
                raw,
                DEFAULT_EXPIRATION_HOURS,
            )
            return DEFAULT_EXPIRATION_HOURS
        return value

    @property
    def user_agent(self) -> str:
        return self._source.get(UPLOAD_USER_AGENT_VAR) or DEFAULT_USER_AGENT

    @property
    def on_error(self) -> UploadErrorPolicy:
        raw = (self._source.get(UPLOAD_ON_ERROR_VAR) or "").strip().lower()
        if not raw:
            return UploadErrorPolicy.RAISE
        try:
            return UploadErrorPolicy(raw)
        except ValueError:
            logger.warning("Unknown %s=%r, using 'raise'", UPLOAD_ON_ERROR_VAR, raw)
            return UploadErrorPolicy.RAISE

    def snapshot(self) -> UploadSettings:
        """Read every upload setting once and freeze the result."""
        return UploadSettings(
            url=self.url or None,
            expiration=self.expiration,
            user_agent=self.user_agent,
            on_error=self.on_error,
        )
