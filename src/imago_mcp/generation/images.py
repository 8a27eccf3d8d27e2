"""Image descriptors — the accepted shapes of an image entry.

An entry is one of:

* a bare URL string (:class:`UrlImage`),
* ``{"url": ..., "mime_type": ...}`` (:class:`ImageRef`),
* ``{"base64" | "b64_json": ..., "mime_type": ...}`` (:class:`InlineImage`).

Only :class:`InlineImage` carries data that can be re-hosted.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel

DEFAULT_MIME_TYPE = "image/png"

INLINE_DATA_KEYS = ("b64_json", "base64")


class UrlImage(BaseModel):
    """A bare URL string."""

    kind: Literal["url_string"] = "url_string"
    url: str


class ImageRef(BaseModel):
    """A URL with an optional MIME type."""

    kind: Literal["url"] = "url"
    url: str
    mime_type: str | None = None


class InlineImage(BaseModel):
    """Base64 image data with its MIME type."""

    kind: Literal["base64"] = "base64"
    data: str
    mime_type: str = DEFAULT_MIME_TYPE


ImageDescriptor = UrlImage | ImageRef | InlineImage


def canonical_key(key: object) -> str:
    """Return the canonical string form of a mapping key."""
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)


def normalize_keys(mapping: Mapping[Any, Any]) -> dict[str, Any]:
    """Copy *mapping* with every key in canonical string form."""
    return {canonical_key(k): v for k, v in mapping.items()}


def describe_image(entry: Any) -> ImageDescriptor | None:
    """Classify an image entry, or return ``None`` for unknown shapes.

    Mapping entries are key-normalized before inspection.
    """
    if isinstance(entry, str):
        return UrlImage(url=entry)
    if not isinstance(entry, Mapping):
        return None

    image = normalize_keys(entry)
    data = next((image[k] for k in INLINE_DATA_KEYS if image.get(k)), None)
    mime_type = image.get("mime_type")
    if isinstance(data, str):
        return InlineImage(data=data, mime_type=mime_type or DEFAULT_MIME_TYPE)
    url = image.get("url")
    if isinstance(url, str):
        return ImageRef(url=url, mime_type=mime_type)
    return None
