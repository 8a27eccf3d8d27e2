"""Generation option normalizer — argument bag to clean options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from imago_mcp.generation.images import normalize_keys

OPTION_KEYS: tuple[str, ...] = (
    "n",
    "size",
    "quality",
    "aspect_ratio",
    "negative_prompt",
    "seed",
    "response_format",
)


def build_options(arguments: Mapping[str, Any]) -> dict[str, Any]:
    """Extract the recognized, non-null generation options from *arguments*.

    ``images`` is included only when it is a non-empty list; an empty list
    means the same as no images at all. String entries pass through, mapping
    entries get canonical keys.
    """
    options: dict[str, Any] = {}
    for key in OPTION_KEYS:
        value = arguments.get(key)
        if value is not None:
            options[key] = value

    images = arguments.get("images")
    if isinstance(images, list) and images:
        options["images"] = [_normalize_image(img) for img in images]
    return options


def _normalize_image(image: Any) -> Any:
    if isinstance(image, Mapping):
        return normalize_keys(image)
    return image
