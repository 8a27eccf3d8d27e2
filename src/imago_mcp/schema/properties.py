"""JSON-schema building blocks shared by the tool input schemas."""

from __future__ import annotations

from typing import Any


def object_schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    """Build an object schema; ``required`` is omitted when empty."""
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


def string_property(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def enum_property(values: list[str], description: str) -> dict[str, Any]:
    return {"type": "string", "enum": list(values), "description": description}


def integer_property(description: str, **bounds: int) -> dict[str, Any]:
    return {"type": "integer", "description": description, **bounds}


def image_input_schema() -> dict[str, Any]:
    """Array of input images accepted by ``generate_image``."""
    mime_type = string_property("MIME type (e.g., image/png, image/jpeg)")
    return {
        "type": "array",
        "description": (
            "Input images for image editing (OpenAI/Gemini only). Each item can be: "
            '(1) a URL string, (2) an object with "url" and "mime_type", or '
            '(3) an object with "base64" and "mime_type"'
        ),
        "items": {
            "oneOf": [
                string_property("URL of the image (MIME type auto-detected from extension)"),
                object_schema(
                    {"url": string_property("URL of the image"), "mime_type": mime_type},
                    ["url", "mime_type"],
                ),
                object_schema(
                    {"base64": string_property("Base64-encoded image data"), "mime_type": mime_type},
                    ["base64", "mime_type"],
                ),
            ]
        },
    }
