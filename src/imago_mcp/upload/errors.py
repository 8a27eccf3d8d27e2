"""Tool-level failures raised by the image post-processing pipeline."""

from __future__ import annotations

from imago_mcp.protocol.errors import ToolError

NO_IMAGES_MESSAGE = (
    "Image generation produced no images. "
    "Verify the model supports image generation using list_models."
)


class NoImagesError(ToolError):
    """The provider returned an empty image list."""

    def __init__(self) -> None:
        super().__init__(NO_IMAGES_MESSAGE)


class UploadFailedError(ToolError):
    """The upload endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Upload failed (HTTP {status_code}): {body}")
