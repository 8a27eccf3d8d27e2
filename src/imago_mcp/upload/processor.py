"""ImageProcessor — re-hosts inline images found in a generation result."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from imago_mcp.config import UploadConfig, UploadErrorPolicy, UploadSettings
from imago_mcp.generation.images import InlineImage, describe_image, normalize_keys
from imago_mcp.upload.errors import NoImagesError, UploadFailedError
from imago_mcp.upload.uploader import ImageUploader, UploadFailure

logger = logging.getLogger(__name__)


class ImageProcessor:
    """Applies the upload policy to the ``images`` of a generation result.

    Usage::

        processor = ImageProcessor(UploadConfig())
        result = processor.process({"images": [{"b64_json": "...", "mime_type": "image/png"}]})
        # {"images": [{"url": "https://host/abc.png"}]}

    Raises :class:`NoImagesError` for an empty image list and
    :class:`UploadFailedError` for the first image, in order, whose upload
    was rejected. Images after a rejected one are not uploaded.
    """

    def __init__(
        self,
        config: UploadConfig | None = None,
        uploader: ImageUploader | None = None,
    ) -> None:
        self._config = config or UploadConfig()
        self._uploader = uploader or ImageUploader(self._config)

    def process(self, result: Mapping[Any, Any]) -> Mapping[Any, Any]:
        normalized = normalize_keys(result)
        images = normalized.get("images")

        if isinstance(images, list | tuple) and not images:
            raise NoImagesError
        if not isinstance(images, list | tuple):
            return result

        settings = self._config.snapshot()
        if not settings.enabled:
            return result

        normalized["images"] = [self._process_image(image, settings) for image in images]
        return normalized

    def _process_image(self, image: Any, settings: UploadSettings) -> Any:
        if not isinstance(image, Mapping):
            return image

        entry = normalize_keys(image)
        descriptor = describe_image(entry)
        if not isinstance(descriptor, InlineImage):
            return entry

        try:
            outcome = self._uploader.upload(descriptor.data, descriptor.mime_type, settings)
        except httpx.HTTPError as exc:
            if settings.on_error is not UploadErrorPolicy.KEEP_ORIGINAL:
                raise
            logger.warning("Upload failed, keeping inline image: %s", exc)
            return entry

        if isinstance(outcome, UploadFailure):
            raise UploadFailedError(outcome.status_code, outcome.body)
        return {"url": outcome}
