"""ImageUploader — re-hosts one decoded image on the upload endpoint."""

from __future__ import annotations

import base64
import logging

import httpx
from pydantic import BaseModel

from imago_mcp.config import UploadConfig, UploadSettings
from imago_mcp.upload.multipart import MultipartBuilder
from imago_mcp.utils.telemetry import ATTR_UPLOAD_BYTES, ATTR_UPLOAD_MIME, ATTR_UPLOAD_STATUS, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

MIME_TYPE_EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}
DEFAULT_EXTENSION = "png"
UPLOAD_TIMEOUT = 60.0


class UploadFailure(BaseModel):
    """A non-2xx answer from the upload endpoint."""

    status_code: int
    body: str


def mime_extension(mime_type: str | None) -> str:
    return MIME_TYPE_EXTENSIONS.get(mime_type or "", DEFAULT_EXTENSION)


class ImageUploader:
    """Posts a single image to the configured endpoint.

    Returns the hosted URL on a 2xx answer and an :class:`UploadFailure`
    otherwise. Transport errors (``httpx.HTTPError``) and base64 decoding
    errors are not caught here.
    """

    def __init__(
        self,
        config: UploadConfig | None = None,
        transport: httpx.BaseTransport | None = None,
        builder: MultipartBuilder | None = None,
    ) -> None:
        self._config = config or UploadConfig()
        self._transport = transport
        self._builder = builder or MultipartBuilder()

    def upload(
        self,
        base64_data: str,
        mime_type: str,
        settings: UploadSettings | None = None,
    ) -> str | UploadFailure:
        settings = settings or self._config.snapshot()
        if not settings.url:
            msg = "Upload endpoint is not configured"
            raise RuntimeError(msg)

        binary = base64.b64decode(base64_data, validate=True)
        body = self._builder.build(binary, mime_extension(mime_type), settings.expiration)

        with _tracer.start_as_current_span("image.upload") as span:
            span.set_attribute(ATTR_UPLOAD_MIME, mime_type)
            span.set_attribute(ATTR_UPLOAD_BYTES, len(binary))

            # TLS is selected by httpx from the URL scheme.
            with httpx.Client(transport=self._transport, timeout=UPLOAD_TIMEOUT) as client:
                response = client.post(
                    settings.url,
                    content=body.content,
                    headers={
                        "Content-Type": body.content_type,
                        "User-Agent": settings.user_agent,
                    },
                )
            span.set_attribute(ATTR_UPLOAD_STATUS, response.status_code)

        text = response.text.strip()
        if response.is_success:
            logger.debug("Uploaded %d bytes to %s", len(binary), text)
            return text
        logger.warning("Upload to %s failed with HTTP %d", settings.url, response.status_code)
        return UploadFailure(status_code=response.status_code, body=text)
