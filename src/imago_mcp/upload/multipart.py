r"""Multipart form-data body builder for the upload endpoint.

The body has exactly three parts, in this order::

    --<boundary>\r\n
    Content-Disposition: form-data; name="file"; filename="image.<ext>"\r\n
    Content-Type: application/octet-stream\r\n
    \r\n
    <raw bytes>\r\n
    --<boundary>\r\n
    Content-Disposition: form-data; name="secret"\r\n
    \r\n
    \r\n
    --<boundary>\r\n
    Content-Disposition: form-data; name="expires"\r\n
    \r\n
    <hours>\r\n
    --<boundary>--\r\n

The empty ``secret`` field asks the host for a longer, unguessable URL.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass

CRLF = b"\r\n"
BOUNDARY_PREFIX = "----ImagoFormBoundary"


def generate_boundary() -> str:
    return f"{BOUNDARY_PREFIX}{secrets.token_hex(16)}"


@dataclass(frozen=True)
class MultipartBody:
    """An encoded body together with the boundary it was built with."""

    boundary: str
    content: bytes

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"


class MultipartBuilder:
    """Builds upload bodies; every :meth:`build` call uses a fresh boundary."""

    def build(self, data: bytes, extension: str, expiration: int) -> MultipartBody:
        boundary = generate_boundary()
        delimiter = b"--" + boundary.encode("ascii") + CRLF

        parts = [
            delimiter,
            _disposition("file", filename=f"image.{extension}"),
            b"Content-Type: application/octet-stream" + CRLF + CRLF,
            data,
            CRLF,
            delimiter,
            _disposition("secret"),
            CRLF,
            CRLF,
            delimiter,
            _disposition("expires"),
            CRLF,
            str(expiration).encode("ascii"),
            CRLF,
            b"--" + boundary.encode("ascii") + b"--" + CRLF,
        ]
        return MultipartBody(boundary=boundary, content=b"".join(parts))


def _disposition(name: str, filename: str | None = None) -> bytes:
    header = f'Content-Disposition: form-data; name="{name}"'
    if filename is not None:
        header += f'; filename="{filename}"'
    return header.encode("utf-8") + CRLF
