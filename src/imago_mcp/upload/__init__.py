"""Image re-hosting — multipart encoding, upload, and result processing."""

from imago_mcp.upload.errors import NoImagesError, UploadFailedError
from imago_mcp.upload.multipart import MultipartBody, MultipartBuilder
from imago_mcp.upload.processor import ImageProcessor
from imago_mcp.upload.uploader import ImageUploader, UploadFailure, mime_extension

__all__ = [
    "ImageProcessor",
    "ImageUploader",
    "MultipartBody",
    "MultipartBuilder",
    "NoImagesError",
    "UploadFailedError",
    "UploadFailure",
    "mime_extension",
]
