"""Content-type lookup for uploaded image files."""

import os
from typing import Optional

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".svg": "image/svg+xml",
}


def resolve_content_type(file_name: Optional[str]) -> str:
    """Map a file name to the content type sent with its multipart part.

    Args:
        file_name: Name (or path) of the file being uploaded

    Returns:
        The image/* type for known extensions, otherwise
        ``application/octet-stream``
    """
    if not file_name:
        return DEFAULT_CONTENT_TYPE
    _, ext = os.path.splitext(file_name)
    return _CONTENT_TYPES.get(ext.lower(), DEFAULT_CONTENT_TYPE)
