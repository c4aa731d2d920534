"""MicroJPEG SDK for Python - compression, conversion, background removal and AI enhancement."""

from .artifacts import ArtifactStream, fetch_bytes, fetch_stream, fetch_to_file
from .async_client import AsyncMicroJpegClient
from .auth import SecureAPIKeyManager
from .config import MicroJpegSettings
from .exceptions import ApiError, ArgumentError, MicroJpegError
from .mime import resolve_content_type
from .models import (
    BackgroundRemovalOptions,
    CompressionInfo,
    CompressOptions,
    Dimensions,
    EnhanceOptions,
    EnhancementInfo,
    ResizeMode,
    ResultEnvelope,
    UsageInfo,
    UsageLimits,
    UsageStats,
)
from .sources import ByteBuffer, FilePath, RemoteUrl, StreamSource

__version__ = "1.0.0"
__all__ = [
    "AsyncMicroJpegClient",
    "CompressOptions",
    "BackgroundRemovalOptions",
    "EnhanceOptions",
    "ResizeMode",
    "ResultEnvelope",
    "CompressionInfo",
    "EnhancementInfo",
    "Dimensions",
    "UsageInfo",
    "UsageStats",
    "UsageLimits",
    "FilePath",
    "ByteBuffer",
    "StreamSource",
    "RemoteUrl",
    "ArtifactStream",
    "fetch_bytes",
    "fetch_stream",
    "fetch_to_file",
    "resolve_content_type",
    "MicroJpegError",
    "ApiError",
    "ArgumentError",
    "MicroJpegSettings",
    "SecureAPIKeyManager",
]
