"""Retrieval of processed images by their download URL.

These helpers work for any result that carries a ``download_url``; the URL is
handed to the transport untouched. Downloads are plain GET requests without
the API credentials, and failures surface as the transport's own exceptions
(``httpx.HTTPStatusError``, ``httpx.TransportError``) rather than ``ApiError``.
"""

import os
from typing import Any, AsyncIterator, Optional, Union

import aiofiles
import httpx

from .exceptions import ArgumentError
from .logging import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


def resolve_download_url(ref: Any) -> str:
    """Extract the download URL from a string, result payload or envelope.

    Raises:
        ArgumentError: If ``ref`` carries no download URL
    """
    if isinstance(ref, (str, httpx.URL)):
        return str(ref)
    url = getattr(ref, "download_url", None)
    if url is None:
        url = getattr(getattr(ref, "result", None), "download_url", None)
    if not url:
        raise ArgumentError(f"No download URL on {type(ref).__name__}")
    return str(url)


class ArtifactStream:
    """An open download. The caller owns it and must close it.

    Usable as an async context manager and as an async iterator of chunks.
    Single use; not safe for concurrent readers.
    """

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def content_type(self) -> Optional[str]:
        return self._response.headers.get("content-type")

    @property
    def content_length(self) -> Optional[int]:
        value = self._response.headers.get("content-length")
        return int(value) if value is not None and value.isdigit() else None

    @property
    def is_closed(self) -> bool:
        return self._response.is_closed

    def aiter_bytes(self, chunk_size: Optional[int] = None) -> AsyncIterator[bytes]:
        return self._response.aiter_bytes(chunk_size)

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self.aiter_bytes()

    async def aread(self) -> bytes:
        """Read the remainder of the artifact into memory."""
        return await self._response.aread()

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> "ArtifactStream":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


async def fetch_bytes(http: httpx.AsyncClient, ref: Any) -> bytes:
    """Download an artifact fully into memory."""
    url = resolve_download_url(ref)
    response = await http.get(url)
    response.raise_for_status()
    return response.content


async def fetch_stream(http: httpx.AsyncClient, ref: Any) -> ArtifactStream:
    """Open an artifact for streaming without reading its body."""
    url = resolve_download_url(ref)
    request = http.build_request("GET", url)
    response = await http.send(request, stream=True)
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError:
        await response.aclose()
        raise
    return ArtifactStream(response)


async def fetch_to_file(
    http: httpx.AsyncClient,
    ref: Any,
    output_path: Union[str, "os.PathLike[str]"],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Stream an artifact straight to disk, chunk by chunk.

    The destination is created or truncated. Both the download and the file
    are closed when this returns or raises.

    Returns:
        Number of bytes written
    """
    written = 0
    async with await fetch_stream(http, ref) as stream:
        async with aiofiles.open(output_path, "wb") as out:
            async for chunk in stream.aiter_bytes(chunk_size):
                await out.write(chunk)
                written += len(chunk)
    logger.debug("artifact.saved", bytes_written=written)
    return written
