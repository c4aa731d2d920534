"""Input sources accepted by the processing operations."""

import asyncio
import inspect
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import aiofiles

from .exceptions import ArgumentError


@dataclass(frozen=True)
class FilePath:
    """A local file, opened and closed by the SDK."""

    path: Union[str, "os.PathLike[str]"]

    @property
    def file_name(self) -> str:
        return Path(self.path).name


@dataclass(frozen=True)
class ByteBuffer:
    """Image data already held in memory."""

    data: bytes
    file_name: str


@dataclass(frozen=True)
class StreamSource:
    """A caller-owned binary stream, sync or async. Never closed by the SDK."""

    stream: Any
    file_name: str


@dataclass(frozen=True)
class RemoteUrl:
    """An image the service fetches itself. Only supported for compression."""

    url: str


InputSource = Union[FilePath, ByteBuffer, StreamSource, RemoteUrl]


def coerce_source(value: Any, file_name: Optional[str] = None) -> InputSource:
    """Turn whatever the caller passed into one of the input source variants.

    Args:
        value: Path, bytes, binary stream, or an existing source variant
        file_name: File name for bytes and stream inputs

    Returns:
        The matching input source

    Raises:
        ArgumentError: If the value is unsupported or a file name is missing
    """
    if isinstance(value, (FilePath, ByteBuffer, StreamSource, RemoteUrl)):
        return value
    if isinstance(value, (str, os.PathLike)):
        return FilePath(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        if not file_name:
            raise ArgumentError("file_name is required for in-memory input")
        return ByteBuffer(bytes(value), file_name)
    if hasattr(value, "read"):
        name = file_name or _stream_name(value)
        if not name:
            raise ArgumentError("file_name is required for stream input")
        return StreamSource(value, name)
    raise ArgumentError(f"Unsupported input type: {type(value).__name__}")


def _stream_name(stream: Any) -> Optional[str]:
    name = getattr(stream, "name", None)
    if isinstance(name, (str, os.PathLike)):
        return Path(name).name
    return None


async def read_stream(stream: Any) -> bytes:
    """Read a stream to the end without blocking the event loop.

    Async streams are awaited; a blocking ``read`` runs in a worker thread.
    """
    if inspect.iscoroutinefunction(stream.read):
        data = await stream.read()
    else:
        data = await asyncio.to_thread(stream.read)
        if inspect.isawaitable(data):
            data = await data
    if isinstance(data, str):
        raise ArgumentError("Stream must be opened in binary mode")
    return bytes(data)


async def load_source(source: InputSource) -> Tuple[str, bytes]:
    """Return ``(file_name, content)`` for an upload source.

    A file path is opened, delegated to the stream path and closed again
    before this returns, on success and on failure alike.
    """
    if isinstance(source, FilePath):
        async with aiofiles.open(source.path, "rb") as fh:
            return await load_source(StreamSource(fh, source.file_name))
    if isinstance(source, StreamSource):
        return source.file_name, await read_stream(source.stream)
    if isinstance(source, ByteBuffer):
        return source.file_name, source.data
    raise ArgumentError("URL input is only supported for compression")
