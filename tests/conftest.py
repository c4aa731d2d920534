"""Pytest fixtures for MicroJPEG SDK tests."""

import base64
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx
import pytest

from microjpeg import AsyncMicroJpegClient
from microjpeg.config import MicroJpegSettings, get_settings

API_KEY = "test-api-key"
API_BASE = "https://api.microjpeg.com/v1/"
EXPECTED_AUTH = "Basic " + base64.b64encode(f"api:{API_KEY}".encode()).decode()

COMPRESSION_ENVELOPE: Dict[str, Any] = {
    "success": True,
    "result": {
        "downloadUrl": "https://x/y.jpg",
        "originalSize": 1000,
        "compressedSize": 400,
        "savingsPercent": 60,
        "processingTime": 120,
    },
    "compressionCount": 5,
}

ENHANCEMENT_ENVELOPE: Dict[str, Any] = {
    "success": True,
    "result": {
        "downloadUrl": "https://x/enhanced.png",
        "originalDimensions": {"width": 640, "height": 480},
        "newDimensions": {"width": 1280, "height": 960},
        "processingTime": 2300,
    },
    "compressionCount": 7,
}

USAGE_BODY: Dict[str, Any] = {
    "tier": "starter",
    "usage": {"compressions": 10, "backgroundRemovals": 2, "enhancements": 1},
    "limits": {
        "compressionLimit": 100,
        "backgroundRemovalLimit": 20,
        "enhancementLimit": 10,
    },
}


class ChunkedBody(httpx.AsyncByteStream):
    """Response body delivered in fixed-size chunks, recording when it is closed."""

    def __init__(self, data: bytes, chunk_size: int = 16 * 1024) -> None:
        self.data = data
        self.chunk_size = chunk_size
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for start in range(0, len(self.data), self.chunk_size):
            yield self.data[start : start + self.chunk_size]

    async def aclose(self) -> None:
        self.closed = True


class MockApi:
    """Queue of canned responses plus a record of every request received."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._responses: List[httpx.Response] = []

    def add_response(
        self,
        status_code: int = 200,
        json: Optional[Any] = None,
        text: Optional[str] = None,
        content: Optional[bytes] = None,
        content_type: str = "image/jpeg",
    ) -> Optional[ChunkedBody]:
        body = None
        if json is not None:
            response = httpx.Response(status_code, json=json)
        elif text is not None:
            response = httpx.Response(status_code, text=text)
        else:
            body = ChunkedBody(content or b"")
            headers = {
                "Content-Type": content_type,
                "Content-Length": str(len(body.data)),
            }
            response = httpx.Response(status_code, headers=headers, stream=body)
        self._responses.append(response)
        return body

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self._responses.pop(0)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer settings and cached values out of tests."""
    for var in ("MICROJPEG_API_KEY", "MICROJPEG_BASE_URL", "MICROJPEG_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> MicroJpegSettings:
    return MicroJpegSettings(_env_file=None)


@pytest.fixture
def mock_api() -> MockApi:
    return MockApi()


@pytest.fixture
def http_client(mock_api) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(mock_api))


@pytest.fixture
def client(http_client, settings) -> AsyncMicroJpegClient:
    return AsyncMicroJpegClient(API_KEY, http_client=http_client, settings=settings)
