"""Async client for the MicroJPEG API."""

from typing import Any, Optional, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from . import artifacts
from .auth import SecureAPIKeyManager, basic_auth_header
from .builder import (
    USAGE_ENDPOINT,
    RequestPayload,
    build_compress,
    build_compress_url,
    build_enhance,
    build_remove_background,
)
from .config import MicroJpegSettings, get_settings
from .exceptions import (
    DEFAULT_ERROR_MESSAGE,
    UNKNOWN_ERROR_CODE,
    ApiError,
    ArgumentError,
)
from .logging import get_logger
from .models import (
    BackgroundRemovalOptions,
    CompressionInfo,
    CompressOptions,
    EnhanceOptions,
    EnhancementInfo,
    ErrorBody,
    ResultEnvelope,
    UsageInfo,
)
from .sources import RemoteUrl, coerce_source, load_source

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def decode_error_body(text: str) -> Optional[ErrorBody]:
    """Decode a ``{"error", "message"}`` payload.

    Returns:
        The structured body, or None when ``text`` is not a JSON object of
        that shape (plain text, HTML error pages, truncated JSON). A blank body
        or JSON ``null`` decodes to an empty ErrorBody.
    """
    if not text.strip() or text.strip() == "null":
        return ErrorBody()
    try:
        return ErrorBody.model_validate_json(text)
    except ValidationError:
        return None


def api_error_from_response(status_code: int, text: str) -> ApiError:
    """Normalize a failed response into an ApiError, never losing the status."""
    body = decode_error_body(text)
    if body is None:
        return ApiError(status_code, UNKNOWN_ERROR_CODE, text)
    return ApiError(
        status_code,
        body.error or UNKNOWN_ERROR_CODE,
        body.message or DEFAULT_ERROR_MESSAGE,
    )


class AsyncMicroJpegClient:
    """Async client for compression, conversion, background removal and enhancement.

    The client either creates its own ``httpx.AsyncClient`` (and closes it in
    :meth:`aclose`) or uses one supplied by the caller, which it never closes
    or reconfigures.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        settings: Optional[MicroJpegSettings] = None,
    ):
        """Initialize async client.

        Args:
            api_key: API key; falls back to MICROJPEG_API_KEY, then the OS
                keychain entry ``default``
            http_client: Optional caller-owned HTTP client
            base_url: API base endpoint override
            timeout: Request timeout in seconds for a self-created HTTP client
            settings: Settings to use instead of the environment

        Raises:
            ArgumentError: If no API key can be found
        """
        self.settings = settings or get_settings()
        self._key_manager = SecureAPIKeyManager()

        api_key = api_key or self.settings.api_key or self._key_manager.retrieve_api_key()
        if not api_key:
            raise ArgumentError("An API key is required")
        self._auth_headers = basic_auth_header(api_key)

        if base_url is None and http_client is not None and str(http_client.base_url):
            base_url = str(http_client.base_url)
        base_url = base_url or self.settings.base_url
        self.base_url = httpx.URL(base_url if base_url.endswith("/") else f"{base_url}/")

        self._owns_http_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else self.settings.timeout,
            )
        self._http = http_client

        self._compression_count = 0

    @property
    def compression_count(self) -> int:
        """Compression count from the most recent processing response.

        Concurrent calls race on this value; the envelope each call returns is
        the authoritative count for that call.
        """
        return self._compression_count

    @property
    def owns_http_client(self) -> bool:
        return self._owns_http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http

    async def __aenter__(self) -> "AsyncMicroJpegClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client and not self._http.is_closed:
            await self._http.aclose()

    def _url(self, endpoint: str) -> httpx.URL:
        return self.base_url.join(endpoint)

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        logger.debug("request.sent", method=method, endpoint=endpoint)
        response = await self._http.request(
            method, self._url(endpoint), headers=self._auth_headers, **kwargs
        )
        logger.debug("response.received", endpoint=endpoint, status_code=response.status_code)
        if not response.is_success:
            raise api_error_from_response(response.status_code, response.text)
        return response

    async def _post(
        self, payload: RequestPayload, result_type: Type[Any]
    ) -> ResultEnvelope[Any]:
        response = await self._send("POST", payload.endpoint, **payload.to_httpx_kwargs())
        envelope = ResultEnvelope[result_type].model_validate_json(response.content)
        self._compression_count = envelope.compression_count
        return envelope

    async def _get(self, endpoint: str, model: Type[ModelT]) -> ModelT:
        response = await self._send("GET", endpoint)
        return model.model_validate_json(response.content)

    async def compress(
        self,
        source: Any,
        options: Optional[CompressOptions] = None,
        *,
        file_name: Optional[str] = None,
    ) -> ResultEnvelope[CompressionInfo]:
        """Compress an image.

        Args:
            source: File path, bytes, binary stream, or :class:`RemoteUrl`
            options: Compression options
            file_name: File name for bytes and stream input

        Returns:
            Result envelope with compression details and the download URL

        Raises:
            ApiError: If the API rejects the request
            ArgumentError: If the input cannot be used
        """
        source = coerce_source(source, file_name)
        if isinstance(source, RemoteUrl):
            payload = build_compress_url(source.url, options)
        else:
            name, content = await load_source(source)
            payload = build_compress(name, content, options)
        return await self._post(payload, CompressionInfo)

    async def compress_url(
        self, url: Union[str, httpx.URL], options: Optional[CompressOptions] = None
    ) -> ResultEnvelope[CompressionInfo]:
        """Compress an image the service fetches from ``url``."""
        return await self.compress(RemoteUrl(str(url)), options)

    async def convert(
        self,
        source: Any,
        output_format: str,
        quality: Optional[int] = None,
        *,
        file_name: Optional[str] = None,
    ) -> ResultEnvelope[CompressionInfo]:
        """Convert an image to ``output_format``; shorthand for :meth:`compress`."""
        options = CompressOptions(output_format=output_format, quality=quality)
        return await self.compress(source, options, file_name=file_name)

    async def remove_background(
        self,
        source: Any,
        options: Optional[BackgroundRemovalOptions] = None,
        *,
        file_name: Optional[str] = None,
    ) -> ResultEnvelope[CompressionInfo]:
        """Remove the background of an image."""
        name, content = await load_source(coerce_source(source, file_name))
        payload = build_remove_background(name, content, options)
        return await self._post(payload, CompressionInfo)

    async def enhance(
        self,
        source: Any,
        options: Optional[EnhanceOptions] = None,
        *,
        file_name: Optional[str] = None,
    ) -> ResultEnvelope[EnhancementInfo]:
        """Upscale an image, optionally restoring faces."""
        name, content = await load_source(coerce_source(source, file_name))
        payload = build_enhance(name, content, options)
        return await self._post(payload, EnhancementInfo)

    async def get_usage(self) -> UsageInfo:
        """Get account tier, usage and limits. Does not touch compression_count."""
        return await self._get(USAGE_ENDPOINT, UsageInfo)

    async def download(self, ref: Any) -> bytes:
        """Download a processed image into memory."""
        return await artifacts.fetch_bytes(self._http, ref)

    async def download_stream(self, ref: Any) -> artifacts.ArtifactStream:
        """Open a processed image as a stream the caller must close."""
        return await artifacts.fetch_stream(self._http, ref)

    async def download_to_file(self, ref: Any, output_path: Any) -> int:
        """Stream a processed image to ``output_path``."""
        return await artifacts.fetch_to_file(self._http, ref, output_path)
