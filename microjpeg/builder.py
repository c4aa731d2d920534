"""Translate typed operation options into MicroJPEG HTTP request bodies.

Uploads go out as multipart/form-data with a single ``file`` part and one text
part per option the caller actually set. URL-based compression skips multipart
and sends a JSON object instead. Neither path validates how resize fields
combine; the service is the authority on that.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .mime import resolve_content_type
from .models import (
    BackgroundRemovalOptions,
    CompressOptions,
    EnhanceOptions,
    ResizeMode,
)

COMPRESS_ENDPOINT = "compress"
REMOVE_BACKGROUND_ENDPOINT = "remove-background"
ENHANCE_ENDPOINT = "enhance"
USAGE_ENDPOINT = "usage"


@dataclass(frozen=True)
class RequestPayload:
    """A request body ready to hand to the transport."""

    endpoint: str
    files: Optional[Dict[str, Tuple[str, bytes, str]]] = None
    data: Optional[Dict[str, str]] = None
    json: Optional[Dict[str, Any]] = None

    @property
    def is_multipart(self) -> bool:
        return self.files is not None

    def to_httpx_kwargs(self) -> Dict[str, Any]:
        if self.json is not None:
            return {"json": self.json}
        return {"files": self.files, "data": self.data or {}}


def _file_part(file_name: str, content: bytes) -> Dict[str, Tuple[str, bytes, str]]:
    return {"file": (file_name, content, resolve_content_type(file_name))}


def _mode_value(mode: ResizeMode) -> str:
    return ResizeMode(mode).value


def _compress_fields(options: Optional[CompressOptions]) -> Dict[str, Any]:
    """Wire fields for compression, with unset options left out entirely."""
    if options is None:
        return {}
    fields: Dict[str, Any] = {}
    if options.quality is not None:
        fields["quality"] = options.quality
    if options.output_format:
        fields["format"] = options.output_format
    if options.resize_width is not None:
        fields["width"] = options.resize_width
    if options.resize_height is not None:
        fields["height"] = options.resize_height
    if options.resize_mode is not None:
        fields["mode"] = _mode_value(options.resize_mode)
    return fields


def _as_form(fields: Dict[str, Any]) -> Dict[str, str]:
    return {name: str(value) for name, value in fields.items()}


def build_compress(
    file_name: str, content: bytes, options: Optional[CompressOptions] = None
) -> RequestPayload:
    """Multipart compression request for uploaded content."""
    return RequestPayload(
        endpoint=COMPRESS_ENDPOINT,
        files=_file_part(file_name, content),
        data=_as_form(_compress_fields(options)),
    )


def build_compress_url(
    url: str, options: Optional[CompressOptions] = None
) -> RequestPayload:
    """JSON compression request for an image the service downloads itself.

    Only fields the caller set are included; nothing is sent as null.
    """
    body: Dict[str, Any] = {"url": str(url)}
    body.update(_compress_fields(options))
    return RequestPayload(endpoint=COMPRESS_ENDPOINT, json=body)


def build_remove_background(
    file_name: str, content: bytes, options: Optional[BackgroundRemovalOptions] = None
) -> RequestPayload:
    fields: Dict[str, Any] = {}
    if options is not None:
        if options.quality is not None:
            fields["quality"] = options.quality
        if options.output_format:
            fields["format"] = options.output_format
    return RequestPayload(
        endpoint=REMOVE_BACKGROUND_ENDPOINT,
        files=_file_part(file_name, content),
        data=_as_form(fields),
    )


def build_enhance(
    file_name: str, content: bytes, options: Optional[EnhanceOptions] = None
) -> RequestPayload:
    """Multipart enhance request.

    ``scale`` and ``face_enhance`` are always present, falling back to the
    :class:`EnhanceOptions` defaults when no options are given.
    """
    options = options or EnhanceOptions()
    data = {
        "scale": str(options.scale),
        "face_enhance": str(options.face_enhance).lower(),
    }
    if options.quality is not None:
        data["quality"] = str(options.quality)
    if options.output_format:
        data["format"] = options.output_format
    return RequestPayload(
        endpoint=ENHANCE_ENDPOINT,
        files=_file_part(file_name, content),
        data=data,
    )
