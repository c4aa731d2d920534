"""Tests for request body construction."""

from microjpeg.builder import (
    COMPRESS_ENDPOINT,
    ENHANCE_ENDPOINT,
    REMOVE_BACKGROUND_ENDPOINT,
    build_compress,
    build_compress_url,
    build_enhance,
    build_remove_background,
)
from microjpeg.models import (
    BackgroundRemovalOptions,
    CompressOptions,
    EnhanceOptions,
    ResizeMode,
)

IMAGE = b"\xff\xd8\xff\xe0fake-jpeg"


class TestCompress:
    def test_file_part_only_without_options(self):
        payload = build_compress("photo.jpg", IMAGE)

        assert payload.endpoint == COMPRESS_ENDPOINT
        assert payload.is_multipart
        assert payload.files == {"file": ("photo.jpg", IMAGE, "image/jpeg")}
        assert payload.data == {}
        assert payload.json is None

    def test_all_options_use_wire_names(self):
        options = CompressOptions(
            quality=80,
            output_format="webp",
            resize_width=1200,
            resize_height=800,
            resize_mode=ResizeMode.SCALE_WIDTH,
        )

        payload = build_compress("photo.png", IMAGE, options)

        assert payload.data == {
            "quality": "80",
            "format": "webp",
            "width": "1200",
            "height": "800",
            "mode": "scalewidth",
        }
        assert payload.files["file"][2] == "image/png"

    def test_unset_options_are_omitted(self):
        payload = build_compress("photo.jpg", IMAGE, CompressOptions(quality=70))

        assert payload.data == {"quality": "70"}

    def test_resize_fields_are_not_cross_validated(self):
        payload = build_compress(
            "photo.jpg", IMAGE, CompressOptions(resize_mode=ResizeMode.COVER)
        )

        assert payload.data == {"mode": "cover"}

    def test_unknown_extension_is_octet_stream(self):
        payload = build_compress("blob.bin", IMAGE)

        assert payload.files["file"][2] == "application/octet-stream"


class TestCompressUrl:
    def test_json_body_with_url_only(self):
        payload = build_compress_url("https://example.com/a.jpg")

        assert not payload.is_multipart
        assert payload.json == {"url": "https://example.com/a.jpg"}
        assert payload.to_httpx_kwargs() == {"json": {"url": "https://example.com/a.jpg"}}

    def test_only_set_fields_are_sent(self):
        options = CompressOptions(quality=60, resize_mode=ResizeMode.THUMB, resize_width=150)

        payload = build_compress_url("https://example.com/a.jpg", options)

        assert payload.json == {
            "url": "https://example.com/a.jpg",
            "quality": 60,
            "width": 150,
            "mode": "thumb",
        }
        assert None not in payload.json.values()


class TestRemoveBackground:
    def test_options(self):
        options = BackgroundRemovalOptions(output_format="png", quality=90)

        payload = build_remove_background("product.jpg", IMAGE, options)

        assert payload.endpoint == REMOVE_BACKGROUND_ENDPOINT
        assert payload.data == {"quality": "90", "format": "png"}

    def test_no_options(self):
        payload = build_remove_background("product.jpg", IMAGE)

        assert payload.data == {}


class TestEnhance:
    def test_defaults_are_always_sent(self):
        payload = build_enhance("face.jpg", IMAGE)

        assert payload.endpoint == ENHANCE_ENDPOINT
        assert payload.data == {"scale": "2", "face_enhance": "false"}

    def test_explicit_options(self):
        options = EnhanceOptions(scale=8, face_enhance=True, output_format="png", quality=95)

        payload = build_enhance("face.jpg", IMAGE, options)

        assert payload.data == {
            "scale": "8",
            "face_enhance": "true",
            "quality": "95",
            "format": "png",
        }
