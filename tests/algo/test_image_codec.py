"""Unit tests for the Pillow image codec and its sizing rules."""

from io import BytesIO

import pytest
from PIL import Image

from cl_upload_sizes.algo.image_codec import (
    PillowImageCodec,
    ResizedHandle,
    get_pil_format,
    target_size,
)
from cl_upload_sizes.common.errors import CodecError
from cl_upload_sizes.common.schemas import CropPosition, ResizeFit, ResizeOptions

DEFAULT = ResizeOptions()

# ============================================================================
# FORMAT HELPERS
# ============================================================================


def test_get_pil_format_aliases():
    assert get_pil_format("jpg") == "JPEG"
    assert get_pil_format("jpeg") == "JPEG"
    assert get_pil_format("tif") == "TIFF"
    assert get_pil_format("WebP") == "WEBP"


def test_get_pil_format_unknown_is_upper_cased():
    assert get_pil_format("qoi") == "QOI"


# ============================================================================
# TARGET SIZE
# ============================================================================


def test_target_size_exact_fits():
    for fit in (ResizeFit.COVER, ResizeFit.CONTAIN, ResizeFit.FILL):
        assert target_size((1000, 800), 200, 200, ResizeOptions(fit=fit)) == (200, 200)


def test_target_size_single_dimension_keeps_aspect():
    assert target_size((1000, 800), 500, None, DEFAULT) == (500, 400)
    assert target_size((1000, 800), None, 200, DEFAULT) == (250, 200)


def test_target_size_inside_and_outside():
    assert target_size((1000, 800), 200, 200, ResizeOptions(fit=ResizeFit.INSIDE)) == (200, 160)
    assert target_size((1000, 800), 200, 200, ResizeOptions(fit=ResizeFit.OUTSIDE)) == (250, 200)


def test_target_size_without_enlargement_clamps():
    options = ResizeOptions(without_enlargement=True)
    assert target_size((1000, 800), 2000, 600, options) == (1000, 600)
    assert target_size((1000, 800), 1500, None, options) == (1000, 800)


def test_target_size_without_reduction_clamps():
    options = ResizeOptions(without_reduction=True)
    assert target_size((1000, 800), 200, 150, options) == (1000, 800)


def test_target_size_never_zero():
    assert target_size((1000, 10), 10, None, DEFAULT) == (10, 1)


def test_target_size_requires_a_dimension():
    with pytest.raises(CodecError, match="needs a width or a height"):
        target_size((1000, 800), None, None, DEFAULT)

    with pytest.raises(CodecError):
        target_size((1000, 800), None, None, ResizeOptions(without_enlargement=True))


# ============================================================================
# RESIZE / ENCODE
# ============================================================================


def test_resize_cover_is_exact(source_jpeg: bytes):
    codec = PillowImageCodec()

    handle = codec.resize(source_jpeg, 300, 100, DEFAULT)
    encoded = codec.materialize(handle)

    assert (encoded.width, encoded.height) == (300, 100)
    assert encoded.format == "JPEG"
    assert encoded.size == len(encoded.data)
    with Image.open(BytesIO(encoded.data)) as img:
        assert img.size == (300, 100)


def test_resize_contain_pads_with_background(source_png: bytes):
    codec = PillowImageCodec()
    options = ResizeOptions(fit=ResizeFit.CONTAIN, background=(255, 0, 0, 255))

    encoded = codec.materialize(codec.resize(source_png, 200, 400, options))

    assert (encoded.width, encoded.height) == (200, 400)
    with Image.open(BytesIO(encoded.data)) as img:
        assert img.convert("RGB").getpixel((100, 5)) == (255, 0, 0)


def test_resize_fill_stretches(source_png: bytes):
    codec = PillowImageCodec()

    encoded = codec.materialize(codec.resize(source_png, 50, 400, ResizeOptions(fit="fill")))

    assert (encoded.width, encoded.height) == (50, 400)


def test_resize_keeps_source_format(source_png: bytes):
    codec = PillowImageCodec()

    handle = codec.resize(source_png, 100, 100, DEFAULT)

    assert handle.format == "PNG"


def test_reencode_changes_format(source_png: bytes):
    codec = PillowImageCodec()

    handle = codec.reencode(codec.resize(source_png, 100, 80, DEFAULT), "webp", {"quality": 70})
    encoded = codec.materialize(handle)

    assert handle.options == {"quality": 70}
    assert encoded.format == "WEBP"
    with Image.open(BytesIO(encoded.data)) as img:
        assert img.format == "WEBP"


def test_reencode_rejects_unknown_format(source_png: bytes):
    codec = PillowImageCodec()
    handle = codec.resize(source_png, 100, 80, DEFAULT)

    with pytest.raises(CodecError, match="Unsupported output format"):
        codec.reencode(handle, "svg", {})


def test_materialize_jpeg_drops_alpha(image_factory):
    codec = PillowImageCodec()
    rgba_png = image_factory(400, 300, "PNG", "RGBA")

    handle = codec.reencode(codec.resize(rgba_png, 100, 75, DEFAULT), "jpg", {})
    encoded = codec.materialize(handle)

    with Image.open(BytesIO(encoded.data)) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"


def test_materialize_converts_cmyk_for_png(image_factory):
    codec = PillowImageCodec()
    cmyk_jpeg = image_factory(400, 300, "JPEG", "CMYK")

    handle = codec.reencode(codec.resize(cmyk_jpeg, 100, 75, DEFAULT), "png", {})
    encoded = codec.materialize(handle)

    assert encoded.format == "PNG"
    with Image.open(BytesIO(encoded.data)) as img:
        assert img.format == "PNG"
        assert img.mode == "RGB"
        assert img.size == (100, 75)


def test_materialize_reports_encoder_failure():
    codec = PillowImageCodec()
    handle = ResizedHandle(image=Image.new("RGB", (10, 10)), format="NOSUCHFORMAT")

    with pytest.raises(CodecError):
        codec.materialize(handle)


def test_resize_rejects_garbage():
    codec = PillowImageCodec()

    with pytest.raises(CodecError):
        codec.resize(b"\x00\x01garbage", 100, 100, DEFAULT)


# ============================================================================
# CROP POSITIONS
# ============================================================================


def test_crop_position_centering():
    assert CropPosition.CENTRE.centering == (0.5, 0.5)
    assert CropPosition("center").centering == (0.5, 0.5)
    assert CropPosition("left top").centering == (0.0, 0.0)
    assert CropPosition.SOUTHEAST.centering == (1.0, 1.0)
    assert all(isinstance(p.centering, tuple) for p in CropPosition)
