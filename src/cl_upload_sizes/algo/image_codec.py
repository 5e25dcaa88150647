"""Image codec used to resize and encode uploads.

The resize core only depends on the ImageCodec protocol; PillowImageCodec is
the default implementation.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from io import BytesIO
from typing import Protocol
from typing_extensions import override

from PIL import Image, ImageOps

from ..common.errors import CodecError
from ..common.schemas import ResizeFit, ResizeOptions

EncoderOptions = Mapping[str, int | float | bool | str]

_COMMON_MODES = frozenset({"1", "L", "LA", "P", "RGB", "RGBA"})
_WRITABLE_MODES: dict[str, frozenset[str]] = {
    "PNG": frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}),
    "BMP": frozenset({"1", "L", "P", "RGB", "RGBA"}),
    "TIFF": _COMMON_MODES | {"CMYK", "I", "I;16", "F", "YCbCr", "LAB"},
}


@dataclass(frozen=True)
class ResizedHandle:
    """A resized image that has not been encoded yet."""

    image: Image.Image
    format: str
    options: dict[str, int | float | bool | str] = field(default_factory=dict)


@dataclass(frozen=True)
class EncodedImage:
    data: bytes
    width: int
    height: int
    size: int
    format: str


class ImageCodec(Protocol):
    def resize(
        self,
        buffer: bytes,
        width: int | None,
        height: int | None,
        options: ResizeOptions,
    ) -> ResizedHandle: ...

    def reencode(
        self,
        handle: ResizedHandle,
        format: str,
        options: EncoderOptions,
    ) -> ResizedHandle: ...

    def materialize(self, handle: ResizedHandle) -> EncodedImage: ...


def get_pil_format(format_str: str) -> str:
    """Convert format string to PIL format name."""
    format_map = {
        "jpg": "JPEG",
        "jpeg": "JPEG",
        "png": "PNG",
        "webp": "WEBP",
        "gif": "GIF",
        "bmp": "BMP",
        "tif": "TIFF",
        "tiff": "TIFF",
        "avif": "AVIF",
    }
    return format_map.get(format_str.lower(), format_str.upper())


def target_size(
    source: tuple[int, int],
    width: int | None,
    height: int | None,
    options: ResizeOptions,
) -> tuple[int, int]:
    """
    Compute the output size for a resize request.

    With a single dimension the other one follows the source aspect ratio.
    With both, 'inside' and 'outside' keep the aspect ratio while the other
    fits produce exactly width x height.
    """
    source_width, source_height = source

    if options.without_enlargement:
        width = min(width, source_width) if width is not None else None
        height = min(height, source_height) if height is not None else None
    if options.without_reduction:
        width = max(width, source_width) if width is not None else None
        height = max(height, source_height) if height is not None else None

    if height is None:
        if width is None:
            raise CodecError("Resize needs a width or a height")
        return width, max(1, round(source_height * width / source_width))
    if width is None:
        return max(1, round(source_width * height / source_height)), height

    if options.fit == ResizeFit.INSIDE:
        scale = min(width / source_width, height / source_height)
    elif options.fit == ResizeFit.OUTSIDE:
        scale = max(width / source_width, height / source_height)
    else:
        return width, height

    return max(1, round(source_width * scale)), max(1, round(source_height * scale))


class PillowImageCodec(ImageCodec):
    """Pillow backed ImageCodec."""

    @override
    def resize(
        self,
        buffer: bytes,
        width: int | None,
        height: int | None,
        options: ResizeOptions,
    ) -> ResizedHandle:
        try:
            with Image.open(BytesIO(buffer)) as img:
                source_format = img.format
                img.load()
                resized = self._apply_fit(img, width, height, options)
        except (OSError, ValueError, Image.DecompressionBombError) as exc:
            raise CodecError(f"Cannot resize image to {width}x{height}: {exc}") from exc

        if source_format is None:
            raise CodecError("Cannot determine the source image format")

        return ResizedHandle(image=resized, format=source_format)

    @override
    def reencode(
        self,
        handle: ResizedHandle,
        format: str,
        options: EncoderOptions,
    ) -> ResizedHandle:
        pil_format = get_pil_format(format)

        Image.init()
        if pil_format not in Image.SAVE:
            raise CodecError(f"Unsupported output format: {format}")

        return replace(handle, format=pil_format, options=dict(options))

    @override
    def materialize(self, handle: ResizedHandle) -> EncodedImage:
        img = handle.image

        if handle.format == "JPEG":
            # JPEG does not support alpha channel
            if img.mode not in ("RGB", "L", "CMYK"):
                img = img.convert("RGB")
        elif img.mode not in _WRITABLE_MODES.get(handle.format, _COMMON_MODES):
            has_alpha = "A" in img.getbands() or "transparency" in img.info
            img = img.convert("RGBA" if has_alpha else "RGB")

        buffer = BytesIO()
        try:
            img.save(buffer, format=handle.format, **handle.options)
        except (OSError, ValueError, KeyError) as exc:
            raise CodecError(f"Cannot encode image as {handle.format}: {exc}") from exc

        data = buffer.getvalue()
        return EncodedImage(
            data=data,
            width=img.width,
            height=img.height,
            size=len(data),
            format=handle.format,
        )

    def _apply_fit(
        self,
        img: Image.Image,
        width: int | None,
        height: int | None,
        options: ResizeOptions,
    ) -> Image.Image:
        size = target_size(img.size, width, height, options)
        both = width is not None and height is not None

        if both and options.fit == ResizeFit.COVER:
            return ImageOps.fit(
                img,
                size,
                method=Image.Resampling.LANCZOS,
                centering=options.position.centering,
            )

        if both and options.fit == ResizeFit.CONTAIN:
            if img.mode not in ("RGB", "RGBA"):
                img = img.convert("RGBA")
            color = options.background if img.mode == "RGBA" else options.background[:3]
            return ImageOps.pad(
                img,
                size,
                method=Image.Resampling.LANCZOS,
                color=color,
                centering=options.position.centering,
            )

        return img.resize(size, Image.Resampling.LANCZOS)
