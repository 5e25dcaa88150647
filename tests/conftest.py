"""Test configuration and fixtures for cl_upload_sizes.

This module provides:
- Synthetic image builders (Pillow, no test media on disk)
- Static directory and storage fixtures
- In-memory storage fake recording every operation
"""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from typing_extensions import override

import pytest
from PIL import Image, ImageDraw

from cl_upload_sizes.common.errors import StorageError
from cl_upload_sizes.common.static_storage import StaticStorage
from cl_upload_sizes.common.static_storage_impl import LocalStaticStorage

ImageFactory = Callable[..., bytes]


# ============================================================================
# Image Fixtures
# ============================================================================


def build_image(
    width: int = 1000,
    height: int = 800,
    format: str = "JPEG",
    mode: str = "RGB",
) -> bytes:
    """Encode a simple grid pattern of the given size."""
    colors = {"RGBA": (73, 109, 137, 255), "CMYK": (180, 120, 0, 40)}
    img = Image.new(mode, (width, height), color=colors.get(mode, (73, 109, 137)))

    if mode in ("RGB", "RGBA"):
        draw = ImageDraw.Draw(img)
        for i in range(0, width, 50):
            draw.line([(i, 0), (i, height)], fill="white", width=2)
        for i in range(0, height, 50):
            draw.line([(0, i), (width, i)], fill="white", width=2)

    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


def build_split_image(width: int = 1000, height: int = 800) -> bytes:
    """PNG whose left half is red and right half is blue."""
    img = Image.new("RGB", (width, height), color=(0, 0, 255))
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, width // 2 - 1, height], fill=(255, 0, 0))

    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def image_factory() -> ImageFactory:
    return build_image


@pytest.fixture
def source_jpeg() -> bytes:
    """1000x800 JPEG upload."""
    return build_image(1000, 800, "JPEG")


@pytest.fixture
def source_png() -> bytes:
    """1000x800 PNG upload."""
    return build_image(1000, 800, "PNG")


@pytest.fixture
def split_png() -> bytes:
    return build_split_image()


# ============================================================================
# Storage Fixtures
# ============================================================================


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Provide clean static directory for resized outputs."""
    directory = tmp_path / "static"
    directory.mkdir()
    return directory


@pytest.fixture
def local_storage() -> LocalStaticStorage:
    return LocalStaticStorage()


class InMemoryStaticStorage(StaticStorage):
    """In-memory StaticStorage recording every call."""

    def __init__(self, fail_on: str | None = None):
        self.files: dict[Path, bytes] = {}
        self.writes: list[Path] = []
        self.deletes: list[Path] = []
        self.fail_on: str | None = fail_on

    @override
    async def exists(self, path: Path) -> bool:
        return path in self.files

    @override
    async def delete(self, path: Path) -> None:
        if self.fail_on == "delete":
            raise StorageError(path, "delete")
        self.deletes.append(path)
        del self.files[path]

    @override
    async def write(self, path: Path, data: bytes) -> None:
        if self.fail_on == "write":
            raise StorageError(path, "write")
        self.writes.append(path)
        self.files[path] = data


@pytest.fixture
def memory_storage() -> InMemoryStaticStorage:
    return InMemoryStaticStorage()


@pytest.fixture
def memory_storage_factory() -> type[InMemoryStaticStorage]:
    return InMemoryStaticStorage
