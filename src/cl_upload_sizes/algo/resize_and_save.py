"""Resize an upload into every applicable configured size."""

import asyncio
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from ..common.errors import UploadSizesError
from ..common.schemas import (
    CropPosition,
    ProbedDimensions,
    ResizeOutcome,
    ResizeOptions,
    ResizeResult,
    SizeSpec,
    UploadConfig,
)
from ..common.static_storage import StaticStorage
from ..common.static_storage_impl import LocalStaticStorage
from ..utils.profiling import timed
from .filenames import output_filename, resolve_output_path, split_filename
from .image_codec import EncodedImage, ImageCodec, PillowImageCodec


def select_applicable_sizes(
    sizes: Sequence[SizeSpec],
    dimensions: ProbedDimensions,
) -> list[SizeSpec]:
    """Keep sizes with at least one numeric dimension no larger than the source."""
    applicable: list[SizeSpec] = []
    for size in sizes:
        if size.fits_within(dimensions):
            applicable.append(size)
        else:
            logger.debug(
                f"Skipping size '{size.name}' ({size.width}x{size.height}): "
                + f"larger than source {dimensions.width}x{dimensions.height}"
            )
    return applicable


class _SizeJob:
    """Per-size processing shared by all sizes of a single resize_and_save call."""

    def __init__(
        self,
        *,
        source: bytes,
        config: UploadConfig,
        saved_filename: str,
        mime_type: str,
        codec: ImageCodec,
        storage: StaticStorage,
        path_locks: dict[Path, asyncio.Lock],
    ):
        self.source: bytes = source
        self.config: UploadConfig = config
        self.saved_filename: str = saved_filename
        self.mime_type: str = mime_type
        self.codec: ImageCodec = codec
        self.storage: StaticStorage = storage
        self.path_locks: dict[Path, asyncio.Lock] = path_locks

    def _encode(self, size: SizeSpec) -> EncodedImage:
        options = self.config.resize_options or ResizeOptions(
            position=size.crop or CropPosition.CENTRE
        )
        handle = self.codec.resize(self.source, size.width, size.height, options)

        format_options = self.config.format_options
        if format_options is not None:
            handle = self.codec.reencode(handle, format_options.format, format_options.options)

        return self.codec.materialize(handle)

    async def run(self, size: SizeSpec) -> tuple[ResizeOutcome, bytes]:
        encoded = await asyncio.to_thread(self._encode, size)

        format_options = self.config.format_options
        if format_options is not None:
            extension = format_options.format
            mime_type = f"image/{format_options.format}"
        else:
            extension = split_filename(self.saved_filename)[1] or encoded.format.lower()
            mime_type = self.mime_type

        filename = output_filename(self.saved_filename, encoded.width, encoded.height, extension)
        path = resolve_output_path(self.config.static_dir, filename)

        # Two sizes may resolve to the same file
        async with self.path_locks.setdefault(path, asyncio.Lock()):
            if await self.storage.exists(path):
                logger.warning(f"Replacing existing file: {path}")
                await self.storage.delete(path)

            if not self.config.disable_local_storage:
                await self.storage.write(path, encoded.data)

        logger.info(
            f"Generated size '{size.name}': {filename} "
            + f"({encoded.width}x{encoded.height}, {encoded.size} bytes)"
        )

        outcome = ResizeOutcome(
            name=size.name,
            width=encoded.width,
            height=encoded.height,
            filename=filename,
            filesize=encoded.size,
            mime_type=mime_type,
        )
        return outcome, encoded.data


@timed
async def resize_and_save(
    *,
    source: bytes,
    dimensions: ProbedDimensions,
    config: UploadConfig,
    saved_filename: str,
    mime_type: str,
    codec: ImageCodec | None = None,
    storage: StaticStorage | None = None,
) -> ResizeResult:
    """
    Resize source into each applicable size and persist the results.

    Sizes are processed concurrently; the call succeeds only if every size
    succeeds. On success the result carries outcome metadata and the encoded
    bytes, both keyed by size name. When names collide, the later size in
    config.image_sizes wins.

    Args:
        source: Encoded source image
        dimensions: Probed source dimensions
        config: Sizes, resize/format overrides, static_dir, storage switch
        saved_filename: Filename the upload was saved under
        mime_type: MIME type reported when no format override is configured
        codec: Image codec (PillowImageCodec by default)
        storage: Static storage (LocalStaticStorage by default)

    Raises:
        CodecError: If the codec rejects the source, a size or the output format
        StorageError: If an existing file cannot be deleted or a new one written
        SanitizationError: If a safe output path cannot be derived
    """
    applicable = select_applicable_sizes(config.image_sizes, dimensions)
    if not applicable:
        return ResizeResult()

    job = _SizeJob(
        source=source,
        config=config,
        saved_filename=saved_filename,
        mime_type=mime_type,
        codec=codec or PillowImageCodec(),
        storage=storage or LocalStaticStorage(),
        path_locks={},
    )

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(job.run(size)) for size in applicable]
    except ExceptionGroup as eg:
        first = eg.exceptions[0]
        if isinstance(first, UploadSizesError):
            raise first from eg
        raise

    result = ResizeResult()
    for task in tasks:
        outcome, data = task.result()
        result.sizes[outcome.name] = outcome
        result.buffers[outcome.name] = data

    return result
