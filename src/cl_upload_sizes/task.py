"""Upload sizes task implementation."""

from collections.abc import MutableMapping
from typing import Callable
from typing_extensions import override

import aiofiles
from loguru import logger

from .algo.image_codec import ImageCodec
from .algo.image_probe import probe_dimensions
from .algo.resize_and_save import resize_and_save
from .common.compute_module import ComputeModule
from .common.static_storage import StaticStorage
from .schema import ImageSizesOutput, ImageSizesParams
from .utils.media_types import determine_mime_type


class ImageSizesTask(ComputeModule[ImageSizesParams, ImageSizesOutput]):
    """Compute module generating every configured size of an uploaded image."""

    schema: type[ImageSizesParams] = ImageSizesParams

    def __init__(self, codec: ImageCodec | None = None):
        self.codec: ImageCodec | None = codec

    @property
    @override
    def task_type(self) -> str:
        return "image_sizes"

    @override
    async def run(
        self,
        params: ImageSizesParams,
        storage: StaticStorage,
        progress_callback: Callable[[int], None] | None = None,
        upload_buffers: MutableMapping[str, bytes] | None = None,
    ) -> ImageSizesOutput:
        """
        Generate sizes for params.input_path.

        upload_buffers, when given, receives the encoded bytes of every
        generated size once all sizes have succeeded.
        """
        async with aiofiles.open(params.input_path, "rb") as f:
            source = await f.read()

        dimensions = probe_dimensions(source)
        mime_type = params.mime_type or determine_mime_type(source)

        result = await resize_and_save(
            source=source,
            dimensions=dimensions,
            config=params.config,
            saved_filename=params.saved_filename,
            mime_type=mime_type,
            codec=self.codec,
            storage=storage,
        )

        if upload_buffers is not None:
            upload_buffers.update(result.buffers)

        logger.info(
            f"{self.task_type}: {params.saved_filename} "
            + f"({dimensions.width}x{dimensions.height}) -> {len(result.sizes)} sizes"
        )

        if progress_callback:
            progress_callback(100)

        return ImageSizesOutput(sizes=result.sizes)
