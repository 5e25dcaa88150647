"""cl_upload_sizes - Generate configured image sizes for uploads."""

from .algo.image_codec import EncodedImage, ImageCodec, PillowImageCodec, ResizedHandle
from .algo.image_probe import probe_dimensions
from .algo.resize_and_save import resize_and_save, select_applicable_sizes
from .common.errors import CodecError, SanitizationError, StorageError, UploadSizesError
from .common.schemas import (
    CropPosition,
    FormatOption,
    ProbedDimensions,
    ResizeFit,
    ResizeOptions,
    ResizeOutcome,
    ResizeResult,
    SizeSpec,
    UploadConfig,
)
from .common.static_storage import StaticStorage
from .common.static_storage_impl import LocalStaticStorage
from .schema import ImageSizesOutput, ImageSizesParams
from .task import ImageSizesTask

__version__ = "0.1.0"

__all__ = [
    "CodecError",
    "CropPosition",
    "EncodedImage",
    "FormatOption",
    "ImageCodec",
    "ImageSizesOutput",
    "ImageSizesParams",
    "ImageSizesTask",
    "LocalStaticStorage",
    "PillowImageCodec",
    "ProbedDimensions",
    "ResizeFit",
    "ResizeOptions",
    "ResizeOutcome",
    "ResizeResult",
    "ResizedHandle",
    "SanitizationError",
    "SizeSpec",
    "StaticStorage",
    "StorageError",
    "UploadConfig",
    "UploadSizesError",
    "__version__",
    "probe_dimensions",
    "resize_and_save",
    "select_applicable_sizes",
]
