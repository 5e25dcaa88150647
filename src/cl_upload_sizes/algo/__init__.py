"""Image size algorithms."""

from .image_codec import PillowImageCodec
from .image_probe import probe_dimensions
from .resize_and_save import resize_and_save

__all__ = ["PillowImageCodec", "probe_dimensions", "resize_and_save"]
