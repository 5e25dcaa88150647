"""Read the pixel dimensions of an uploaded image."""

from io import BytesIO

from PIL import Image

from ..common.errors import CodecError
from ..common.schemas import ProbedDimensions
from ..utils.profiling import timed


@timed
def probe_dimensions(buffer: bytes) -> ProbedDimensions:
    """
    Probe image dimensions without decoding pixel data.

    Raises:
        CodecError: If the buffer is not a readable image
    """
    try:
        with Image.open(BytesIO(buffer)) as img:
            width, height = img.size
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise CodecError(f"Cannot read image dimensions: {exc}") from exc

    return ProbedDimensions(width=width, height=height)
