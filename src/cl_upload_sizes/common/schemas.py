"""Pydantic schemas for size configuration and resize results."""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ─────────────────────────────────────────────────────────────
# Crop / fit enums
# ─────────────────────────────────────────────────────────────


class CropPosition(StrEnum):
    CENTRE = "centre"
    CENTER = "center"
    TOP = "top"
    RIGHT_TOP = "right top"
    RIGHT = "right"
    RIGHT_BOTTOM = "right bottom"
    BOTTOM = "bottom"
    LEFT_BOTTOM = "left bottom"
    LEFT = "left"
    LEFT_TOP = "left top"
    NORTH = "north"
    NORTHEAST = "northeast"
    EAST = "east"
    SOUTHEAST = "southeast"
    SOUTH = "south"
    SOUTHWEST = "southwest"
    WEST = "west"
    NORTHWEST = "northwest"

    @property
    def centering(self) -> tuple[float, float]:
        """Pillow centering pair, (0, 0) is top-left and (1, 1) bottom-right."""
        return _CENTERING[self]


_CENTERING: dict[CropPosition, tuple[float, float]] = {
    CropPosition.CENTRE: (0.5, 0.5),
    CropPosition.CENTER: (0.5, 0.5),
    CropPosition.TOP: (0.5, 0.0),
    CropPosition.NORTH: (0.5, 0.0),
    CropPosition.RIGHT_TOP: (1.0, 0.0),
    CropPosition.NORTHEAST: (1.0, 0.0),
    CropPosition.RIGHT: (1.0, 0.5),
    CropPosition.EAST: (1.0, 0.5),
    CropPosition.RIGHT_BOTTOM: (1.0, 1.0),
    CropPosition.SOUTHEAST: (1.0, 1.0),
    CropPosition.BOTTOM: (0.5, 1.0),
    CropPosition.SOUTH: (0.5, 1.0),
    CropPosition.LEFT_BOTTOM: (0.0, 1.0),
    CropPosition.SOUTHWEST: (0.0, 1.0),
    CropPosition.LEFT: (0.0, 0.5),
    CropPosition.WEST: (0.0, 0.5),
    CropPosition.LEFT_TOP: (0.0, 0.0),
    CropPosition.NORTHWEST: (0.0, 0.0),
}


class ResizeFit(StrEnum):
    COVER = "cover"
    CONTAIN = "contain"
    FILL = "fill"
    INSIDE = "inside"
    OUTSIDE = "outside"


# ─────────────────────────────────────────────────────────────
# Size configuration
# ─────────────────────────────────────────────────────────────


class SizeSpec(BaseModel):
    """A named target size an upload should be resized to."""

    name: str = Field(..., min_length=1, description="Unique size name")
    width: int | None = Field(default=None, gt=0, description="Target width in pixels")
    height: int | None = Field(default=None, gt=0, description="Target height in pixels")
    crop: CropPosition | None = Field(default=None, description="Crop anchor (default centre)")

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_has_dimension(self) -> "SizeSpec":
        if self.width is None and self.height is None:
            raise ValueError(f"Size '{self.name}' needs a width or a height")
        return self

    def fits_within(self, dimensions: "ProbedDimensions") -> bool:
        """True when at least one numeric target dimension does not exceed the source."""
        return (self.width is not None and self.width <= dimensions.width) or (
            self.height is not None and self.height <= dimensions.height
        )


class ProbedDimensions(BaseModel):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class ResizeOptions(BaseModel):
    """Resize behaviour applied to a size.

    When configured globally it takes precedence over every size's crop anchor.
    """

    fit: ResizeFit = ResizeFit.COVER
    position: CropPosition = CropPosition.CENTRE
    background: tuple[int, int, int, int] = Field(
        default=(0, 0, 0, 255),
        description="RGBA fill used by the 'contain' fit",
    )
    without_enlargement: bool = False
    without_reduction: bool = False

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)

    @field_validator("background")
    @classmethod
    def validate_background(cls, v: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
        if any(channel < 0 or channel > 255 for channel in v):
            raise ValueError("Background channels must be within 0-255")
        return v


class FormatOption(BaseModel):
    """Output format applied uniformly to every size."""

    format: str = Field(..., description="Target format (webp, png, jpeg, ...)")
    options: dict[str, int | float | bool | str] = Field(
        default_factory=dict,
        description="Encoder options passed through to the codec (quality, lossless, ...)",
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if not fmt.isalnum():
            raise ValueError(f"Invalid output format: {v!r}")
        return fmt


class UploadConfig(BaseModel):
    """Upload configuration consumed by resize_and_save."""

    image_sizes: list[SizeSpec] = Field(default_factory=list)
    resize_options: ResizeOptions | None = None
    format_options: FormatOption | None = None
    disable_local_storage: bool = False
    static_dir: str = Field(..., min_length=1, description="Directory resized files are written to")

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


# ─────────────────────────────────────────────────────────────
# Results
# ─────────────────────────────────────────────────────────────


class ResizeOutcome(BaseModel):
    """Metadata of one generated size."""

    name: str
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    filename: str
    filesize: int = Field(..., ge=0, description="Encoded size in bytes")
    mime_type: str

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid", frozen=True)


class ResizeResult(BaseModel):
    """Outcomes keyed by size name, plus the encoded bytes per size name."""

    sizes: dict[str, ResizeOutcome] = Field(default_factory=dict)
    buffers: dict[str, bytes] = Field(default_factory=dict)
