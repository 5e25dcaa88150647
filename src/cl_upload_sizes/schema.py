"""Upload sizes task parameters and output schema."""

from pathlib import PurePath
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common.compute_module import TaskOutput
from .common.schemas import ResizeOutcome, UploadConfig


class ImageSizesParams(BaseModel):
    """Parameters for generating the configured sizes of one upload.

    Attributes:
        input_path: Absolute path of the uploaded file
        saved_filename: Filename the upload was saved under (default: basename of input_path)
        mime_type: MIME type of the upload (default: sniffed from content)
        config: Upload configuration with the sizes to generate
    """

    input_path: str = Field(..., min_length=1, description="path to the uploaded file")
    saved_filename: str = Field(default="", description="filename the upload was saved under")
    mime_type: str | None = Field(default=None, description="MIME type of the upload")
    config: UploadConfig

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def default_saved_filename(self) -> "ImageSizesParams":
        if not self.saved_filename:
            self.saved_filename = PurePath(self.input_path).name
        return self


class ImageSizesOutput(TaskOutput):
    sizes: dict[str, ResizeOutcome] = Field(default_factory=dict)
