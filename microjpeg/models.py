"""Data models for the MicroJPEG SDK."""

from enum import Enum
from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class ResizeMode(str, Enum):
    """How the service fits an image into the requested width/height."""

    FIT = "fit"
    COVER = "cover"
    SCALE_WIDTH = "scalewidth"
    SCALE_HEIGHT = "scaleheight"
    THUMB = "thumb"


class CompressOptions(BaseModel):
    """Options for compression and format conversion."""

    quality: Optional[int] = None
    output_format: Optional[str] = None
    resize_width: Optional[int] = None
    resize_height: Optional[int] = None
    resize_mode: Optional[ResizeMode] = None


class BackgroundRemovalOptions(BaseModel):
    """Options for background removal."""

    output_format: Optional[str] = None
    quality: Optional[int] = None


class EnhanceOptions(BaseModel):
    """Options for AI upscaling.

    ``scale`` and ``face_enhance`` always go over the wire, so their defaults
    are what the service sees when the caller does not override them.
    """

    scale: Literal[2, 4, 8] = 2
    face_enhance: bool = False
    output_format: Optional[str] = None
    quality: Optional[int] = None


class _ApiModel(BaseModel):
    """Base for payloads returned by the API (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CompressionInfo(_ApiModel):
    """Result of compress, convert and remove-background calls."""

    download_url: str = Field(alias="downloadUrl")
    original_size: int = Field(alias="originalSize")
    compressed_size: int = Field(alias="compressedSize")
    savings_percent: float = Field(alias="savingsPercent")
    processing_time: int = Field(alias="processingTime")


class Dimensions(_ApiModel):
    width: int
    height: int


class EnhancementInfo(_ApiModel):
    """Result of an enhance call."""

    download_url: str = Field(alias="downloadUrl")
    original_dimensions: Dimensions = Field(alias="originalDimensions")
    new_dimensions: Dimensions = Field(alias="newDimensions")
    processing_time: int = Field(alias="processingTime")


ResultT = TypeVar("ResultT")


class ResultEnvelope(_ApiModel, Generic[ResultT]):
    """Success wrapper shared by every processing endpoint."""

    success: bool
    result: ResultT
    compression_count: int = Field(alias="compressionCount")


class UsageStats(_ApiModel):
    compressions: int = 0
    background_removals: int = Field(default=0, alias="backgroundRemovals")
    enhancements: int = 0


class UsageLimits(_ApiModel):
    compression_limit: int = Field(default=0, alias="compressionLimit")
    background_removal_limit: int = Field(default=0, alias="backgroundRemovalLimit")
    enhancement_limit: int = Field(default=0, alias="enhancementLimit")


class UsageInfo(_ApiModel):
    """Account tier, current usage and plan limits."""

    tier: str
    usage: UsageStats = Field(default_factory=UsageStats)
    limits: UsageLimits = Field(default_factory=UsageLimits)


class ErrorBody(_ApiModel):
    """Structured error payload sent with non-2xx responses."""

    error: Optional[str] = None
    message: Optional[str] = None
