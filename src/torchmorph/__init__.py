"""torchmorph: mathematical morphology on raster images with PyTorch."""

from . import morphology, surface
from ._exceptions import (
    DimensionMismatch,
    InvalidRegion,
    InvalidStructuringElement,
    MorphologyError,
    PixelFormatMismatch,
    UnsupportedPixelFormat,
)

__all__ = [
    "DimensionMismatch",
    "InvalidRegion",
    "InvalidStructuringElement",
    "MorphologyError",
    "PixelFormatMismatch",
    "UnsupportedPixelFormat",
    "morphology",
    "surface",
]

__version__ = "0.1.0"
