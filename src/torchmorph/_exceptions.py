"""Exceptions raised by morphology filters."""


class MorphologyError(Exception):
    """Base exception for all morphology errors."""

    pass


class InvalidStructuringElement(MorphologyError, ValueError):
    """Structuring element is not a non-empty, odd-sided square mask."""

    pass


class UnsupportedPixelFormat(MorphologyError, ValueError):
    """Source pixel format is not accepted by the filter."""

    pass


class PixelFormatMismatch(MorphologyError, ValueError):
    """Destination pixel format differs from the expected output format."""

    pass


class DimensionMismatch(MorphologyError, ValueError):
    """Destination width or height differs from the source."""

    pass


class InvalidRegion(MorphologyError, ValueError):
    """Region is empty or not contained in the surface bounds."""

    pass
