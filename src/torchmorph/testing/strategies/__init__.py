"""Hypothesis strategies for morphology testing."""

from ._structuring_elements import structuring_elements
from ._surfaces import pixel_formats, regions, surfaces

__all__ = [
    "pixel_formats",
    "regions",
    "structuring_elements",
    "surfaces",
]
