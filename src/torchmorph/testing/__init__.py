"""Testing helpers: hypothesis strategies and a slow reference reducer.

Example usage:

    import hypothesis

    from torchmorph.morphology import Erosion
    from torchmorph.testing import structuring_elements, surfaces

    @hypothesis.given(surfaces(), structuring_elements())
    def test_in_place_matches_copy(image, element):
        ...
"""

from ._reference import reference_reduce
from .strategies import (
    pixel_formats,
    regions,
    structuring_elements,
    surfaces,
)

__all__ = [
    "pixel_formats",
    "reference_reduce",
    "regions",
    "structuring_elements",
    "surfaces",
]
