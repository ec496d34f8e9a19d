"""Mathematical morphology operations.

Flat (Boolean structuring element) grayscale and color morphology. The
functional operators work on tensors shaped ``(*, H, W)``; the filter
classes work on image surfaces in any of their three representations.

Operations
----------
erosion : Morphological erosion (minimum over structuring element).
dilation : Morphological dilation (maximum over structuring element).
opening : Erosion followed by dilation.
closing : Dilation followed by erosion.

Filters
-------
Erosion, Dilation : Primitive surface filters.
Closing, Opening : Composite surface filters.
"""

from torchmorph.morphology._closing import closing
from torchmorph.morphology._composite import Closing, CompositeFilter, Opening
from torchmorph.morphology._dilation import dilation
from torchmorph.morphology._erosion import erosion
from torchmorph.morphology._filters import (
    SUPPORTED_FORMATS,
    Dilation,
    Erosion,
    MorphologyFilter,
)
from torchmorph.morphology._opening import opening
from torchmorph.morphology._reduce import reduce_neighborhood
from torchmorph.morphology._structuring_element import (
    StructuringElement,
    cross,
    disk,
    square,
)

__all__ = [
    "SUPPORTED_FORMATS",
    "Closing",
    "CompositeFilter",
    "Dilation",
    "Erosion",
    "MorphologyFilter",
    "Opening",
    "StructuringElement",
    "closing",
    "cross",
    "dilation",
    "disk",
    "erosion",
    "opening",
    "reduce_neighborhood",
    "square",
]
