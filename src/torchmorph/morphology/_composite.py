"""Closing and opening filters composed from erosion and dilation."""

from __future__ import annotations

import logging
from typing import Dict, Sequence, Tuple, Type

from torch import Tensor

from torchmorph.morphology._filters import (
    Dilation,
    Erosion,
    MorphologyFilter,
    _check_writable,
    locked,
)
from torchmorph.morphology._reduce import check_region
from torchmorph.morphology._structuring_element import (
    StructuringElement,
    as_structuring_element,
)
from torchmorph.surface import (
    Image,
    PixelFormat,
    UnmanagedImage,
    copy_pixels,
)

logger = logging.getLogger(__name__)


class CompositeFilter:
    """Two morphology filters applied in sequence with one structuring element.

    The first stage writes an intermediate image, the second stage filters
    that intermediate in place. Intermediates created here are disposed
    before returning unless they are the result.
    """

    name: str
    stages: Tuple[Type[MorphologyFilter], Type[MorphologyFilter]]

    def __init__(
        self,
        structuring_element: (
            StructuringElement | Tensor | Sequence | None
        ) = None,
    ):
        element = as_structuring_element(structuring_element)
        first, second = self.stages
        self._first = first(element)
        self._second = second(element)

    @property
    def structuring_element(self) -> StructuringElement:
        return self._first.structuring_element

    @property
    def format_translations(self) -> Dict[PixelFormat, PixelFormat]:
        return self._first.format_translations

    def apply(self, image: Image, *, out: Image | None = None) -> Image:
        """Filter ``image`` into a new image, or into ``out``.

        Same contract as :meth:`MorphologyFilter.apply`.
        """
        logger.debug("%s: applying to %r", self.name, image)
        if out is None:
            intermediate = self._first.apply(image)
            self._second.apply_in_place(intermediate)
            return intermediate

        self._first.apply(image, out=out)
        self._second.apply_in_place(out)
        return out

    def apply_in_place(
        self,
        image: Image,
        region: Tuple[int, int, int, int] | None = None,
    ) -> None:
        """Filter ``image`` in place, optionally only inside ``region``.

        Both stages honor ``region``: each writes only inside it and reads
        neighbors outside it.
        """
        self._first.check_source(image)
        if region is not None:
            region = check_region(region, image.width, image.height, self.name)
        _check_writable(image, self.name)

        logger.debug(
            "%s: applying in place to %r, region %s", self.name, image, region
        )
        with locked(image, read_only=False) as surface:
            intermediate = UnmanagedImage.create(
                surface.width, surface.height, surface.pixel_format
            )
            try:
                if region is None:
                    self._first.apply(surface, out=intermediate)
                else:
                    copy_pixels(surface, intermediate)
                    self._first.apply_in_place(intermediate, region)
                self._second.apply_in_place(intermediate, region)
                copy_pixels(intermediate, surface, region)
            finally:
                intermediate.dispose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.structuring_element!r})"


class Closing(CompositeFilter):
    """Closing filter: dilation followed by erosion.

    Fills small dark holes and gaps without growing bright regions overall.
    See :class:`Erosion` for the accepted pixel formats.

    Examples
    --------
    >>> closing = Closing()
    >>> result = closing.apply(bitmap)
    >>> closing.apply_in_place(bitmap, Region(0, 0, 32, 32))
    """

    name = "closing"
    stages = (Dilation, Erosion)


class Opening(CompositeFilter):
    """Opening filter: erosion followed by dilation.

    Removes small bright specks without shrinking bright regions overall.
    """

    name = "opening"
    stages = (Erosion, Dilation)
