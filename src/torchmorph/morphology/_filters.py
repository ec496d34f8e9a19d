"""Erosion and dilation filters over image surfaces."""

from __future__ import annotations

import contextlib
import logging
from typing import Dict, Iterator, Sequence, Tuple

from torch import Tensor

from torchmorph._exceptions import (
    DimensionMismatch,
    PixelFormatMismatch,
    UnsupportedPixelFormat,
)
from torchmorph.morphology._reduce import (
    Operation,
    check_region,
    reduce_neighborhood,
)
from torchmorph.morphology._structuring_element import (
    StructuringElement,
    as_structuring_element,
)
from torchmorph.surface import (
    Bitmap,
    Image,
    PixelFormat,
    Region,
    Surface,
    allocate_like,
    read_samples,
    write_samples,
)

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = (
    PixelFormat.GRAY8,
    PixelFormat.GRAY16,
    PixelFormat.RGB24,
    PixelFormat.RGBA32,
    PixelFormat.RGB48,
    PixelFormat.RGBA64,
)


@contextlib.contextmanager
def locked(image: Image, *, read_only: bool) -> Iterator[Surface]:
    """Directly addressable view of ``image`` for the duration of the block."""
    if isinstance(image, Bitmap):
        data = image.lock_bits(read_only=read_only)
        try:
            yield data
        finally:
            image.unlock_bits(data)
    else:
        yield image


def _check_writable(image: Image, name: str) -> None:
    if getattr(image, "read_only", False):
        raise ValueError(f"{name}: cannot write into read-only bitmap data")


class MorphologyFilter:
    """Flat morphology filter bound to one reduction.

    Subclasses set ``operation``; the reduction itself is selected from it
    by :func:`reduce_neighborhood`.

    Parameters
    ----------
    structuring_element : StructuringElement, Tensor or nested sequence, optional
        Odd-sized square Boolean mask. Default is the 3x3 square.
    """

    operation: Operation

    def __init__(
        self,
        structuring_element: (
            StructuringElement | Tensor | Sequence | None
        ) = None,
    ):
        self._structuring_element = as_structuring_element(structuring_element)
        self._format_translations = {
            pixel_format: pixel_format for pixel_format in SUPPORTED_FORMATS
        }

    @property
    def structuring_element(self) -> StructuringElement:
        return self._structuring_element

    @property
    def format_translations(self) -> Dict[PixelFormat, PixelFormat]:
        """Output pixel format for every accepted input pixel format."""
        return dict(self._format_translations)

    def check_source(self, image: Image) -> None:
        if image.pixel_format not in self._format_translations:
            raise UnsupportedPixelFormat(
                f"{self.operation}: unsupported pixel format "
                f"{image.pixel_format!r}, expected one of "
                f"{list(self._format_translations.keys())}"
            )

    def check_destination(self, source: Image, destination: Image) -> None:
        expected = self._format_translations[source.pixel_format]
        if destination.pixel_format is not expected:
            raise PixelFormatMismatch(
                f"{self.operation}: destination pixel format "
                f"{destination.pixel_format!r} does not match {expected!r}"
            )
        if (destination.width, destination.height) != (
            source.width,
            source.height,
        ):
            raise DimensionMismatch(
                f"{self.operation}: destination is "
                f"{destination.width}x{destination.height}, source is "
                f"{source.width}x{source.height}"
            )
        _check_writable(destination, self.operation)

    def apply(self, image: Image, *, out: Image | None = None) -> Image:
        """Filter ``image`` into a new image, or into ``out``.

        Parameters
        ----------
        image : Bitmap, BitmapData or UnmanagedImage
            Source image. Left unchanged.
        out : Bitmap, BitmapData or UnmanagedImage, optional
            Destination with the source's dimensions and the pixel format
            given by :attr:`format_translations`.

        Returns
        -------
        Bitmap or UnmanagedImage
            ``out`` if given. Otherwise a new :class:`UnmanagedImage` for an
            unmanaged source and a new :class:`Bitmap` for the others.

        Raises
        ------
        UnsupportedPixelFormat
            If the source pixel format is not accepted.
        PixelFormatMismatch, DimensionMismatch
            If ``out`` does not match the expected format or size.
        """
        self.check_source(image)
        if out is image:
            self.apply_in_place(image)
            return out
        if out is not None:
            self.check_destination(image, out)
            result = out
        else:
            result = allocate_like(
                image, self._format_translations[image.pixel_format]
            )

        with locked(image, read_only=True) as source, locked(
            result, read_only=False
        ) as destination:
            self._process(source, destination, None)
        return result

    def apply_in_place(
        self,
        image: Image,
        region: Tuple[int, int, int, int] | None = None,
    ) -> None:
        """Filter ``image`` in place, optionally only inside ``region``.

        Pixels outside ``region`` are not written but are still read as
        neighbors of the pixels inside it.

        Raises
        ------
        UnsupportedPixelFormat
            If the pixel format is not accepted.
        InvalidRegion
            If ``region`` is empty or not contained in the image.
        """
        self.check_source(image)
        region = check_region(region, image.width, image.height, self.operation)
        _check_writable(image, self.operation)

        with locked(image, read_only=False) as surface:
            self._process(surface, surface, Region(*region))

    def _process(
        self,
        source: Surface,
        destination: Surface,
        region: Region | None,
    ) -> None:
        if region is None:
            region = Region.full(source.width, source.height)
        pixel_format = source.pixel_format
        r = self._structuring_element.radius

        logger.debug(
            "%s: %dx%d element on %dx%d %s surface, region %s",
            self.operation,
            self._structuring_element.size,
            self._structuring_element.size,
            source.width,
            source.height,
            pixel_format.name,
            tuple(region),
        )

        # Everything the region's neighborhoods can reach.
        left = max(region.x - r, 0)
        top = max(region.y - r, 0)
        window = Region(
            left,
            top,
            min(region.right + r, source.width) - left,
            min(region.bottom + r, source.height) - top,
        )
        samples = read_samples(source, window)
        inner = (region.x - left, region.y - top, region.width, region.height)

        output = samples[
            :,
            inner[1] : inner[1] + region.height,
            inner[0] : inner[0] + region.width,
        ].clone()
        # Alpha, when present, is the last channel and passes through.
        colors = pixel_format.color_channels
        output[:colors] = reduce_neighborhood(
            samples[:colors],
            self._structuring_element,
            self.operation,
            region=inner,
        )
        write_samples(destination, output, region)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._structuring_element!r})"


class Erosion(MorphologyFilter):
    """Erosion filter: every pixel becomes the minimum of its neighborhood.

    Accepts 8 and 16 bit grayscale and 24/32/48/64 bit color surfaces. Color
    channels are eroded independently; alpha is copied unchanged.

    Examples
    --------
    >>> samples = torch.randint(0, 256, (32, 32), dtype=torch.uint8)
    >>> image = UnmanagedImage.from_tensor(samples, PixelFormat.GRAY8)
    >>> eroded = Erosion().apply(image)
    >>> Erosion(cross(5)).apply_in_place(image, (8, 8, 16, 16))
    """

    operation = "erosion"


class Dilation(MorphologyFilter):
    """Dilation filter: every pixel becomes the maximum of its neighborhood.

    Accepts the same formats as :class:`Erosion`; alpha is copied unchanged.
    """

    operation = "dilation"
