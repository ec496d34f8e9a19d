from __future__ import annotations

from typing import Sequence

import hypothesis.strategies
import torch

from torchmorph.morphology import SUPPORTED_FORMATS
from torchmorph.surface import PixelFormat, Region, UnmanagedImage


def pixel_formats(
    formats: Sequence[PixelFormat] = SUPPORTED_FORMATS,
) -> hypothesis.strategies.SearchStrategy[PixelFormat]:
    """Strategy for pixel formats accepted by the morphology filters."""
    return hypothesis.strategies.sampled_from(list(formats))


@hypothesis.strategies.composite
def surfaces(
    draw: hypothesis.strategies.DrawFn,
    pixel_format: PixelFormat | None = None,
    min_side: int = 1,
    max_side: int = 12,
    padded_stride: bool = True,
    max_offset: int = 7,
) -> UnmanagedImage:
    """Strategy for unmanaged images filled with random samples.

    With ``padded_stride`` the row stride may exceed the row size so that
    stride handling is exercised. The first pixel sits up to ``max_offset``
    bytes into the buffer, behind random bytes that are not part of the
    image.
    """
    if pixel_format is None:
        pixel_format = draw(pixel_formats())
    width = draw(hypothesis.strategies.integers(min_side, max_side))
    height = draw(hypothesis.strategies.integers(min_side, max_side))
    stride = width * pixel_format.bytes_per_pixel
    if padded_stride:
        stride += draw(hypothesis.strategies.integers(0, 7))
    offset = draw(hypothesis.strategies.integers(0, max_offset))

    seed = draw(hypothesis.strategies.integers(0, 2**31 - 1))
    generator = torch.Generator().manual_seed(seed)
    samples = torch.randint(
        0,
        pixel_format.max_value + 1,
        (height, width, pixel_format.channels),
        generator=generator,
        dtype=torch.int32,
    )
    image = UnmanagedImage.from_tensor(samples, pixel_format, stride=stride)
    if offset == 0:
        return image
    leading = torch.randint(
        0, 256, (offset,), generator=generator, dtype=torch.uint8
    )
    return UnmanagedImage(
        torch.cat([leading, image.buffer]),
        width,
        height,
        stride,
        pixel_format,
        offset=offset,
    )


@hypothesis.strategies.composite
def regions(
    draw: hypothesis.strategies.DrawFn,
    width: int,
    height: int,
) -> Region:
    """Strategy for non-empty regions inside a width x height surface."""
    x = draw(hypothesis.strategies.integers(0, width - 1))
    y = draw(hypothesis.strategies.integers(0, height - 1))
    w = draw(hypothesis.strategies.integers(1, width - x))
    h = draw(hypothesis.strategies.integers(1, height - y))
    return Region(x, y, w, h)
