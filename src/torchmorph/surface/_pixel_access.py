"""Byte-level sample access shared by every surface representation.

A surface is anything exposing ``buffer`` (1-D contiguous ``uint8`` tensor),
``offset``, ``stride``, ``width``, ``height`` and ``pixel_format``. Pixel
``(x, y)`` starts at byte ``offset + y * stride + x * bytes_per_pixel``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import torch
from torch import Tensor

from ._region import Region

if TYPE_CHECKING:
    from ._surface import Surface


def _rows(surface: Surface) -> Tensor:
    """Writable ``(height, width * bytes_per_pixel)`` view of the pixel rows."""
    row_bytes = surface.width * surface.pixel_format.bytes_per_pixel
    return surface.buffer[surface.offset :].as_strided(
        (surface.height, row_bytes), (surface.stride, 1)
    )


def _resolve(surface: Surface, region: Optional[Region]) -> Region:
    if region is None:
        return Region.full(surface.width, surface.height)
    region = Region(*region)
    if not region.contains(surface.width, surface.height):
        raise ValueError(
            f"region {tuple(region)} is outside the "
            f"{surface.width}x{surface.height} surface"
        )
    return region


def read_samples(surface: Surface, region: Optional[Region] = None) -> Tensor:
    """Decode the samples of ``region`` into a tensor.

    Parameters
    ----------
    surface : Surface
        Surface to read from.
    region : Region, optional
        Rectangle to read. Default is the whole surface.

    Returns
    -------
    Tensor, shape (channels, height, width), dtype int32
        Unsigned sample values, one plane per channel in memory order.
    """
    region = _resolve(surface, region)
    pixel_format = surface.pixel_format
    bpp = pixel_format.bytes_per_pixel
    block = _rows(surface)[
        region.y : region.bottom, region.x * bpp : region.right * bpp
    ]
    block = block.reshape(
        region.height,
        region.width,
        pixel_format.channels,
        pixel_format.bytes_per_sample,
    ).to(torch.int32)

    samples = block[..., 0]
    for k in range(1, pixel_format.bytes_per_sample):
        samples = samples | (block[..., k] << (8 * k))

    return samples.permute(2, 0, 1).contiguous()


def write_samples(
    surface: Surface,
    samples: Tensor,
    region: Optional[Region] = None,
) -> None:
    """Encode ``samples`` into ``region`` of ``surface``.

    ``samples`` has shape ``(channels, height, width)`` matching the region.
    Values are truncated to the sample width of the pixel format.
    """
    if getattr(surface, "read_only", False):
        raise ValueError("surface is locked read-only")

    region = _resolve(surface, region)
    pixel_format = surface.pixel_format
    expected = (pixel_format.channels, region.height, region.width)
    if tuple(samples.shape) != expected:
        raise ValueError(
            f"samples have shape {tuple(samples.shape)}, expected {expected}"
        )

    values = samples.permute(1, 2, 0).to(torch.int32)
    encoded = torch.stack(
        [
            (values >> (8 * k)) & 0xFF
            for k in range(pixel_format.bytes_per_sample)
        ],
        dim=-1,
    ).to(torch.uint8)

    bpp = pixel_format.bytes_per_pixel
    _rows(surface)[
        region.y : region.bottom, region.x * bpp : region.right * bpp
    ] = encoded.reshape(region.height, region.width * bpp)


def copy_pixels(
    source: Surface,
    destination: Surface,
    region: Optional[Region] = None,
) -> None:
    """Copy the raw bytes of ``region`` from ``source`` to ``destination``.

    Both surfaces must share pixel format and dimensions.
    """
    if source.pixel_format is not destination.pixel_format:
        raise ValueError(
            f"cannot copy {source.pixel_format!r} pixels into "
            f"{destination.pixel_format!r}"
        )
    if (source.width, source.height) != (destination.width, destination.height):
        raise ValueError(
            f"cannot copy a {source.width}x{source.height} surface into "
            f"{destination.width}x{destination.height}"
        )
    if getattr(destination, "read_only", False):
        raise ValueError("surface is locked read-only")

    region = _resolve(source, region)
    bpp = source.pixel_format.bytes_per_pixel
    rows = slice(region.y, region.bottom)
    columns = slice(region.x * bpp, region.right * bpp)
    _rows(destination)[rows, columns] = _rows(source)[rows, columns].clone()
