"""Neighborhood min/max reduction shared by erosion and dilation."""

from __future__ import annotations

from typing import Literal, Tuple

import torch
from torch import Tensor

from torchmorph._exceptions import InvalidRegion
from torchmorph.morphology._structuring_element import StructuringElement

Operation = Literal["erosion", "dilation"]

_COMBINE = {
    "erosion": torch.minimum,
    "dilation": torch.maximum,
}

# dtypes torch.minimum / torch.maximum do not implement, mapped to the
# dtype they are reduced in.
_WIDENED = {
    torch.bool: torch.uint8,
    torch.uint16: torch.int64,
    torch.uint32: torch.int64,
}


def _identity(dtype: torch.dtype, operation: Operation) -> float:
    """Value that never wins the reduction, used for out-of-bounds cells."""
    if dtype.is_floating_point:
        return float("inf") if operation == "erosion" else float("-inf")
    info = torch.iinfo(dtype)
    return info.max if operation == "erosion" else info.min


def check_region(
    region: Tuple[int, int, int, int] | None,
    width: int,
    height: int,
    name: str,
) -> Tuple[int, int, int, int]:
    """Normalize ``region`` to ``(x, y, w, h)`` inside a width x height image."""
    if region is None:
        return (0, 0, width, height)
    try:
        x, y, w, h = (int(v) for v in region)
    except (TypeError, ValueError) as error:
        raise InvalidRegion(
            f"{name}: region must be (x, y, width, height), got {region!r}"
        ) from error
    if w <= 0 or h <= 0 or x < 0 or y < 0 or x + w > width or y + h > height:
        raise InvalidRegion(
            f"{name}: region {(x, y, w, h)} is not contained in the "
            f"{width}x{height} image"
        )
    return (x, y, w, h)


def reduce_neighborhood(
    input: Tensor,
    structuring_element: StructuringElement,
    operation: Operation,
    *,
    region: Tuple[int, int, int, int] | None = None,
) -> Tensor:
    r"""Reduce each pixel's structuring-element neighborhood to its min or max.

    For every output pixel :math:`(x, y)` of ``region``

    .. math::
        g(x, y) = \operatorname{reduce}_{(d_y, d_x) \in B,\
            (x + d_x, y + d_y) \in \Omega} f(x + d_x, y + d_y)

    where :math:`\Omega` is the image domain and ``reduce`` is ``min`` for
    erosion and ``max`` for dilation. Neighbors outside the image are left
    out of the reduction rather than padded with a value. Neighbors outside
    ``region`` but inside the image are read normally. A pixel left with no
    neighbor at all, possible only when the origin cell is inactive, keeps
    its value.

    Parameters
    ----------
    input : Tensor, shape (*, H, W)
        Samples to reduce. Leading dimensions (channels, batch) are reduced
        independently with the same neighborhoods.
    structuring_element : StructuringElement
        Neighborhood shape, origin at its center.
    operation : {"erosion", "dilation"}
        Reduction to perform.
    region : tuple of int, optional
        ``(x, y, width, height)`` of the pixels to compute. Default is the
        whole image.

    Returns
    -------
    Tensor, shape (*, height, width)
        Reduced values for the pixels of ``region``. ``input`` is not
        modified.
    """
    if operation not in _COMBINE:
        raise ValueError(
            f"operation must be one of {list(_COMBINE.keys())}, got '{operation}'"
        )
    if input.dim() < 2:
        raise ValueError(
            f"{operation}: input must have at least 2 dimensions, "
            f"got {input.dim()}"
        )
    if input.is_complex():
        raise ValueError(f"{operation}: complex input is not supported")
    if input.dtype == torch.uint64:
        raise ValueError(f"{operation}: uint64 input is not supported")

    height, width = input.shape[-2:]
    x, y, w, h = check_region(region, width, height, operation)
    r = structuring_element.radius

    # Window of the input needed for the region, framed by r cells of the
    # identity value wherever it would leave the image.
    top, bottom = max(y - r, 0), min(y + h + r, height)
    left, right = max(x - r, 0), min(x + w + r, width)

    source = input.to(_WIDENED.get(input.dtype, input.dtype))

    padded = source.new_full(
        (*source.shape[:-2], h + 2 * r, w + 2 * r),
        _identity(source.dtype, operation),
    )
    padded[
        ...,
        top - (y - r) : bottom - (y - r),
        left - (x - r) : right - (x - r),
    ] = source[..., top:bottom, left:right]

    combine = _COMBINE[operation]
    offsets = structuring_element.offsets()
    output = None
    for dy, dx in offsets:
        window = padded[..., r + dy : r + dy + h, r + dx : r + dx + w]
        output = window.clone() if output is None else combine(output, window)

    if (0, 0) not in offsets:
        # Without the origin a pixel near the border may have no neighbor
        # at all; such pixels keep their value.
        inside = torch.zeros(h + 2 * r, w + 2 * r, dtype=torch.bool)
        inside[
            top - (y - r) : bottom - (y - r),
            left - (x - r) : right - (x - r),
        ] = True
        found = torch.zeros(h, w, dtype=torch.bool)
        for dy, dx in offsets:
            found |= inside[r + dy : r + dy + h, r + dx : r + dx + w]
        output = torch.where(
            found.to(source.device), output, source[..., y : y + h, x : x + w]
        )

    return output.to(input.dtype)
