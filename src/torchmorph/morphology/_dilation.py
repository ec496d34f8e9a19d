"""Mathematical morphology dilation operation."""

from __future__ import annotations

from typing import Sequence, Tuple

from torch import Tensor

from torchmorph.morphology._reduce import reduce_neighborhood
from torchmorph.morphology._structuring_element import (
    StructuringElement,
    as_structuring_element,
)


def dilation(
    input: Tensor,
    structuring_element: StructuringElement | Tensor | Sequence | None = None,
    *,
    region: Tuple[int, int, int, int] | None = None,
) -> Tensor:
    r"""Compute 2-D flat morphological dilation.

    Dilation grows bright regions (or shrinks dark regions): every pixel
    becomes the maximum of its neighborhood.

    Mathematical Definition
    -----------------------
    .. math::
        \delta_B(f)(x) = \max_{b \in B,\ x + b \in \Omega} f(x + b)

    where :math:`B` is the set of active structuring-element offsets and
    :math:`\Omega` the image domain. Neighbors outside the image are
    excluded, so borders never see a phantom maximum.

    Parameters
    ----------
    input : Tensor, shape (*, H, W)
        Input tensor. The trailing two dimensions are spatial; leading
        dimensions (channels, batch) are dilated independently.
    structuring_element : StructuringElement, Tensor or nested sequence, optional
        Odd-sized square Boolean mask. Default is the 3x3 square.
    region : tuple of int, optional
        ``(x, y, width, height)`` of the pixels to dilate. Pixels outside it
        are copied unchanged; neighbors outside it are still read.

    Returns
    -------
    Tensor
        Dilated tensor with the same shape and dtype as input.

    Examples
    --------
    >>> image = torch.full((5, 5), 100, dtype=torch.uint8)
    >>> image[2, 2] = 200
    >>> dilation(image)[1:4, 1:4].unique()
    tensor([200], dtype=torch.uint8)
    >>> int(dilation(image)[0, 0])
    100

    Per-channel dilation of a color image with a 5x5 square:

    >>> rgb = torch.zeros(3, 32, 32)
    >>> result = dilation(rgb, torch.ones(5, 5, dtype=torch.bool))

    See Also
    --------
    erosion : Dual operation (minimum over neighborhood).
    opening : Erosion followed by dilation.
    closing : Dilation followed by erosion.
    """
    element = as_structuring_element(structuring_element)
    reduced = reduce_neighborhood(input, element, "dilation", region=region)
    if region is None:
        return reduced

    x, y, w, h = (int(v) for v in region)
    output = input.clone()
    output[..., y : y + h, x : x + w] = reduced
    return output
