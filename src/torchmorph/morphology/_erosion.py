"""Mathematical morphology erosion operation."""

from __future__ import annotations

from typing import Sequence, Tuple

from torch import Tensor

from torchmorph.morphology._reduce import reduce_neighborhood
from torchmorph.morphology._structuring_element import (
    StructuringElement,
    as_structuring_element,
)


def erosion(
    input: Tensor,
    structuring_element: StructuringElement | Tensor | Sequence | None = None,
    *,
    region: Tuple[int, int, int, int] | None = None,
) -> Tensor:
    r"""Compute 2-D flat morphological erosion.

    Erosion shrinks bright regions (or expands dark regions): every pixel
    becomes the minimum of its neighborhood.

    Mathematical Definition
    -----------------------
    .. math::
        \varepsilon_B(f)(x) = \min_{b \in B,\ x + b \in \Omega} f(x + b)

    where :math:`B` is the set of active structuring-element offsets and
    :math:`\Omega` the image domain. Neighbors outside the image are
    excluded, so borders never see a phantom minimum.

    Parameters
    ----------
    input : Tensor, shape (*, H, W)
        Input tensor. The trailing two dimensions are spatial; leading
        dimensions (channels, batch) are eroded independently.
    structuring_element : StructuringElement, Tensor or nested sequence, optional
        Odd-sized square Boolean mask. Default is the 3x3 square.
    region : tuple of int, optional
        ``(x, y, width, height)`` of the pixels to erode. Pixels outside it
        are copied unchanged; neighbors outside it are still read.

    Returns
    -------
    Tensor
        Eroded tensor with the same shape and dtype as input.

    Examples
    --------
    >>> image = torch.full((5, 5), 100, dtype=torch.uint8)
    >>> image[2, 2] = 200
    >>> bool((erosion(image) == 100).all())
    True

    See Also
    --------
    dilation : Dual operation (maximum over neighborhood).
    opening : Erosion followed by dilation.
    closing : Dilation followed by erosion.
    """
    element = as_structuring_element(structuring_element)
    reduced = reduce_neighborhood(input, element, "erosion", region=region)
    if region is None:
        return reduced

    x, y, w, h = (int(v) for v in region)
    output = input.clone()
    output[..., y : y + h, x : x + w] = reduced
    return output
