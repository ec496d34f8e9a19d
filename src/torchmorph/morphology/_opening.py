"""Mathematical morphology opening operation."""

from __future__ import annotations

from typing import Sequence, Tuple

from torch import Tensor

from torchmorph.morphology._dilation import dilation
from torchmorph.morphology._erosion import erosion
from torchmorph.morphology._structuring_element import (
    StructuringElement,
    as_structuring_element,
)


def opening(
    input: Tensor,
    structuring_element: StructuringElement | Tensor | Sequence | None = None,
    *,
    region: Tuple[int, int, int, int] | None = None,
) -> Tensor:
    r"""Compute 2-D flat morphological opening.

    Opening is erosion followed by dilation with the same structuring element.
    It removes small bright specks without shrinking bright regions overall.

    Mathematical Definition
    -----------------------
    .. math::
        \gamma_B(f) = \delta_B(\varepsilon_B(f))

    Parameters
    ----------
    input : Tensor, shape (*, H, W)
        Input tensor. The trailing two dimensions are spatial.
    structuring_element : StructuringElement, Tensor or nested sequence, optional
        Odd-sized square Boolean mask. Default is the 3x3 square.
    region : tuple of int, optional
        ``(x, y, width, height)`` limiting both stages.

    Returns
    -------
    Tensor
        Opened tensor with the same shape and dtype as input.

    Notes
    -----
    - Opening is anti-extensive: ``opening(f, B) <= f`` when the origin of
      ``B`` is active.

    See Also
    --------
    closing : Dual operation (dilation followed by erosion).
    erosion : First step of opening.
    dilation : Second step of opening.
    """
    element = as_structuring_element(structuring_element)
    eroded = erosion(input, element, region=region)
    return dilation(eroded, element, region=region)
