"""Mathematical morphology closing operation."""

from __future__ import annotations

from typing import Sequence, Tuple

from torch import Tensor

from torchmorph.morphology._dilation import dilation
from torchmorph.morphology._erosion import erosion
from torchmorph.morphology._structuring_element import (
    StructuringElement,
    as_structuring_element,
)


def closing(
    input: Tensor,
    structuring_element: StructuringElement | Tensor | Sequence | None = None,
    *,
    region: Tuple[int, int, int, int] | None = None,
) -> Tensor:
    r"""Compute 2-D flat morphological closing.

    Closing is dilation followed by erosion with the same structuring element.
    It fills small dark holes and gaps without growing bright regions
    overall.

    Mathematical Definition
    -----------------------
    .. math::
        \varphi_B(f) = \varepsilon_B(\delta_B(f))

    where :math:`\delta_B` is dilation and :math:`\varepsilon_B` is erosion.

    Parameters
    ----------
    input : Tensor, shape (*, H, W)
        Input tensor. The trailing two dimensions are spatial.
    structuring_element : StructuringElement, Tensor or nested sequence, optional
        Odd-sized square Boolean mask. Default is the 3x3 square.
    region : tuple of int, optional
        ``(x, y, width, height)`` limiting both stages. The erosion stage
        reads dilated values inside the region and original values outside.

    Returns
    -------
    Tensor
        Closed tensor with the same shape and dtype as input.

    Examples
    --------
    Fill a one-pixel hole:

    >>> image = torch.ones(20, 20)
    >>> image[10, 10] = 0.0
    >>> closing(image)[10, 10].item()
    1.0

    Notes
    -----
    - Closing is extensive: ``closing(f, B) >= f`` when the origin of ``B``
      is active.
    - Closing is the dual of opening: ``closing(f, B) = -opening(-f, B)``
      for a symmetric ``B``.

    See Also
    --------
    opening : Dual operation (erosion followed by dilation).
    dilation : First step of closing.
    erosion : Second step of closing.
    """
    element = as_structuring_element(structuring_element)
    dilated = dilation(input, element, region=region)
    return erosion(dilated, element, region=region)
