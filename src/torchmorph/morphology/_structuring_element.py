"""Flat structuring elements."""

from __future__ import annotations

from typing import Sequence, Tuple

import torch
from torch import Tensor

from torchmorph._exceptions import InvalidStructuringElement


class StructuringElement:
    """Odd-sized square Boolean mask with its origin at the center cell.

    Parameters
    ----------
    mask : Tensor or nested sequence
        Square matrix of side ``S`` (odd, ``S >= 1``). Boolean, or integer
        with values restricted to 0 and 1. At least one cell must be set.

    Raises
    ------
    InvalidStructuringElement
        If the mask is not 2-D, not square, has an even or zero side, holds
        values other than 0/1, or has no active cell.

    Examples
    --------
    >>> se = StructuringElement([[0, 1, 0], [1, 1, 1], [0, 1, 0]])
    >>> se.size, se.origin
    (3, (1, 1))
    >>> se.offsets()
    ((-1, 0), (0, -1), (0, 0), (0, 1), (1, 0))
    """

    __slots__ = ("_mask", "_offsets")

    def __init__(self, mask: Tensor | Sequence[Sequence[int]]):
        try:
            mask = torch.as_tensor(mask)
        except (TypeError, ValueError, RuntimeError) as error:
            raise InvalidStructuringElement(
                f"structuring element must be a square matrix: {error}"
            ) from error

        if mask.dim() != 2 or mask.shape[0] != mask.shape[1]:
            raise InvalidStructuringElement(
                f"structuring element must be a square matrix, "
                f"got shape {tuple(mask.shape)}"
            )
        size = mask.shape[0]
        if size == 0 or size % 2 == 0:
            raise InvalidStructuringElement(
                f"structuring element side must be odd and positive, got {size}"
            )
        if mask.dtype != torch.bool:
            if mask.is_complex() or not ((mask == 0) | (mask == 1)).all():
                raise InvalidStructuringElement(
                    "structuring element values must be 0 or 1"
                )
            mask = mask != 0
        if not mask.any():
            raise InvalidStructuringElement(
                "structuring element has no active cell"
            )

        self._mask = mask.detach().to("cpu").clone()
        radius = size // 2
        self._offsets = tuple(
            (int(dy) - radius, int(dx) - radius)
            for dy, dx in torch.nonzero(self._mask).tolist()
        )

    @property
    def size(self) -> int:
        return self._mask.shape[0]

    @property
    def radius(self) -> int:
        """Distance from the origin to the element's edge."""
        return self.size // 2

    @property
    def origin(self) -> Tuple[int, int]:
        return (self.radius, self.radius)

    @property
    def mask(self) -> Tensor:
        """Copy of the Boolean mask."""
        return self._mask.clone()

    def offsets(self) -> Tuple[Tuple[int, int], ...]:
        """Active ``(dy, dx)`` offsets relative to the origin, row-major."""
        return self._offsets

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StructuringElement):
            return NotImplemented
        return torch.equal(self._mask, other._mask)

    def __hash__(self) -> int:
        return hash((self.size, self._offsets))

    def __repr__(self) -> str:
        rows = ["".join("#" if v else "." for v in row) for row in self._mask.tolist()]
        return f"StructuringElement({rows!r})"


def as_structuring_element(
    structuring_element: (
        StructuringElement | Tensor | Sequence[Sequence[int]] | None
    ),
) -> StructuringElement:
    """Coerce ``structuring_element``; ``None`` gives the 3x3 square."""
    if structuring_element is None:
        return square(3)
    if isinstance(structuring_element, StructuringElement):
        return structuring_element
    return StructuringElement(structuring_element)


def square(size: int = 3) -> StructuringElement:
    """All-true ``size`` x ``size`` element."""
    if size <= 0:
        raise InvalidStructuringElement(
            f"structuring element side must be odd and positive, got {size}"
        )
    return StructuringElement(torch.ones(size, size, dtype=torch.bool))


def cross(size: int = 3) -> StructuringElement:
    """Plus-shaped element: the center row and column of a square."""
    if size <= 0:
        raise InvalidStructuringElement(
            f"structuring element side must be odd and positive, got {size}"
        )
    mask = torch.zeros(size, size, dtype=torch.bool)
    mask[size // 2, :] = True
    mask[:, size // 2] = True
    return StructuringElement(mask)


def disk(radius: int) -> StructuringElement:
    """Euclidean disk of the given radius, side ``2 * radius + 1``."""
    if radius < 0:
        raise InvalidStructuringElement(
            f"disk radius must be non-negative, got {radius}"
        )
    coordinates = torch.arange(-radius, radius + 1)
    y, x = torch.meshgrid(coordinates, coordinates, indexing="ij")
    return StructuringElement(x * x + y * y <= radius * radius)
