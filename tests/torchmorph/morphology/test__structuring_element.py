"""Tests for structuring elements."""

import pytest
import torch

from torchmorph import InvalidStructuringElement
from torchmorph.morphology import StructuringElement, cross, disk, square


class TestStructuringElementConstruction:
    """Tests for validation at construction."""

    def test_square(self):
        """Default square is 3x3 with its origin at the center."""
        se = square()
        assert se.size == 3
        assert se.radius == 1
        assert se.origin == (1, 1)
        assert len(se.offsets()) == 9

    def test_single_cell(self):
        """A 1x1 element is the identity neighborhood."""
        se = StructuringElement([[True]])
        assert se.offsets() == ((0, 0),)

    def test_integer_mask(self):
        """Integer masks with values 0 and 1 are accepted."""
        se = StructuringElement([[0, 1, 0], [1, 1, 1], [0, 1, 0]])
        assert se == cross(3)

    def test_even_side_raises(self):
        """Even side lengths are rejected."""
        with pytest.raises(InvalidStructuringElement, match="odd"):
            StructuringElement(torch.ones(4, 4, dtype=torch.bool))

    def test_zero_side_raises(self):
        """Zero side length is rejected."""
        with pytest.raises(InvalidStructuringElement, match="odd"):
            StructuringElement(torch.zeros(0, 0, dtype=torch.bool))

    def test_all_false_raises(self):
        """Elements without an active cell are rejected."""
        with pytest.raises(InvalidStructuringElement, match="no active"):
            StructuringElement(torch.zeros(3, 3, dtype=torch.bool))

    def test_non_square_raises(self):
        """Rectangular masks are rejected."""
        with pytest.raises(InvalidStructuringElement, match="square"):
            StructuringElement(torch.ones(3, 5, dtype=torch.bool))

    def test_non_binary_values_raise(self):
        """Values other than 0 and 1 are rejected."""
        with pytest.raises(InvalidStructuringElement, match="0 or 1"):
            StructuringElement([[1, 2, 1], [1, 1, 1], [1, 1, 1]])

    def test_is_value_error(self):
        """Invalid elements are also ValueErrors."""
        with pytest.raises(ValueError):
            StructuringElement([[1, 1]])


class TestStructuringElementOffsets:
    """Tests for offset enumeration."""

    def test_cross_offsets(self):
        """Offsets are relative to the origin, in row-major order."""
        assert cross(3).offsets() == ((-1, 0), (0, -1), (0, 0), (0, 1), (1, 0))

    def test_asymmetric_offsets(self):
        """Offsets reflect the mask without mirroring."""
        se = StructuringElement([[1, 0, 0], [0, 0, 0], [0, 0, 1]])
        assert se.offsets() == ((-1, -1), (1, 1))

    def test_immutable(self):
        """Changing the returned mask leaves the element unchanged."""
        se = square(3)
        mask = se.mask
        mask.zero_()
        assert len(se.offsets()) == 9
        assert se.mask.all()

    def test_source_tensor_not_shared(self):
        """Changing the source tensor leaves the element unchanged."""
        mask = torch.ones(3, 3, dtype=torch.bool)
        se = StructuringElement(mask)
        mask[0, 0] = False
        assert se == square(3)


class TestStructuringElementFactories:
    """Tests for the shape factories."""

    def test_disk_radius_one_is_cross(self):
        """A radius-1 disk is the 3x3 cross."""
        assert disk(1) == cross(3)

    def test_disk_radius_zero(self):
        """A radius-0 disk is the single origin cell."""
        assert disk(0).offsets() == ((0, 0),)

    def test_disk_radius_two(self):
        """A radius-2 disk keeps the 13 cells within distance 2."""
        se = disk(2)
        assert se.size == 5
        assert len(se.offsets()) == 13
        assert (0, 2) in se.offsets()
        assert (1, 2) not in se.offsets()

    def test_cross_even_raises(self):
        """Factories validate like the constructor."""
        with pytest.raises(InvalidStructuringElement):
            cross(4)

    def test_hashable(self):
        """Equal elements hash equally."""
        assert hash(square(5)) == hash(StructuringElement(torch.ones(5, 5)))
