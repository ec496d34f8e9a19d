"""Tests for byte-level sample access."""

import pytest
import torch

from torchmorph.surface import (
    Bitmap,
    PixelFormat,
    Region,
    UnmanagedImage,
    copy_pixels,
    read_samples,
    write_samples,
)


class TestReadSamples:
    """Tests for decoding samples."""

    def test_offset_and_stride(self):
        """Rows start at offset + y * stride."""
        image = UnmanagedImage(
            torch.arange(16, dtype=torch.uint8),
            width=2,
            height=2,
            stride=5,
            pixel_format=PixelFormat.GRAY8,
            offset=3,
        )
        samples = read_samples(image)
        assert torch.equal(
            samples, torch.tensor([[[3, 4], [8, 9]]], dtype=torch.int32)
        )

    def test_sixteen_bit_little_endian(self):
        """Two-byte samples are little-endian and unsigned."""
        image = UnmanagedImage(
            torch.tensor([0x34, 0x12, 0xFF, 0xFF], dtype=torch.uint8),
            width=2,
            height=1,
            stride=4,
            pixel_format=PixelFormat.GRAY16,
        )
        samples = read_samples(image)
        assert samples.tolist() == [[[0x1234, 0xFFFF]]]

    def test_channel_planes_in_memory_order(self):
        """Each channel becomes one plane, in memory order."""
        image = UnmanagedImage(
            torch.tensor([1, 2, 3, 4, 5, 6], dtype=torch.uint8),
            width=2,
            height=1,
            stride=6,
            pixel_format=PixelFormat.RGB24,
        )
        samples = read_samples(image)
        assert samples.shape == (3, 1, 2)
        assert samples[:, 0, 0].tolist() == [1, 2, 3]
        assert samples[:, 0, 1].tolist() == [4, 5, 6]

    def test_region(self):
        """Only the requested rectangle is read."""
        values = torch.arange(20, dtype=torch.int32).reshape(4, 5)
        image = UnmanagedImage.from_tensor(values, PixelFormat.GRAY8)
        samples = read_samples(image, Region(1, 2, 3, 2))
        assert torch.equal(samples[0], values[2:4, 1:4])

    def test_region_outside_raises(self):
        """Regions must lie inside the surface."""
        image = UnmanagedImage.create(4, 4, PixelFormat.GRAY8)
        with pytest.raises(ValueError, match="outside"):
            read_samples(image, Region(2, 2, 3, 1))


class TestWriteSamples:
    """Tests for encoding samples."""

    def test_row_padding_untouched(self):
        """Bytes between the row end and the stride are left alone."""
        image = UnmanagedImage(
            torch.full((12,), 0xAA, dtype=torch.uint8),
            width=2,
            height=2,
            stride=6,
            pixel_format=PixelFormat.GRAY16,
        )
        write_samples(image, torch.tensor([[[1, 2], [3, 4]]]))
        assert image.buffer.tolist() == [
            1, 0, 2, 0, 0xAA, 0xAA,
            3, 0, 4, 0, 0xAA, 0xAA,
        ]  # fmt: skip

    def test_region_only(self):
        """Pixels outside the region keep their value."""
        image = UnmanagedImage.from_tensor(
            torch.full((3, 3), 7), PixelFormat.GRAY8
        )
        write_samples(image, torch.zeros(1, 1, 2, dtype=torch.int32), Region(1, 1, 2, 1))
        expected = torch.full((3, 3), 7, dtype=torch.int32)
        expected[1, 1:3] = 0
        assert torch.equal(image.to_tensor(), expected)

    def test_shape_mismatch_raises(self):
        """Samples must match the region and channel count."""
        image = UnmanagedImage.create(3, 3, PixelFormat.RGB24)
        with pytest.raises(ValueError, match="shape"):
            write_samples(image, torch.zeros(1, 3, 3, dtype=torch.int32))

    def test_read_only_raises(self):
        """Read-only locked data cannot be written."""
        bitmap = Bitmap(2, 2, PixelFormat.GRAY8)
        data = bitmap.lock_bits(read_only=True)
        try:
            with pytest.raises(ValueError, match="read-only"):
                write_samples(data, torch.zeros(1, 2, 2, dtype=torch.int32))
        finally:
            bitmap.unlock_bits(data)


class TestCopyPixels:
    """Tests for raw pixel copies."""

    def test_region_copy_between_strides(self):
        """Copies honor each surface's own stride."""
        values = torch.arange(12, dtype=torch.int32).reshape(3, 4)
        source = UnmanagedImage.from_tensor(values, PixelFormat.GRAY8, stride=9)
        destination = UnmanagedImage.create(4, 3, PixelFormat.GRAY8)
        copy_pixels(source, destination, Region(1, 0, 2, 2))
        expected = torch.zeros(3, 4, dtype=torch.int32)
        expected[0:2, 1:3] = values[0:2, 1:3]
        assert torch.equal(destination.to_tensor(), expected)

    def test_format_mismatch_raises(self):
        """Copies need identical pixel formats."""
        source = UnmanagedImage.create(2, 2, PixelFormat.GRAY8)
        destination = UnmanagedImage.create(2, 2, PixelFormat.GRAY16)
        with pytest.raises(ValueError, match="cannot copy"):
            copy_pixels(source, destination)

    def test_size_mismatch_raises(self):
        """Copies need identical dimensions."""
        source = UnmanagedImage.create(2, 2, PixelFormat.GRAY8)
        destination = UnmanagedImage.create(3, 2, PixelFormat.GRAY8)
        with pytest.raises(ValueError, match="cannot copy"):
            copy_pixels(source, destination)
