"""Image surfaces: raw buffers, owned bitmaps and locked bitmap views."""

from __future__ import annotations

from typing import Optional, Protocol, Union

import torch
from torch import Tensor

from ._pixel_access import read_samples, write_samples
from ._pixel_format import PixelFormat
from ._region import Region


class Surface(Protocol):
    """Directly addressable pixel buffer."""

    buffer: Tensor
    offset: int
    stride: int
    width: int
    height: int
    pixel_format: PixelFormat


def _default_stride(width: int, pixel_format: PixelFormat) -> int:
    # Rows are padded to a 4-byte boundary.
    return (width * pixel_format.bytes_per_pixel + 3) // 4 * 4


def _check_layout(
    buffer: Tensor,
    width: int,
    height: int,
    stride: int,
    offset: int,
    pixel_format: PixelFormat,
) -> None:
    if not isinstance(pixel_format, PixelFormat):
        raise TypeError(
            f"pixel_format must be a PixelFormat, got {type(pixel_format).__name__}"
        )
    if width <= 0 or height <= 0:
        raise ValueError(
            f"width and height must be positive, got {width}x{height}"
        )
    row_bytes = width * pixel_format.bytes_per_pixel
    if stride < row_bytes:
        raise ValueError(
            f"stride {stride} is smaller than the {row_bytes} bytes of a row"
        )
    if buffer.dtype != torch.uint8 or buffer.dim() != 1:
        raise ValueError(
            f"buffer must be a 1-D uint8 tensor, got {buffer.dtype} "
            f"with {buffer.dim()} dimensions"
        )
    if not buffer.is_contiguous():
        raise ValueError("buffer must be contiguous")
    if offset < 0:
        raise ValueError(f"offset must be non-negative, got {offset}")
    required = offset + stride * (height - 1) + row_bytes
    if buffer.numel() < required:
        raise ValueError(
            f"buffer holds {buffer.numel()} bytes, layout needs {required}"
        )


def _samples_to_planes(samples: Tensor, pixel_format: PixelFormat) -> Tensor:
    """Convert ``(H, W)`` or ``(H, W, C)`` samples to ``(C, H, W)`` planes."""
    if samples.dim() == 2:
        samples = samples.unsqueeze(-1)
    if samples.dim() != 3 or samples.shape[-1] != pixel_format.channels:
        raise ValueError(
            f"{pixel_format!r} expects samples of shape (H, W, "
            f"{pixel_format.channels}), got {tuple(samples.shape)}"
        )
    if samples.is_floating_point() or samples.is_complex():
        raise ValueError(f"samples must be integers, got {samples.dtype}")
    if samples.numel() and (
        samples.min() < 0 or samples.max() > pixel_format.max_value
    ):
        raise ValueError(
            f"samples must lie in [0, {pixel_format.max_value}] "
            f"for {pixel_format!r}"
        )
    return samples.permute(2, 0, 1)


def _planes_to_samples(planes: Tensor) -> Tensor:
    samples = planes.permute(1, 2, 0)
    if samples.shape[-1] == 1:
        samples = samples.squeeze(-1)
    return samples.contiguous()


class UnmanagedImage:
    """Image held in a caller-managed raw byte buffer.

    Parameters
    ----------
    buffer : Tensor
        1-D contiguous ``uint8`` tensor holding the pixels.
    width, height : int
        Dimensions in pixels.
    stride : int
        Distance in bytes between the starts of consecutive rows.
    pixel_format : PixelFormat
        Layout of a single pixel.
    offset : int, optional
        Byte offset of the first pixel inside ``buffer``. Default is 0.

    Examples
    --------
    >>> image = UnmanagedImage.create(64, 48, PixelFormat.GRAY8)
    >>> image.stride
    64
    """

    def __init__(
        self,
        buffer: Tensor,
        width: int,
        height: int,
        stride: int,
        pixel_format: PixelFormat,
        offset: int = 0,
    ):
        _check_layout(buffer, width, height, stride, offset, pixel_format)
        self._buffer: Optional[Tensor] = buffer
        self.width = width
        self.height = height
        self.stride = stride
        self.pixel_format = pixel_format
        self.offset = offset

    @classmethod
    def create(
        cls,
        width: int,
        height: int,
        pixel_format: PixelFormat,
        *,
        stride: Optional[int] = None,
    ) -> UnmanagedImage:
        """Allocate a zero-filled image."""
        if stride is None:
            stride = _default_stride(width, pixel_format)
        buffer = torch.zeros(max(stride * height, 0), dtype=torch.uint8)
        return cls(buffer, width, height, stride, pixel_format)

    @classmethod
    def from_tensor(
        cls,
        samples: Tensor,
        pixel_format: PixelFormat,
        *,
        stride: Optional[int] = None,
    ) -> UnmanagedImage:
        """Create an image from ``(H, W)`` or ``(H, W, C)`` integer samples."""
        planes = _samples_to_planes(samples, pixel_format)
        image = cls.create(
            planes.shape[2], planes.shape[1], pixel_format, stride=stride
        )
        write_samples(image, planes)
        return image

    @property
    def buffer(self) -> Tensor:
        if self._buffer is None:
            raise RuntimeError("image has been disposed")
        return self._buffer

    @property
    def disposed(self) -> bool:
        return self._buffer is None

    def to_tensor(self) -> Tensor:
        """Samples as ``(H, W)`` or ``(H, W, C)`` ``int32`` tensor."""
        return _planes_to_samples(read_samples(self))

    def clone(self) -> UnmanagedImage:
        """Deep copy with the same stride."""
        return UnmanagedImage(
            self.buffer.clone(),
            self.width,
            self.height,
            self.stride,
            self.pixel_format,
            self.offset,
        )

    def dispose(self) -> None:
        self._buffer = None

    def __enter__(self) -> UnmanagedImage:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return (
            f"UnmanagedImage({self.width}x{self.height}, "
            f"{self.pixel_format!r}, stride={self.stride})"
        )


class _PixelStorage:
    """Pixel bytes shared by the bitmaps copied from one another."""

    __slots__ = ("buffer", "owners")

    def __init__(self, buffer: Tensor):
        self.buffer = buffer
        self.owners = 1


class BitmapData:
    """Locked view onto the pixels of a :class:`Bitmap`.

    Obtained from :meth:`Bitmap.lock_bits` and valid until the matching
    :meth:`Bitmap.unlock_bits`. ``width`` and ``height`` describe the locked
    rectangle, whose top-left pixel starts at byte ``scan0``.
    """

    def __init__(
        self,
        bitmap: Bitmap,
        buffer: Tensor,
        region: Region,
        stride: int,
        pixel_format: PixelFormat,
        read_only: bool,
    ):
        self.bitmap = bitmap
        self._buffer: Optional[Tensor] = buffer
        self.width = region.width
        self.height = region.height
        self.stride = stride
        self.pixel_format = pixel_format
        self.offset = region.y * stride + region.x * pixel_format.bytes_per_pixel
        self.read_only = read_only

    @property
    def scan0(self) -> int:
        return self.offset

    @property
    def buffer(self) -> Tensor:
        if self._buffer is None:
            raise RuntimeError("bitmap data has been unlocked")
        return self._buffer

    def to_tensor(self) -> Tensor:
        return _planes_to_samples(read_samples(self))

    def _release(self) -> None:
        self._buffer = None

    def __repr__(self) -> str:
        mode = "read-only" if self.read_only else "read-write"
        return (
            f"BitmapData({self.width}x{self.height}, "
            f"{self.pixel_format!r}, {mode})"
        )


class Bitmap:
    """Owned image with copy-on-write pixel storage.

    Pixels are only reachable through :meth:`lock_bits`. Copies made with
    :meth:`copy` share storage until one of them is locked for writing.

    Parameters
    ----------
    width, height : int
        Dimensions in pixels.
    pixel_format : PixelFormat
        Layout of a single pixel.
    """

    def __init__(self, width: int, height: int, pixel_format: PixelFormat):
        stride = _default_stride(width, pixel_format) if width > 0 else 0
        buffer = torch.zeros(max(stride * height, 0), dtype=torch.uint8)
        _check_layout(buffer, width, height, stride, 0, pixel_format)
        self.width = width
        self.height = height
        self.stride = stride
        self.pixel_format = pixel_format
        self._storage: Optional[_PixelStorage] = _PixelStorage(buffer)
        self._lock: Optional[BitmapData] = None

    @classmethod
    def from_tensor(cls, samples: Tensor, pixel_format: PixelFormat) -> Bitmap:
        """Create a bitmap from ``(H, W)`` or ``(H, W, C)`` integer samples."""
        planes = _samples_to_planes(samples, pixel_format)
        bitmap = cls(planes.shape[2], planes.shape[1], pixel_format)
        data = bitmap.lock_bits()
        try:
            write_samples(data, planes)
        finally:
            bitmap.unlock_bits(data)
        return bitmap

    @property
    def disposed(self) -> bool:
        return self._storage is None

    @property
    def locked(self) -> bool:
        return self._lock is not None

    def _checked_storage(self) -> _PixelStorage:
        if self._storage is None:
            raise RuntimeError("bitmap has been disposed")
        return self._storage

    def lock_bits(
        self,
        region: Optional[Region] = None,
        *,
        read_only: bool = False,
    ) -> BitmapData:
        """Lock the pixels of ``region`` (default: all) for direct access."""
        storage = self._checked_storage()
        if self._lock is not None:
            raise RuntimeError("bitmap is already locked")
        if region is None:
            region = Region.full(self.width, self.height)
        region = Region(*region)
        if not region.contains(self.width, self.height):
            raise ValueError(
                f"region {tuple(region)} is outside the "
                f"{self.width}x{self.height} bitmap"
            )

        if not read_only and storage.owners > 1:
            storage.owners -= 1
            storage = _PixelStorage(storage.buffer.clone())
            self._storage = storage

        self._lock = BitmapData(
            self,
            storage.buffer,
            region,
            self.stride,
            self.pixel_format,
            read_only,
        )
        return self._lock

    def unlock_bits(self, data: BitmapData) -> None:
        if data is not self._lock:
            raise ValueError("bitmap data was not locked from this bitmap")
        data._release()
        self._lock = None

    def copy(self) -> Bitmap:
        """Copy sharing pixel storage until either side is written."""
        storage = self._checked_storage()
        if self._lock is not None:
            raise RuntimeError("cannot copy a locked bitmap")
        clone = Bitmap.__new__(Bitmap)
        clone.width = self.width
        clone.height = self.height
        clone.stride = self.stride
        clone.pixel_format = self.pixel_format
        clone._storage = storage
        clone._lock = None
        storage.owners += 1
        return clone

    def shares_storage_with(self, other: Bitmap) -> bool:
        return self._storage is not None and self._storage is other._storage

    def to_tensor(self) -> Tensor:
        data = self.lock_bits(read_only=True)
        try:
            return data.to_tensor()
        finally:
            self.unlock_bits(data)

    def dispose(self) -> None:
        if self._lock is not None:
            raise RuntimeError("cannot dispose a locked bitmap")
        if self._storage is not None:
            self._storage.owners -= 1
            self._storage = None

    def __enter__(self) -> Bitmap:
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    def __repr__(self) -> str:
        return f"Bitmap({self.width}x{self.height}, {self.pixel_format!r})"


Image = Union[Bitmap, BitmapData, UnmanagedImage]


def allocate_like(
    image: Image,
    pixel_format: Optional[PixelFormat] = None,
) -> Union[Bitmap, UnmanagedImage]:
    """Allocate a blank image with the dimensions of ``image``.

    Bitmaps and locked bitmap data yield a :class:`Bitmap`, raw images an
    :class:`UnmanagedImage`.
    """
    if pixel_format is None:
        pixel_format = image.pixel_format
    if isinstance(image, UnmanagedImage):
        return UnmanagedImage.create(image.width, image.height, pixel_format)
    return Bitmap(image.width, image.height, pixel_format)
