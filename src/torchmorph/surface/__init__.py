"""Image surfaces and pixel access.

Three representations share one access pattern (buffer, offset, stride,
width, height, pixel format):

UnmanagedImage : Raw byte buffer owned by the caller.
Bitmap : Owned copy-on-write image, accessed through ``lock_bits``.
BitmapData : Locked view onto a Bitmap's pixels.
"""

from torchmorph.surface._pixel_access import (
    copy_pixels,
    read_samples,
    write_samples,
)
from torchmorph.surface._pixel_format import PixelFormat
from torchmorph.surface._region import Region
from torchmorph.surface._surface import (
    Bitmap,
    BitmapData,
    Image,
    Surface,
    UnmanagedImage,
    allocate_like,
)

__all__ = [
    "Bitmap",
    "BitmapData",
    "Image",
    "PixelFormat",
    "Region",
    "Surface",
    "UnmanagedImage",
    "allocate_like",
    "copy_pixels",
    "read_samples",
    "write_samples",
]
