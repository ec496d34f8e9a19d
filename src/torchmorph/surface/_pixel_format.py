"""Pixel formats understood by the surface layer."""

import enum


class PixelFormat(enum.Enum):
    """Memory layout of a single pixel.

    Color formats store their channels in B, G, R(, A) order. Samples wider
    than one byte are little-endian.

    Attributes
    ----------
    bytes_per_pixel : int
        Size of one pixel in bytes.
    channels : int
        Number of independently addressable samples per pixel.
    has_alpha : bool
        Whether the last channel is an alpha channel.
    """

    GRAY8 = ("gray8", 1, 1, False)
    GRAY16 = ("gray16", 2, 1, False)
    RGB24 = ("rgb24", 3, 3, False)
    RGBA32 = ("rgba32", 4, 4, True)
    RGB48 = ("rgb48", 6, 3, False)
    RGBA64 = ("rgba64", 8, 4, True)
    # Known to the container layer only; samples are not intensities.
    INDEXED8 = ("indexed8", 1, 1, False)
    RGB565 = ("rgb565", 2, 1, False)

    def __init__(
        self,
        label: str,
        bytes_per_pixel: int,
        channels: int,
        has_alpha: bool,
    ):
        self.label = label
        self.bytes_per_pixel = bytes_per_pixel
        self.channels = channels
        self.has_alpha = has_alpha

    @property
    def bytes_per_sample(self) -> int:
        return self.bytes_per_pixel // self.channels

    @property
    def color_channels(self) -> int:
        """Number of channels that carry intensity (alpha excluded)."""
        return self.channels - 1 if self.has_alpha else self.channels

    @property
    def max_value(self) -> int:
        return (1 << (8 * self.bytes_per_sample)) - 1

    def __repr__(self) -> str:
        return f"PixelFormat.{self.name}"
