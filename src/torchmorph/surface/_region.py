from typing import NamedTuple


class Region(NamedTuple):
    """Axis-aligned rectangle of pixels.

    Parameters
    ----------
    x, y : int
        Column and row of the top-left pixel.
    width, height : int
        Extent in pixels.
    """

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, width: int, height: int) -> bool:
        """Whether the region is non-empty and lies inside a width x height surface."""
        return (
            self.width > 0
            and self.height > 0
            and self.x >= 0
            and self.y >= 0
            and self.right <= width
            and self.bottom <= height
        )

    @classmethod
    def full(cls, width: int, height: int) -> "Region":
        return cls(0, 0, width, height)
