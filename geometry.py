from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen pixels (y grows downwards)."""
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def intersect(self, other: "Rect") -> "Rect | None":
        """Return the overlapping area, or None if the two rectangles don't overlap.

        Rectangles that only share an edge are not considered overlapping.
        """
        if (self.left < other.right and other.left < self.right
                and self.top < other.bottom and other.top < self.bottom):
            return Rect(
                max(self.left, other.left),
                max(self.top, other.top),
                min(self.right, other.right),
                min(self.bottom, other.bottom)
            )
        return None
