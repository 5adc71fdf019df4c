"""Axis-aligned rectangles used for rooms."""

from __future__ import annotations

from dataclasses import dataclass


def _halve(value: int) -> int:
    """Integer half of value, truncated toward zero."""
    return value // 2 if value >= 0 else -((-value) // 2)


@dataclass
class Rect:
    """A rectangle given by its corner coordinates."""

    x1: int
    x2: int
    y1: int
    y2: int

    @classmethod
    def from_size(cls, x: int, y: int, width: int, height: int) -> Rect:
        """Build a rectangle from its top-left corner and size."""
        return cls(x1=x, x2=x + width, y1=y, y2=y + height)

    def center(self) -> tuple[int, int]:
        """Return the centre tile of the rectangle."""
        return _halve(self.x1 + self.x2), _halve(self.y1 + self.y2)

    def intersects(self, other: Rect) -> bool:
        """Return True if the rectangles overlap or touch."""
        return (
            self.x1 <= other.x2
            and self.x2 >= other.x1
            and self.y1 <= other.y2
            and self.y2 >= other.y1
        )