"""Pixel geometry primitives: points, sizes and axis-aligned rectangles."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Point:
    """Pixel coordinate."""

    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        """Return point as ``(x, y)`` tuple."""
        return self.x, self.y


@dataclass(slots=True, frozen=True)
class Size:
    """Non-negative extent in pixels. A zero-area size is legal."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Size must be non-negative, got {self.width}x{self.height}")

    def area(self) -> int:
        """Area in square pixels."""
        return self.width * self.height


@dataclass(slots=True, frozen=True)
class Rectangle:
    """Axis-aligned rectangle described by its four corners."""

    top_left: Point
    top_right: Point
    bottom_left: Point
    bottom_right: Point

    @classmethod
    def from_position(cls, position: Point, size: Size) -> Rectangle:
        """Build the rectangle spanned by *size* starting at *position*."""
        right = position.x + size.width
        bottom = position.y + size.height
        return cls(
            top_left=Point(position.x, position.y),
            top_right=Point(right, position.y),
            bottom_left=Point(position.x, bottom),
            bottom_right=Point(right, bottom),
        )

    def width(self) -> int:
        """Width in pixels."""
        return self.top_right.x - self.top_left.x

    def height(self) -> int:
        """Height in pixels."""
        return self.bottom_left.y - self.top_left.y

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return rectangle as ``(left, top, right, bottom)`` tuple."""
        return self.top_left.x, self.top_left.y, self.bottom_right.x, self.bottom_right.y


def is_point_in_rectangle(point: Point, rect: Rectangle, tolerance: int = 0) -> bool:
    """Return True if *point* lies inside *rect* grown by *tolerance* pixels.

    Edges and corners are inside, so a point on the border matches even at
    ``tolerance=0``.
    """
    return (
        rect.top_left.x - tolerance <= point.x <= rect.bottom_right.x + tolerance
        and rect.top_left.y - tolerance <= point.y <= rect.bottom_right.y + tolerance
    )
