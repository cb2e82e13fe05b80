"""Data models for computer vision subsystem."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .geometry import Point, Rectangle, Size

BUTTON = "button"
TEXTFIELD = "textfield"
IMAGE = "image"
LINK = "link"

# Fixed pass order; reports and detection results follow it.
ELEMENT_TYPES: tuple[str, ...] = (BUTTON, TEXTFIELD, IMAGE, LINK)


@dataclass(slots=True, frozen=True)
class RGBAColor:
    """8-bit-per-channel colour with straight (non-premultiplied) alpha."""

    r: int
    g: int
    b: int
    a: int = 255

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return colour as ``(r, g, b, a)`` tuple."""
        return self.r, self.g, self.b, self.a

    def __str__(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a})"


def make_selector(element_type: str, x: int, y: int) -> str:
    """Return the synthetic debug selector ``<type>[<x>,<y>]``."""
    return f"{element_type}[{x},{y}]"


@dataclass(slots=True, frozen=True)
class ElementInfo:
    """Representation of a detected visual element.

    ``position``/``size`` describe the sampling window that matched. ``text``
    is only ever supplied by callers; the detector never reads text from
    pixels.
    """

    element_type: str
    position: Point
    size: Size
    confidence: float
    selector: str = ""
    text: str = ""
    attributes: Mapping[str, str] = field(default_factory=dict)
    color: Optional[RGBAColor] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def rectangle(self) -> Rectangle:
        """Rectangle covered by the element."""
        return Rectangle.from_position(self.position, self.size)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation."""
        data: dict[str, Any] = {
            "type": self.element_type,
            "selector": self.selector,
            "position": {"x": self.position.x, "y": self.position.y},
            "size": {"width": self.size.width, "height": self.size.height},
            "confidence": self.confidence,
            "attributes": dict(self.attributes),
        }
        if self.color is not None:
            data["color"] = {"r": self.color.r, "g": self.color.g, "b": self.color.b, "a": self.color.a}
        if self.text:
            data["text"] = self.text
        return data
