"""Read-only filters over a detected element set."""

from __future__ import annotations

from typing import Iterable

from .geometry import Point, Rectangle, is_point_in_rectangle
from .models import ElementInfo


def get_element_rectangle(element: ElementInfo) -> Rectangle:
    """Rectangle spanned by the element's position and size."""
    return Rectangle.from_position(element.position, element.size)


def contains_text(text: str, search: str) -> bool:
    """Placeholder text match: true when both strings are non-empty.

    No text is recognised from pixels, so any element carrying caller-supplied
    text matches any non-empty search.
    """
    return len(text) > 0 and len(search) > 0


def find_by_type(elements: Iterable[ElementInfo], element_type: str) -> list[ElementInfo]:
    """Return elements of *element_type*, preserving input order."""
    return [elem for elem in elements if elem.element_type == element_type]


def find_by_text(elements: Iterable[ElementInfo], search: str) -> list[ElementInfo]:
    """Return elements whose text matches *search* (see :func:`contains_text`)."""
    return [elem for elem in elements if contains_text(elem.text, search)]


def find_by_position(
    elements: Iterable[ElementInfo],
    x: int,
    y: int,
    tolerance: int = 0,
) -> list[ElementInfo]:
    """Return elements whose rectangle, grown by *tolerance*, contains ``(x, y)``."""
    if tolerance < 0:
        raise ValueError(f"tolerance must be non-negative, got {tolerance}")

    point = Point(x, y)
    return [
        elem
        for elem in elements
        if is_point_in_rectangle(point, get_element_rectangle(elem), tolerance)
    ]
