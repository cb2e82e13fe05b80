"""Computer vision utilities for screensense.

This sub-package turns raw screenshots into candidate UI elements using
window statistics, and provides queries and reports over the result.
"""

from .classifier import classify
from .detector import ElementDetector
from .geometry import Point, Rectangle, Size, is_point_in_rectangle
from .models import BUTTON, ELEMENT_TYPES, IMAGE, LINK, TEXTFIELD, ElementInfo, RGBAColor
from .preprocessing import PixelBuffer, load_image, to_canonical_color, to_grayscale
from .query import find_by_position, find_by_text, find_by_type
from .report import generate_visual_report, render_report

__all__ = [
    "BUTTON",
    "ELEMENT_TYPES",
    "ElementDetector",
    "ElementInfo",
    "IMAGE",
    "LINK",
    "PixelBuffer",
    "Point",
    "RGBAColor",
    "Rectangle",
    "Size",
    "TEXTFIELD",
    "classify",
    "find_by_position",
    "find_by_text",
    "find_by_type",
    "generate_visual_report",
    "is_point_in_rectangle",
    "load_image",
    "render_report",
    "to_canonical_color",
    "to_grayscale",
]
