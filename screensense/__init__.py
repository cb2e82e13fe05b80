"""screensense: heuristic visual element detection for rendered screenshots."""

from .core.errors import DetectorDisabledError, ImageLoadError, ReportWriteError, VisionError
from .vision import ElementDetector, ElementInfo

__version__ = "0.1.0"

__all__ = [
    "DetectorDisabledError",
    "ElementDetector",
    "ElementInfo",
    "ImageLoadError",
    "ReportWriteError",
    "VisionError",
]
