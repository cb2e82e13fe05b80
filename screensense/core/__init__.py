"""Core components of the screensense detector."""

from .config import Config, config
from .errors import DetectorDisabledError, ImageLoadError, ReportWriteError, VisionError
from .logger import Logger, log, setup_logging

__all__ = [
    "Config",
    "DetectorDisabledError",
    "ImageLoadError",
    "Logger",
    "ReportWriteError",
    "VisionError",
    "config",
    "log",
    "setup_logging",
]
