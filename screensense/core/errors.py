"""Exception hierarchy raised by the visual element detector."""

from __future__ import annotations

from pathlib import Path


class VisionError(RuntimeError):
    """Base class for errors raised by the visual element detector."""


class DetectorDisabledError(VisionError):
    """Raised when detection is attempted on a disabled detector."""

    def __init__(self, message: str = "computer vision is disabled") -> None:
        super().__init__(message)


class ImageLoadError(VisionError):
    """Raised when an image file is missing, unreadable, or undecodable."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to load image {self.path}: {reason}")


class ReportWriteError(VisionError):
    """Raised when a report or overlay cannot be written to disk."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"failed to write {self.path}: {reason}")
