"""screensense structured logging system."""

from __future__ import annotations

import os
import sys
from typing import Any

from loguru import logger

from .config import config

_configured = False


def setup_logging(force: bool = False) -> None:
    """Install console and (optionally) file sinks on the loguru logger.

    Runs once per process unless *force* is set; later ``Logger`` instances
    share the same sinks.
    """
    global _configured
    if _configured and not force:
        return

    # Remove default handler
    logger.remove()

    # ------------------------------------------------------------------
    # Console handler
    # ------------------------------------------------------------------
    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level:<8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    )

    logger.add(
        sys.stdout,
        format=console_format,
        level=config.log_level.upper(),
        colorize=True,
    )

    # ------------------------------------------------------------------
    # File handlers
    # ------------------------------------------------------------------
    if config.log_dir:
        os.makedirs(config.log_dir, exist_ok=True)
        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | "
            "{name}:{function}:{line} | {message}"
        )

        logger.add(
            os.path.join(config.log_dir, "screensense_{time:YYYY-MM-DD}.log"),
            format=file_format,
            level="DEBUG",
            rotation="1 day",
            retention="30 days",
            compression="zip",
        )

        # Separate error log
        logger.add(
            os.path.join(config.log_dir, "errors_{time:YYYY-MM-DD}.log"),
            format=file_format,
            level="ERROR",
            rotation="1 day",
            retention="90 days",
            compression="zip",
        )

    _configured = True


class Logger:
    """Named logging sink used by the detector components."""

    def __init__(self, name: str = "screensense") -> None:
        """Initialize the named logger, configuring loguru on first use."""
        self.name = name
        setup_logging()

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message."""
        logger.info(f"[{self.name}] {message}", **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message."""
        logger.debug(f"[{self.name}] {message}", **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message."""
        logger.warning(f"[{self.name}] {message}", **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message."""
        logger.error(f"[{self.name}] {message}", **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        """Log critical message."""
        logger.critical(f"[{self.name}] {message}", **kwargs)

    def success(self, message: str, **kwargs: Any) -> None:
        """Log success message."""
        logger.success(f"[{self.name}] {message}", **kwargs)

    def log_vision_detection(
        self,
        element_type: str,
        confidence: float,
        coordinates: tuple[int, int],
    ) -> None:
        """Log one classified window."""
        msg = (
            f"VISION DETECTION: {element_type} at {coordinates} "
            f"(confidence: {confidence:.2f})"
        )
        self.debug(msg)

    def log_performance(self, operation: str, duration_ms: float) -> None:
        """Log performance metrics."""
        self.debug(f"PERFORMANCE: {operation} took {duration_ms:.2f}ms")


# Global logger instance
log = Logger()
