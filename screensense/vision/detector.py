"""Element detector facade: load, classify, query and report."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Optional, Sequence

from ..core.config import Config, config
from ..core.errors import DetectorDisabledError, ImageLoadError, VisionError
from ..core.logger import Logger
from . import query
from .classifier import DEFAULT_PASSES, classify
from .debug import save_debug_overlay
from .geometry import Size
from .models import ElementInfo
from .preprocessing import load_image, to_grayscale
from .report import export_elements_json, generate_visual_report


class ElementDetector:
    """Heuristic visual element detector for rendered screenshots.

    The detector holds only its ``enabled`` flag, a logging sink and scan
    settings; every call works on its own image and result list, so one
    instance can be shared between threads.
    """

    def __init__(
        self,
        enabled: Optional[bool] = None,
        logger: Any = None,
        *,
        settings: Optional[Config] = None,
    ) -> None:
        """Initialize ElementDetector.

        Parameters
        ----------
        enabled : bool, optional
            Hard gate for detection. Defaults to ``settings.vision_enabled``.
        logger : object, optional
            Sink exposing ``debug``/``info``/``error``. Defaults to a
            :class:`~screensense.core.logger.Logger` named ``ElementDetector``.
        settings : Config, optional
            Scan settings; the process-wide ``config`` when omitted.

        """
        self.settings = settings if settings is not None else config
        self.settings.validate_config()
        self.enabled = self.settings.vision_enabled if enabled is None else enabled
        self.logger = logger if logger is not None else Logger("ElementDetector")
        self.window = Size(self.settings.window_width, self.settings.window_height)
        self.step = self.settings.scan_step
        self.parallel = self.settings.parallel_passes

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------
    def detect_elements(self, image_path: str | Path) -> list[ElementInfo]:
        """Return every element the four detector passes find in *image_path*.

        Results are ordered buttons, text fields, images, links; an image with
        no matches yields an empty list.

        Raises
        ------
        DetectorDisabledError
            If the detector is disabled. No file is touched.
        ImageLoadError
            If the image cannot be read or decoded.

        """
        if not self.enabled:
            raise DetectorDisabledError()

        self.logger.info(f"Starting visual element detection in {image_path}")
        started = time.perf_counter()

        try:
            buffer = load_image(image_path)
        except ImageLoadError as e:
            self.logger.error(str(e))
            raise

        intensity = to_grayscale(buffer)
        elements = classify(
            intensity,
            buffer,
            window=self.window,
            step=self.step,
            passes=DEFAULT_PASSES,
            parallel=self.parallel,
        )

        for scan_pass in DEFAULT_PASSES:
            count = sum(1 for el in elements if el.element_type == scan_pass.element_type)
            self.logger.debug(f"{scan_pass.element_type}: {count} windows matched")

        duration_ms = (time.perf_counter() - started) * 1000
        operation = f"Detection on {buffer.width}x{buffer.height} image"
        if isinstance(self.logger, Logger):
            for el in elements:
                self.logger.log_vision_detection(el.element_type, el.confidence, el.position.as_tuple())
            self.logger.log_performance(operation, duration_ms)
        else:
            self.logger.debug(f"{operation} took {duration_ms:.2f}ms")
        self.logger.info(f"Detected {len(elements)} visual elements")

        if self.settings.save_vision_debug:
            try:
                save_debug_overlay(image_path, elements, self.settings.vision_debug_dir)
            except VisionError as exc:
                self.logger.error(f"Failed to save debug overlay: {exc}")

        return elements

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def find_element_by_type(self, elements: Sequence[ElementInfo], element_type: str) -> list[ElementInfo]:
        """Elements of *element_type*, in input order."""
        return query.find_by_type(elements, element_type)

    def find_element_by_text(self, elements: Sequence[ElementInfo], search_text: str) -> list[ElementInfo]:
        """Elements with non-empty text, for any non-empty *search_text*."""
        return query.find_by_text(elements, search_text)

    def find_element_by_position(
        self,
        elements: Sequence[ElementInfo],
        x: int,
        y: int,
        tolerance: int = 0,
    ) -> list[ElementInfo]:
        """Elements whose rectangle grown by *tolerance* contains ``(x, y)``."""
        return query.find_by_position(elements, x, y, tolerance)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def generate_visual_report(self, elements: Sequence[ElementInfo], output_dir: str | Path) -> Path:
        """Write the text report into *output_dir*."""
        return generate_visual_report(
            elements, output_dir, self.settings.report_filename, logger=self.logger
        )

    def export_elements(self, elements: Sequence[ElementInfo], output_dir: str | Path) -> Path:
        """Write the element set as JSON into *output_dir*."""
        path = export_elements_json(elements, output_dir, logger=self.logger)
        self.logger.info(f"Exported {len(elements)} elements to {path}")
        return path

    def save_annotated_screenshot(
        self,
        image_path: str | Path,
        elements: Sequence[ElementInfo],
        output_dir: str | Path,
    ) -> Path:
        """Draw *elements* onto *image_path* and save the overlay in *output_dir*."""
        path = save_debug_overlay(image_path, elements, output_dir)
        self.logger.info(f"Annotated screenshot saved to {path}")
        return path
