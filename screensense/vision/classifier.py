"""Window-statistics heuristics that turn an intensity map into elements.

Every pass slides the same fixed window over a regular grid, computes the
window's mean intensity and variance, and keeps the windows its predicate
accepts. Passes are independent: they never suppress or deduplicate each
other's output.
"""

from __future__ import annotations

import concurrent.futures
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from .geometry import Point, Size
from .models import BUTTON, IMAGE, LINK, TEXTFIELD, ElementInfo, make_selector
from .preprocessing import IntensityMap, PixelBuffer

WINDOW_WIDTH = 20
WINDOW_HEIGHT = 20
SCAN_STEP = 20

# Tone bands partition [0, 255]: dark < DARK_THRESHOLD <= mid <= BRIGHT_THRESHOLD < bright
DARK_THRESHOLD = 100
BRIGHT_THRESHOLD = 200

# IMAGE_VARIANCE_THRESHOLD must stay >= UNIFORM_VARIANCE_THRESHOLD so that
# image-like windows are never also uniform.
UNIFORM_VARIANCE_THRESHOLD = 20.0
IMAGE_VARIANCE_THRESHOLD = 50.0

BUTTON_CONFIDENCE = 0.75
TEXTFIELD_CONFIDENCE = 0.80
IMAGE_CONFIDENCE = 0.70
LINK_CONFIDENCE = 0.65


@dataclass(slots=True, frozen=True)
class WindowStats:
    """Mean intensity and variance of one sampling window."""

    in_bounds: bool
    mean: float
    variance: float

    @property
    def uniform(self) -> bool:
        return self.in_bounds and self.variance < UNIFORM_VARIANCE_THRESHOLD


# Returned for windows that would read outside the image; fails every predicate.
OUT_OF_BOUNDS = WindowStats(in_bounds=False, mean=-1.0, variance=0.0)


def window_in_bounds(intensity: IntensityMap, x: int, y: int, width: int, height: int) -> bool:
    """Return True if the window lies entirely inside *intensity*."""
    img_height, img_width = intensity.shape[:2]
    return (
        x >= 0
        and y >= 0
        and width > 0
        and height > 0
        and x + width <= img_width
        and y + height <= img_height
    )


def mean_intensity(intensity: IntensityMap, x: int, y: int, width: int, height: int) -> Optional[float]:
    """Average intensity of the window, or None if it leaves the image."""
    if not window_in_bounds(intensity, x, y, width, height):
        return None
    return float(intensity[y:y + height, x:x + width].mean(dtype=np.float64))


def color_variance(intensity: IntensityMap, x: int, y: int, width: int, height: int) -> float:
    """Mean squared deviation from the window mean.

    Returns 0.0 for windows outside the image; callers must check bounds
    before reading a 0.0 as "uniform".
    """
    if not window_in_bounds(intensity, x, y, width, height):
        return 0.0
    region = intensity[y:y + height, x:x + width].astype(np.float64)
    return float(np.mean((region - region.mean()) ** 2))


def window_stats(intensity: IntensityMap, x: int, y: int, width: int, height: int) -> WindowStats:
    """Compute :class:`WindowStats` for one window (``OUT_OF_BOUNDS`` if it leaves the image)."""
    mean = mean_intensity(intensity, x, y, width, height)
    if mean is None:
        return OUT_OF_BOUNDS
    return WindowStats(True, mean, color_variance(intensity, x, y, width, height))


def is_button_like(stats: WindowStats) -> bool:
    """Dark and uniform."""
    return stats.uniform and stats.mean < DARK_THRESHOLD


def is_textfield_like(stats: WindowStats) -> bool:
    """Bright and uniform."""
    return stats.uniform and stats.mean > BRIGHT_THRESHOLD


def is_image_like(stats: WindowStats) -> bool:
    """Busy content, whatever the tone."""
    return stats.in_bounds and stats.variance > IMAGE_VARIANCE_THRESHOLD


def is_link_like(stats: WindowStats) -> bool:
    """Mid-tone and uniform."""
    return stats.uniform and DARK_THRESHOLD <= stats.mean <= BRIGHT_THRESHOLD


AttributeFactory = Callable[[int, int, Size, Optional[PixelBuffer]], dict[str, str]]


def _button_attributes(x: int, y: int, size: Size, buffer: Optional[PixelBuffer]) -> dict[str, str]:
    return {"clickable": "true"}


def _textfield_attributes(x: int, y: int, size: Size, buffer: Optional[PixelBuffer]) -> dict[str, str]:
    return {"input": "true", "type": "text"}


def _image_attributes(x: int, y: int, size: Size, buffer: Optional[PixelBuffer]) -> dict[str, str]:
    if buffer is not None and buffer.source_path:
        return {"src": f"{buffer.source_path}#xywh={x},{y},{size.width},{size.height}"}
    return {"src": f"detected_image_{x}_{y}"}


def _link_attributes(x: int, y: int, size: Size, buffer: Optional[PixelBuffer]) -> dict[str, str]:
    return {"href": "#", "clickable": "true"}


@dataclass(slots=True, frozen=True)
class ScanPass:
    """One detector pass: a predicate plus how to describe its matches."""

    element_type: str
    confidence: float
    predicate: Callable[[WindowStats], bool]
    attributes: AttributeFactory

    def classify(
        self,
        stats: WindowStats,
        x: int,
        y: int,
        size: Size,
        buffer: Optional[PixelBuffer] = None,
    ) -> Optional[tuple[str, dict[str, str]]]:
        """Return ``(element_type, attributes)`` for a match, else None."""
        if not self.predicate(stats):
            return None
        return self.element_type, self.attributes(x, y, size, buffer)


BUTTON_PASS = ScanPass(BUTTON, BUTTON_CONFIDENCE, is_button_like, _button_attributes)
TEXTFIELD_PASS = ScanPass(TEXTFIELD, TEXTFIELD_CONFIDENCE, is_textfield_like, _textfield_attributes)
IMAGE_PASS = ScanPass(IMAGE, IMAGE_CONFIDENCE, is_image_like, _image_attributes)
LINK_PASS = ScanPass(LINK, LINK_CONFIDENCE, is_link_like, _link_attributes)

DEFAULT_PASSES: tuple[ScanPass, ...] = (BUTTON_PASS, TEXTFIELD_PASS, IMAGE_PASS, LINK_PASS)

DEFAULT_WINDOW = Size(WINDOW_WIDTH, WINDOW_HEIGHT)


def scan_windows(
    intensity: IntensityMap,
    scan_pass: ScanPass,
    buffer: Optional[PixelBuffer] = None,
    *,
    window: Size = DEFAULT_WINDOW,
    step: int = SCAN_STEP,
) -> list[ElementInfo]:
    """Slide *window* over *intensity* and collect every window *scan_pass* accepts.

    Origins run row-major over ``range(0, height, step)`` x ``range(0, width, step)``;
    windows that would cross the image border are skipped.
    """
    if step <= 0:
        raise ValueError("step must be positive")

    img_height, img_width = intensity.shape[:2]
    elements: list[ElementInfo] = []

    for y in range(0, img_height, step):
        for x in range(0, img_width, step):
            stats = window_stats(intensity, x, y, window.width, window.height)
            match = scan_pass.classify(stats, x, y, window, buffer)
            if match is None:
                continue
            element_type, attributes = match
            elements.append(
                ElementInfo(
                    element_type=element_type,
                    position=Point(x, y),
                    size=window,
                    confidence=scan_pass.confidence,
                    selector=make_selector(element_type, x, y),
                    attributes=attributes,
                    color=buffer.sample(x, y) if buffer is not None else None,
                )
            )

    return elements


def detect_buttons(intensity: IntensityMap, buffer: Optional[PixelBuffer] = None, **kwargs) -> list[ElementInfo]:
    """Find dark, uniform windows."""
    return scan_windows(intensity, BUTTON_PASS, buffer, **kwargs)


def detect_text_fields(intensity: IntensityMap, buffer: Optional[PixelBuffer] = None, **kwargs) -> list[ElementInfo]:
    """Find bright, uniform windows."""
    return scan_windows(intensity, TEXTFIELD_PASS, buffer, **kwargs)


def detect_images(intensity: IntensityMap, buffer: Optional[PixelBuffer] = None, **kwargs) -> list[ElementInfo]:
    """Find high-variance windows."""
    return scan_windows(intensity, IMAGE_PASS, buffer, **kwargs)


def detect_links(intensity: IntensityMap, buffer: Optional[PixelBuffer] = None, **kwargs) -> list[ElementInfo]:
    """Find mid-tone, uniform windows."""
    return scan_windows(intensity, LINK_PASS, buffer, **kwargs)


def classify(
    intensity: IntensityMap,
    buffer: Optional[PixelBuffer] = None,
    *,
    window: Size = DEFAULT_WINDOW,
    step: int = SCAN_STEP,
    passes: Sequence[ScanPass] = DEFAULT_PASSES,
    parallel: bool = False,
) -> list[ElementInfo]:
    """Run every pass over *intensity* and concatenate results in pass order."""

    def _run(scan_pass: ScanPass) -> list[ElementInfo]:
        return scan_windows(intensity, scan_pass, buffer, window=window, step=step)

    if parallel and len(passes) > 1:
        # executor.map yields in submission order, which keeps the merge deterministic
        with concurrent.futures.ThreadPoolExecutor(max_workers=len(passes)) as executor:
            results = list(executor.map(_run, passes))
    else:
        results = [_run(scan_pass) for scan_pass in passes]

    elements: list[ElementInfo] = []
    for res_list in results:
        elements.extend(res_list)
    return elements
