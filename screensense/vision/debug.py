"""Vision debugging helpers: draw bounding boxes onto screenshots."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import cv2  # type: ignore

from ..core.errors import ImageLoadError, ReportWriteError
from ..utils.file_utils import ensure_directory
from .models import BUTTON, IMAGE, LINK, TEXTFIELD, ElementInfo

# BGR
TYPE_COLORS: dict[str, tuple[int, int, int]] = {
    BUTTON: (0, 0, 255),
    TEXTFIELD: (0, 160, 0),
    IMAGE: (255, 0, 0),
    LINK: (0, 165, 255),
}
DEFAULT_COLOR = (255, 0, 255)


def save_debug_overlay(
    image_path: str | Path,
    elements: Sequence[ElementInfo],
    output_dir: str | Path,
) -> Path:
    """Draw element rectangles on *image_path* and save ``<stem>_debug.png`` in *output_dir*."""
    img = cv2.imread(str(image_path))
    if img is None:
        raise ImageLoadError(image_path, "OpenCV could not decode the image")

    for el in elements:
        color = TYPE_COLORS.get(el.element_type, DEFAULT_COLOR)
        x1, y1, x2, y2 = el.rectangle.as_tuple()

        cv2.rectangle(img, (x1, y1), (x2, y2), color, thickness=1)

        label = f"{el.element_type}:{el.confidence:.2f}"
        font_scale = 0.35
        font = cv2.FONT_HERSHEY_SIMPLEX
        (text_w, text_h), _ = cv2.getTextSize(label, font, font_scale, 1)

        # Background rectangle (white) behind text for legibility
        text_bg_tl = (x1, max(0, y1 - text_h - 4))
        text_bg_br = (x1 + text_w + 4, max(0, y1))
        cv2.rectangle(img, text_bg_tl, text_bg_br, (255, 255, 255), thickness=cv2.FILLED)

        text_org = (x1 + 2, max(10, y1 - 2))
        cv2.putText(
            img,
            label,
            text_org,
            font,
            font_scale,
            color,
            thickness=1,
            lineType=cv2.LINE_AA,
        )

    debug_dir = ensure_directory(output_dir)
    out_path = debug_dir / f"{Path(image_path).stem}_debug.png"
    if not cv2.imwrite(str(out_path), img):
        raise ReportWriteError(out_path, "OpenCV could not write the overlay")
    return out_path
