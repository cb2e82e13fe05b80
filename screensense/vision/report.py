"""Plain-text and JSON reports over a detected element set."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from ..core.logger import log
from ..utils.file_utils import save_json, write_text_atomic
from .models import ELEMENT_TYPES, ElementInfo

REPORT_FILENAME = "visual_elements_report.txt"
JSON_FILENAME = "visual_elements.json"


def _group_by_type(elements: Sequence[ElementInfo]) -> dict[str, list[ElementInfo]]:
    """Group elements by type: known types first, then others in first-seen order."""
    groups: dict[str, list[ElementInfo]] = {t: [] for t in ELEMENT_TYPES}
    for elem in elements:
        groups.setdefault(elem.element_type, []).append(elem)
    return groups


def render_report(elements: Sequence[ElementInfo]) -> str:
    """Render the human-readable detection report."""
    groups = _group_by_type(elements)

    lines = [
        "# Visual Element Detection Report",
        "",
        f"Total Elements Detected: {len(elements)}",
        "",
        "## Summary",
    ]
    lines.extend(f"- {elem_type}: {len(elems)}" for elem_type, elems in groups.items())
    lines.append("")

    for elem_type, elems in groups.items():
        if not elems:
            continue
        lines.append(f"## {elem_type} ({len(elems)})")
        lines.append("")
        for i, elem in enumerate(elems, start=1):
            lines.append(f"{i}. Position: ({elem.position.x}, {elem.position.y})")
            lines.append(f"   Size: {elem.size.width}x{elem.size.height}")
            lines.append(f"   Confidence: {elem.confidence:.2f}")
            lines.append(f"   Selector: {elem.selector}")
            if elem.color is not None:
                lines.append(f"   Color: {elem.color}")
            if elem.text:
                lines.append(f"   Text: {elem.text}")
            lines.append("")

    return "\n".join(lines)


def generate_visual_report(
    elements: Sequence[ElementInfo],
    output_dir: str | Path,
    filename: str = REPORT_FILENAME,
    logger: Any = log,
) -> Path:
    """Write the text report into *output_dir* and return its path.

    Progress and write failures are traced through *logger*.

    Raises:
        ReportWriteError: If the directory or file cannot be written.
    """
    logger.info(f"Generating visual report with {len(elements)} elements")
    report_path = write_text_atomic(Path(output_dir) / filename, render_report(elements), logger=logger)
    logger.info(f"Visual report written to {report_path}")
    return report_path


def export_elements_json(
    elements: Sequence[ElementInfo],
    output_dir: str | Path,
    filename: str = JSON_FILENAME,
    logger: Any = log,
) -> Path:
    """Write the element set as JSON into *output_dir* and return its path."""
    payload = {
        "total": len(elements),
        "elements": [elem.to_dict() for elem in elements],
    }
    return save_json(payload, Path(output_dir) / filename, logger=logger)
