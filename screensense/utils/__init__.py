"""Utility functions for the screensense detector."""

from .file_utils import ensure_directory, save_json, write_text_atomic

__all__ = [
    "ensure_directory",
    "save_json",
    "write_text_atomic",
]
