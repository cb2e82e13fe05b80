"""
Shared pytest fixtures for all tests.
"""
from unittest.mock import MagicMock

import numpy as np
import pytest
from PIL import Image

from screensense.core.config import Config
from screensense.vision.detector import ElementDetector


@pytest.fixture
def save_png(tmp_path):
    """Factory that saves a Pillow image (or uint8 array) as PNG and returns its path"""
    def _save(image, filename="screenshot.png"):
        if isinstance(image, np.ndarray):
            image = Image.fromarray(image)
        path = tmp_path / filename
        image.save(path, format="PNG")
        return path
    return _save


@pytest.fixture
def solid_png(save_png):
    """Factory for a single-colour PNG"""
    def _create(color, size=(100, 100), mode="RGB", filename="solid.png"):
        return save_png(Image.new(mode, size, color), filename)
    return _create


@pytest.fixture
def gradient_map():
    """Factory for intensity maps where value = (x*k + y*k) mod 256"""
    def _create(width=100, height=100, k=5):
        ys, xs = np.mgrid[0:height, 0:width]
        return ((xs * k + ys * k) % 256).astype(np.uint8)
    return _create


@pytest.fixture
def mock_logger():
    """Logging sink that records calls instead of printing"""
    return MagicMock()


@pytest.fixture
def detector(mock_logger):
    """Enabled detector with default scan settings"""
    return ElementDetector(enabled=True, logger=mock_logger, settings=Config())
