"""Image decoding and pixel normalisation for the region classifier."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..core.errors import ImageLoadError
from ..core.logger import log
from .models import RGBAColor

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)

IntensityMap = np.ndarray  # 2-D uint8, shape (height, width)

# Modes ``to_canonical_color`` maps without going through Pillow's converter
NATIVE_MODES = frozenset({"1", "L", "LA", "La", "P", "PA", "RGB", "RGBX", "RGBA", "RGBa", "CMYK"})


def _is_wide_gray(mode: str) -> bool:
    return mode.startswith("I;16") or mode in ("I", "F")


def _narrow_to_8bit(image: Image.Image) -> Image.Image:
    """Scale a 16/32-bit or float greyscale image down to mode ``L``.

    Pillow's own ``convert`` clips wide samples at 255; integer samples are
    shifted right by 8 instead, and float samples are read on a 0-255 scale.
    """
    data = np.asarray(image)
    if image.mode == "F":
        narrowed = np.rint(data)
    else:
        narrowed = data.astype(np.int64) >> 8
    return Image.fromarray(np.clip(narrowed, 0, 255).astype(np.uint8))


@dataclass(slots=True)
class PixelBuffer:
    """Fully decoded image plus an RGBA view used for statistics."""

    image: Image.Image  # decoded image, normalised to an 8-bit mode
    rgba: np.ndarray  # shape (height, width, 4), straight alpha
    source_path: Optional[str] = None

    @classmethod
    def from_image(cls, image: Image.Image, source_path: Optional[str] = None) -> PixelBuffer:
        """Wrap an in-memory Pillow image.

        Wide greyscale modes are narrowed to ``L`` and any other mode outside
        ``NATIVE_MODES`` is converted to ``RGBA``, so ``sample`` and the RGBA
        view always describe the same colour.

        Raises:
            ValueError: If Pillow cannot convert the image mode.
        """
        if _is_wide_gray(image.mode):
            image = _narrow_to_8bit(image)
        elif image.mode not in NATIVE_MODES:
            image = image.convert("RGBA")
        rgba = np.asarray(image.convert("RGBA"), dtype=np.uint8)
        return cls(image=image, rgba=rgba, source_path=source_path)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def sample(self, x: int, y: int) -> RGBAColor:
        """Return the canonical colour of the pixel at ``(x, y)``."""
        palette = self.image.getpalette() if self.image.mode in ("P", "PA") else None
        return to_canonical_color(self.image.getpixel((x, y)), self.image.mode, palette)


def load_image(image_path: str | Path) -> PixelBuffer:
    """Decode *image_path* into a :class:`PixelBuffer`.

    The file is decoded completely before returning, so a truncated or
    corrupt file fails here rather than halfway through classification.

    Raises:
        ImageLoadError: If the file is missing or cannot be decoded.
    """
    path = Path(image_path)
    if not path.exists():
        raise ImageLoadError(path, "file does not exist")
    if not path.is_file():
        raise ImageLoadError(path, "not a regular file")

    try:
        with Image.open(path) as img:
            img.load()
            log.debug(f"Loaded {path} ({img.width}x{img.height}, mode={img.mode})")
            buffer = PixelBuffer.from_image(img.copy(), source_path=str(path))
    except UnidentifiedImageError as e:
        raise ImageLoadError(path, "unrecognised image format") from e
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(path, str(e) or type(e).__name__) from e

    return buffer


def to_grayscale(buffer: PixelBuffer) -> IntensityMap:
    """Convert *buffer* to a single-channel 0-255 intensity map.

    Colour channels are premultiplied by alpha before weighting, so fully
    transparent pixels read as black.
    """
    rgba = buffer.rgba.astype(np.float64)
    alpha = rgba[..., 3:4] / 255.0
    luma = (rgba[..., :3] * alpha) @ LUMA_WEIGHTS
    return np.clip(np.rint(luma), 0, 255).astype(np.uint8)


def _clamp8(value: float) -> int:
    return int(min(255, max(0, round(value))))


def _unpremultiply(channel: int, alpha: int) -> int:
    if alpha == 0:
        return 0
    return _clamp8(channel * 255 / alpha)


def to_canonical_color(
    sample: Any,
    mode: str = "RGBA",
    palette: Optional[Sequence[int]] = None,
) -> RGBAColor:
    """Normalise a Pillow pixel sample in *mode* to an 8-bit RGBA colour.

    Args:
        sample: Value returned by ``Image.getpixel`` (int, float or tuple).
        mode: Pillow mode of the image the sample came from.
        palette: Flat RGB palette, required for ``"P"`` samples.

    Raises:
        ValueError: For modes with no canonical mapping.
    """
    if mode == "1":
        level = 255 if sample else 0
        return RGBAColor(level, level, level)

    if mode == "L":
        level = _clamp8(sample)
        return RGBAColor(level, level, level)

    if mode in ("LA", "La"):
        level, alpha = sample
        if mode == "La":
            level = _unpremultiply(level, alpha)
        return RGBAColor(level, level, level, alpha)

    if mode.startswith("I;16") or mode == "I":
        level = _clamp8(int(sample) >> 8)
        return RGBAColor(level, level, level)

    if mode == "F":
        level = _clamp8(float(sample))
        return RGBAColor(level, level, level)

    if mode in ("P", "PA"):
        index, alpha = (sample, 255) if mode == "P" else sample
        if palette is None:
            raise ValueError("palette required for palette-mode samples")
        r, g, b = palette[index * 3:index * 3 + 3]
        return RGBAColor(r, g, b, alpha)

    if mode in ("RGB", "RGBX"):
        r, g, b = sample[:3]
        return RGBAColor(r, g, b)

    if mode == "RGBA":
        r, g, b, a = sample
        return RGBAColor(r, g, b, a)

    if mode == "RGBa":
        r, g, b, a = sample
        return RGBAColor(_unpremultiply(r, a), _unpremultiply(g, a), _unpremultiply(b, a), a)

    if mode == "CMYK":
        c, m, y, k = sample
        return RGBAColor(
            _clamp8((255 - c) * (255 - k) / 255),
            _clamp8((255 - m) * (255 - k) / 255),
            _clamp8((255 - y) * (255 - k) / 255),
        )

    raise ValueError(f"Unsupported pixel mode: {mode}")
