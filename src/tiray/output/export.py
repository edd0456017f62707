"""Image export utilities for rendered images.

Supported formats:
    - PPM, plain-text "P3" variant (the renderer's native output)
    - PNG (8-bit RGB via Pillow)

A P3 file is a header of three lines, ``P3``, ``<width> <height>`` and
``255``, followed by one ``r g b`` line per pixel in row-major order, top
row first.

Example:
    >>> from tiray.core.renderer import get_pixel_bytes
    >>> from tiray.output.export import save_png, save_ppm
    >>>
    >>> pixels = get_pixel_bytes()
    >>> save_ppm(pixels, "image.ppm")
    >>> save_png(pixels, "image.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

MAX_CHANNEL_VALUE = 255

# Default for stream arguments: use the process stream current at call time
STD_STREAM: Any = object()


def _check_pixels(pixels: npt.NDArray[np.integer]) -> None:
    """Raise if the array is not an (H, W, 3) image."""
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an image of shape (height, width, 3), got {pixels.shape}")


def format_ppm_header(width: int, height: int) -> str:
    """Return the three header lines of a P3 image, newline-terminated."""
    return f"P3\n{width} {height}\n{MAX_CHANNEL_VALUE}\n"


def format_ppm(pixels: npt.NDArray[np.integer]) -> str:
    """Encode an image as P3 PPM text.

    Args:
        pixels: Integer array of shape (H, W, 3) with values in [0, 255].

    Returns:
        The complete file contents.

    Raises:
        ValueError: If the array does not have shape (H, W, 3).
    """
    _check_pixels(pixels)
    height, width, _ = pixels.shape
    rows = pixels.reshape(-1, 3).tolist()
    body = "".join(f"{r} {g} {b}\n" for r, g, b in rows)
    return format_ppm_header(width, height) + body


def write_ppm(pixels: npt.NDArray[np.integer], stream: TextIO) -> None:
    """Write an image as P3 PPM text to an open stream."""
    stream.write(format_ppm(pixels))


def save_ppm(pixels: npt.NDArray[np.integer], filepath: str | Path) -> None:
    """Save an image as a P3 PPM file.

    Args:
        pixels: Integer array of shape (H, W, 3) with values in [0, 255].
        filepath: Output file path (should end in .ppm).
    """
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        write_ppm(pixels, f)


def save_png(pixels: npt.NDArray[np.integer], filepath: str | Path) -> None:
    """Save an image as an 8-bit RGB PNG file.

    The bytes are written as-is; no tone mapping or gamma correction is
    applied.

    Args:
        pixels: Integer array of shape (H, W, 3) with values in [0, 255].
        filepath: Output file path (should end in .png).
    """
    _check_pixels(pixels)
    image_uint8 = np.ascontiguousarray(pixels, dtype=np.uint8)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)
