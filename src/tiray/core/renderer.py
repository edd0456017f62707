"""Render loop: per-pixel ray generation, shading and byte encoding.

Shading is a normal visualization with no lighting model. A ray that hits
the scene is colored ``0.5 * (normal + 1)``; a ray that escapes gets a
vertical white-to-sky-blue gradient keyed on the y component of its unit
direction.

The image is rendered one scanline per kernel launch, top row first. Within a
scanline all columns run in parallel; pixels share no state, so the only
ordering that matters is the row-major emission of the final image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64, fast_math=False)
    >>> from tiray.camera.camera import Camera
    >>> from tiray.core.renderer import get_pixel_bytes, render_image
    >>> from tiray.scene.world import HittableList, SphereInfo
    >>>
    >>> world = HittableList(SphereInfo((0, 0, -1), 0.5))
    >>> world.upload()
    >>> render_image(Camera(aspect_ratio=16.0 / 9.0, image_width=400))
    >>> get_pixel_bytes().shape
    (225, 400, 3)
"""

import sys
from collections.abc import Callable
from typing import Any, TextIO

import numpy as np
import numpy.typing as npt
import taichi as ti

from tiray.camera.camera import Camera, get_pixel_center_ray, get_ray, setup_camera
from tiray.core.color import color_to_bytes
from tiray.core.interval import INFINITY, Interval
from tiray.core.ray import Ray, real, unit_vector, vec3
from tiray.output.export import STD_STREAM, write_ppm
from tiray.scene.intersection import intersect_scene

# Type alias for progress callback
# Callback receives (scanlines_remaining, image_height)
ProgressCallback = Callable[[int, int], None]

# =============================================================================
# Shading Constants
# =============================================================================

# Background gradient endpoints (a = 0 at the bottom, a = 1 at the top)
BACKGROUND_BOTTOM = vec3(1.0, 1.0, 1.0)
BACKGROUND_TOP = vec3(0.5, 0.7, 1.0)

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 1024
MAX_IMAGE_HEIGHT = 1024

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Averaged linear color per pixel, indexed [row, col]. Read back only, so
# stored narrower than the f64 shading math
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Encoded 8-bit channels per pixel, indexed [row, col]
_pixel_buffer = ti.Vector.field(3, dtype=ti.u8, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffers.

    Sets the active image dimensions and clears the buffers.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions exceed maximum supported size.
    """
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the render target buffers to zero."""
    _color_buffer.fill(0.0)
    _pixel_buffer.fill(0)


def reset_render_target() -> None:
    """Forget the render target so the next read raises until set up again."""
    _render_target_initialized[None] = 0
    clear_render_target()


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def ray_color(ray: Ray) -> vec3:
    """Color seen along a ray.

    Args:
        ray: The camera ray.

    Returns:
        The normal-shaded color of the nearest surface in [0, +inf), or the
        background gradient if nothing is hit.
    """
    rec = intersect_scene(ray, Interval(min=0.0, max=INFINITY))
    color = vec3(0.0, 0.0, 0.0)
    if rec.hit == 1:
        color = 0.5 * (rec.normal + vec3(1.0, 1.0, 1.0))
    else:
        unit_direction = unit_vector(ray.direction)
        a = 0.5 * (unit_direction.y + 1.0)
        color = (1.0 - a) * BACKGROUND_BOTTOM + a * BACKGROUND_TOP
    return color


@ti.func
def pixel_color(col: ti.i32, row: ti.i32, samples: ti.i32, antialias: ti.i32) -> vec3:
    """Resolve the color of one pixel.

    Args:
        col: Pixel column (0 = left).
        row: Pixel row (0 = top).
        samples: Number of jittered samples to average when antialiasing.
        antialias: 1 to average jittered samples, 0 for one center ray.

    Returns:
        The pixel's linear color.
    """
    color = vec3(0.0, 0.0, 0.0)
    if antialias == 1:
        for s in range(samples):
            color += ray_color(get_ray(col, row, s))
        color *= 1.0 / ti.cast(samples, real)
    else:
        color = ray_color(get_pixel_center_ray(col, row))
    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_scanline(row: ti.i32, width: ti.i32, samples: ti.i32, antialias: ti.i32):
    """Render every pixel of one row into the color and pixel buffers."""
    for col in range(width):
        color = pixel_color(col, row, samples, antialias)
        _color_buffer[row, col] = ti.cast(color, ti.f32)
        _pixel_buffer[row, col] = ti.cast(color_to_bytes(color), ti.u8)


@ti.kernel
def _render_single_pixel(
    col: ti.i32, row: ti.i32, samples: ti.i32, antialias: ti.i32
) -> vec3:
    """Render one pixel without touching the buffers."""
    return pixel_color(col, row, samples, antialias)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(camera: Camera, callback: ProgressCallback | None = None) -> None:
    """Render the uploaded scene into the render target.

    Validates the camera, derives its viewport, sizes the render target and
    renders scanlines top to bottom.

    Args:
        camera: Camera configuration.
        callback: Optional progress callback. Receives
            (scanlines_remaining, image_height) before each row and
            (0, image_height) once the image is complete.

    Raises:
        ValueError: If the camera configuration is invalid or the image is
            larger than the render target.
    """
    setup_camera(camera)

    width = camera.image_width
    height = camera.image_height
    setup_render_target(width, height)

    antialias = 1 if camera.antialias else 0
    for row in range(height):
        if callback is not None:
            callback(height - row, height)
        _render_scanline(row, width, camera.samples_per_pixel, antialias)

    if callback is not None:
        callback(0, height)


def render_pixel(camera: Camera, col: int, row: int) -> tuple[float, float, float]:
    """Render a single pixel and return its linear color.

    This is a Python-callable function for testing. For production rendering,
    use render_image() which processes whole scanlines in parallel.

    Args:
        camera: Camera configuration.
        col: Pixel column (0 = left).
        row: Pixel row (0 = top).

    Returns:
        Tuple of (R, G, B) color values.
    """
    setup_camera(camera)
    antialias = 1 if camera.antialias else 0
    color = _render_single_pixel(col, row, camera.samples_per_pixel, antialias)
    return (float(color[0]), float(color[1]), float(color[2]))


def get_pixel_bytes() -> npt.NDArray[np.uint8]:
    """Get the encoded image.

    Returns:
        NumPy array of shape (height, width, 3), dtype uint8, top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    pixels = _pixel_buffer.to_numpy()[:height, :width, :]
    return pixels.astype(np.uint8)


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the averaged linear colors before encoding.

    Returns:
        NumPy array of shape (height, width, 3), dtype float32, top row first.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()
    width, height = get_image_dimensions()
    image = _color_buffer.to_numpy()[:height, :width, :]
    return image.astype(np.float32)


def scanline_progress(stream: TextIO | None = None) -> ProgressCallback:
    """Build a progress callback that reports remaining scanlines in place.

    Args:
        stream: Diagnostic stream to write to. Defaults to sys.stderr.

    Returns:
        A callback suitable for render_image().
    """
    if stream is None:
        stream = sys.stderr

    def report(remaining: int, total: int) -> None:
        if remaining > 0:
            print(f"\rScanlines remaining: {remaining} ", end="", file=stream, flush=True)
        else:
            print("\rDone.                 ", file=stream, flush=True)

    return report


def render(
    camera: Camera,
    world: Any,
    out: TextIO | None = STD_STREAM,
    log: TextIO | None = STD_STREAM,
) -> npt.NDArray[np.uint8]:
    """Render a world and emit it as a P3 PPM image.

    Args:
        camera: Camera configuration.
        world: A HittableList; it is uploaded before rendering.
        out: Stream receiving the PPM text, or None to skip writing.
            Defaults to sys.stdout as it is at call time.
        log: Stream receiving scanline progress, or None for silence.
            Defaults to sys.stderr as it is at call time.

    Returns:
        The encoded image, shape (height, width, 3), dtype uint8.
    """
    if out is STD_STREAM:
        out = sys.stdout
    if log is STD_STREAM:
        log = sys.stderr

    camera.validate()
    world.upload()

    callback = scanline_progress(log) if log is not None else None
    render_image(camera, callback=callback)

    pixels = get_pixel_bytes()
    if out is not None:
        write_ppm(pixels, out)
    return pixels
