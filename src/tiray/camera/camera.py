"""Axis-aligned pinhole camera and per-pixel ray generation.

The camera sits at the world origin looking down -z with +y up. Its viewport
is a 2-unit-tall rectangle one focal length (1.0) in front of the center,
as wide as the image aspect requires. Pixel (col, row) = (0, 0) is the
top-left pixel; rows grow downward.

Configuration lives in the Camera dataclass. Everything derived from it
(image height, pixel deltas, location of the top-left pixel center) is
recomputed by setup_camera() at the start of every render and stored in Taichi
fields so kernels can read it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tiray.camera.camera import Camera, setup_camera, get_camera_info
    >>>
    >>> camera = Camera(aspect_ratio=16.0 / 9.0, image_width=400)
    >>> setup_camera(camera)
    >>> get_camera_info()["image_height"]
    225
"""

from dataclasses import dataclass
from typing import Any, TextIO

import numpy as np
import taichi as ti

from tiray.core.ray import Ray, make_ray, real, vec3
from tiray.core.sampler import sample_square
from tiray.output.export import STD_STREAM

# =============================================================================
# Camera Data Structures
# =============================================================================

FOCAL_LENGTH = 1.0
VIEWPORT_HEIGHT = 2.0


@dataclass
class Camera:
    """Configuration for the render camera.

    Attributes:
        aspect_ratio: Image width divided by image height.
        image_width: Rendered image width in pixels.
        samples_per_pixel: Number of jittered rays averaged per pixel.
        antialias: If False, each pixel is a single ray through its exact
            center and samples_per_pixel is ignored.
        seed: Seed for sample jitter. Same seed, same image.
    """

    aspect_ratio: float = 1.0
    image_width: int = 100
    samples_per_pixel: int = 10
    antialias: bool = True
    seed: int = 0

    @property
    def image_height(self) -> int:
        """Image height in pixels, never less than 1."""
        return max(1, int(self.image_width / self.aspect_ratio))

    def validate(self) -> None:
        """Check the configuration before rendering.

        Raises:
            ValueError: If the width, aspect ratio or sample count is not
                positive.
        """
        if self.image_width <= 0:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if not self.aspect_ratio > 0.0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if self.samples_per_pixel <= 0:
            raise ValueError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )

    def render(
        self,
        world: Any,
        out: TextIO | None = STD_STREAM,
        log: TextIO | None = STD_STREAM,
    ):
        """Render ``world`` and write it as a PPM image.

        See tiray.core.renderer.render for details.
        """
        from tiray.core.renderer import render

        return render(self, world, out=out, log=log)


# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

_camera_center = ti.Vector.field(3, dtype=real, shape=())
_pixel00_loc = ti.Vector.field(3, dtype=real, shape=())  # Center of the top-left pixel
_pixel_delta_u = ti.Vector.field(3, dtype=real, shape=())  # Offset to the pixel on the right
_pixel_delta_v = ti.Vector.field(3, dtype=real, shape=())  # Offset to the pixel below
_sample_seed = ti.field(dtype=ti.u32, shape=())

# Python-side copy of the derived state, for get_camera_info()
_camera_state: dict[str, Any] = {}


# =============================================================================
# Camera Setup (Python-side, called once per render)
# =============================================================================


def setup_camera(camera: Camera) -> None:
    """Derive viewport geometry from the camera configuration.

    The geometry is computed in float64 with NumPy and then stored in Taichi
    fields. Must be called before any kernel that generates camera rays.

    Args:
        camera: Camera configuration.

    Raises:
        ValueError: If the configuration is invalid.
    """
    camera.validate()

    image_width = camera.image_width
    image_height = camera.image_height

    center = np.zeros(3, dtype=np.float64)
    viewport_width = VIEWPORT_HEIGHT * (float(image_width) / image_height)

    # Vectors across the horizontal and down the vertical viewport edges
    viewport_u = np.array([viewport_width, 0.0, 0.0])
    viewport_v = np.array([0.0, -VIEWPORT_HEIGHT, 0.0])

    pixel_delta_u = (1.0 / image_width) * viewport_u
    pixel_delta_v = (1.0 / image_height) * viewport_v

    viewport_upper_left = (
        center - np.array([0.0, 0.0, FOCAL_LENGTH]) - 0.5 * viewport_u - 0.5 * viewport_v
    )
    pixel00_loc = viewport_upper_left + 0.5 * (pixel_delta_u + pixel_delta_v)

    _camera_center[None] = center.tolist()
    _pixel00_loc[None] = pixel00_loc.tolist()
    _pixel_delta_u[None] = pixel_delta_u.tolist()
    _pixel_delta_v[None] = pixel_delta_v.tolist()
    _sample_seed[None] = camera.seed & 0xFFFFFFFF

    _camera_state.clear()
    _camera_state.update(
        image_width=image_width,
        image_height=image_height,
        viewport_width=viewport_width,
        viewport_height=VIEWPORT_HEIGHT,
        center=tuple(center.tolist()),
        pixel00_loc=tuple(pixel00_loc.tolist()),
        pixel_delta_u=tuple(pixel_delta_u.tolist()),
        pixel_delta_v=tuple(pixel_delta_v.tolist()),
    )


# =============================================================================
# Ray Generation (Taichi-compatible, GPU-callable)
# =============================================================================


@ti.func
def get_camera_center() -> vec3:
    """Get the camera center in world space."""
    return _camera_center[None]


@ti.func
def get_pixel_center_ray(col: ti.i32, row: ti.i32) -> Ray:
    """Generate the ray through the exact center of pixel (col, row).

    Args:
        col: Pixel column (0 = left).
        row: Pixel row (0 = top).

    Returns:
        A Ray from the camera center. The direction is not normalized.
    """
    pixel_center = (
        _pixel00_loc[None]
        + ti.cast(col, real) * _pixel_delta_u[None]
        + ti.cast(row, real) * _pixel_delta_v[None]
    )
    origin = get_camera_center()
    return make_ray(origin, pixel_center - origin)


@ti.func
def get_ray(col: ti.i32, row: ti.i32, sample: ti.i32) -> Ray:
    """Generate a jittered ray for anti-aliasing.

    The sample point is drawn uniformly from the pixel's square footprint
    around its center. The offset depends only on the camera seed, the pixel
    and the sample index.

    Args:
        col: Pixel column (0 = left).
        row: Pixel row (0 = top).
        sample: Sample index within the pixel.

    Returns:
        A Ray from the camera center through the sample point.
    """
    offset = sample_square(_sample_seed[None], row, col, sample)
    pixel_sample = (
        _pixel00_loc[None]
        + (ti.cast(col, real) + offset.x) * _pixel_delta_u[None]
        + (ti.cast(row, real) + offset.y) * _pixel_delta_v[None]
    )
    origin = get_camera_center()
    return make_ray(origin, pixel_sample - origin)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, Any]:
    """Get the derived camera state from the last setup_camera() call.

    Returns:
        Dictionary with image_width, image_height, viewport_width,
        viewport_height, center, pixel00_loc, pixel_delta_u and pixel_delta_v.

    Raises:
        RuntimeError: If setup_camera() has not been called.
    """
    if not _camera_state:
        raise RuntimeError("Camera not set up. Call setup_camera() first.")
    return dict(_camera_state)
