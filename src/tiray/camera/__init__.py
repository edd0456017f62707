"""Camera module for view and ray generation.

Components:
    camera: Axis-aligned pinhole camera at the origin looking down -z

Camera responsibilities:
    - Derive image height and viewport geometry from its configuration
    - Generate a ray through each pixel center, or jittered sample rays
      for anti-aliasing

Pixel coordinates are (col, row) with (0, 0) at the top-left.
"""

from .camera import (
    Camera,
    get_camera_center,
    get_camera_info,
    get_pixel_center_ray,
    get_ray,
    setup_camera,
)

__all__ = [
    "Camera",
    "setup_camera",
    "get_ray",
    "get_pixel_center_ray",
    "get_camera_center",
    "get_camera_info",
]
