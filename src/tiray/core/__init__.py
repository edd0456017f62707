"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure and vector utilities
    interval: Numeric ranges for ray-parameter windows and clamping
    sampler: Stateless seeded random numbers for sample jitter
    color: Linear color to 8-bit encoding
    renderer: Shading, scanline kernels and the render entry point

All per-ray work uses Taichi functions so it can run inside kernels on CPU
or GPU backends.
"""

from .color import color_to_bytes
from .interval import (
    EMPTY,
    INFINITY,
    UNIVERSE,
    Interval,
    empty_interval,
    make_interval,
    universe_interval,
)
from .ray import (
    Ray,
    color3,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    point3,
    ray_at,
    real,
    unit_vector,
    vec3,
)
from .sampler import hash_u32, random_float, sample_square

# Note: renderer is NOT imported here to avoid circular imports.
# Import directly from tiray.core.renderer when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "real",
    "vec3",
    "point3",
    "color3",
    "length",
    "length_squared",
    "unit_vector",
    "dot",
    "cross",
    "Interval",
    "make_interval",
    "empty_interval",
    "universe_interval",
    "EMPTY",
    "UNIVERSE",
    "INFINITY",
    "hash_u32",
    "random_float",
    "sample_square",
    "color_to_bytes",
]
