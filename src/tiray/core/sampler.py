"""Stateless random sampling for anti-aliasing.

``ti.random`` draws from per-thread generator state, so the same kernel
launched twice produces different numbers. Sample offsets here are instead a
pure function of (seed, row, column, dimension) computed with an integer hash
chain, which makes a render with a fixed seed reproducible byte for byte, no
matter how pixels are scheduled across threads.

Example:
    >>> @ti.kernel
    ... def jitter(row: ti.i32, col: ti.i32) -> vec3:
    ...     return sample_square(7, row, col, 0)
"""

import taichi as ti

from tiray.core.ray import real, vec3

# 2^-24: maps the top 24 bits of a hash to [0, 1) exactly
_INV_2_24 = 1.0 / 16777216.0


@ti.func
def hash_u32(key) -> ti.u32:
    """Wang integer hash.

    Args:
        key: Any integer value; it is reinterpreted as u32.

    Returns:
        A well-mixed 32-bit unsigned integer.
    """
    x = ti.cast(key, ti.u32)
    x = (x ^ ti.u32(61)) ^ (x >> ti.u32(16))
    x = x * ti.u32(9)
    x = x ^ (x >> ti.u32(4))
    x = x * ti.u32(668265261)
    x = x ^ (x >> ti.u32(15))
    return x


@ti.func
def random_float(seed, a, b, c) -> real:
    """Uniform float in [0, 1) determined entirely by its arguments.

    Args:
        seed: Render seed.
        a: First coordinate (e.g. pixel row).
        b: Second coordinate (e.g. pixel column).
        c: Third coordinate (e.g. sample index and dimension).

    Returns:
        A pseudo-random real in [0, 1).
    """
    h = hash_u32(seed)
    h = hash_u32(h ^ ti.cast(a, ti.u32))
    h = hash_u32(h ^ ti.cast(b, ti.u32))
    h = hash_u32(h ^ ti.cast(c, ti.u32))
    return ti.cast(h >> ti.u32(8), real) * _INV_2_24


@ti.func
def sample_square(seed, row: ti.i32, col: ti.i32, sample: ti.i32) -> vec3:
    """Random offset in the unit square centered on the origin.

    Args:
        seed: Render seed.
        row: Pixel row.
        col: Pixel column.
        sample: Sample index within the pixel.

    Returns:
        (x, y, 0) with x and y uniform in [-0.5, 0.5).
    """
    ox = random_float(seed, row, col, 2 * sample) - 0.5
    oy = random_float(seed, row, col, 2 * sample + 1) - 0.5
    return vec3(ox, oy, 0.0)
