"""Color encoding from linear [0, 1] channels to 8-bit integers.

Each channel is clamped to [0.000, 0.999], multiplied by 256 and truncated
toward zero, so 1.0 maps to 255 and 0.5 maps to 128. No gamma correction is
applied.
"""

import taichi as ti
import taichi.math as tm

from tiray.core.interval import Interval
from tiray.core.ray import vec3

ivec3 = tm.ivec3

# Bounds used to keep every channel below 1.0 before scaling by 256
PIXEL_MIN = 0.000
PIXEL_MAX = 0.999


@ti.func
def color_to_bytes(pixel_color: vec3) -> ivec3:
    """Translate a color with [0, 1] channels to the byte range [0, 255].

    Args:
        pixel_color: Linear RGB color. Out-of-range values are clamped.

    Returns:
        Integer (r, g, b) triple.
    """
    intensity = Interval(min=PIXEL_MIN, max=PIXEL_MAX)
    r = ti.cast(256.0 * intensity.clamp(pixel_color.x), ti.i32)
    g = ti.cast(256.0 * intensity.clamp(pixel_color.y), ti.i32)
    b = ti.cast(256.0 * intensity.clamp(pixel_color.z), ti.i32)
    return ivec3(r, g, b)
