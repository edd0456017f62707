"""Numeric interval used for ray-parameter windows and color clamping.

An Interval is a range [min, max] on the real line. It is used in two places:

- Restricting the acceptable ray parameter ``t`` during intersection search.
  Intersection tests use ``surrounds`` (strict on both ends), so a hit exactly
  at the window boundary is rejected. This keeps ``t == 0`` self-hits out of a
  ``[0, inf)`` search and lets the closest-hit loop shrink the window to the
  current best ``t`` without re-accepting it.
- Clamping color channels before byte encoding (see ``core.color``).

Two canonical intervals exist: the empty interval (min=+inf, max=-inf) which
contains nothing, and the universe (min=-inf, max=+inf) which contains
everything.

Example:
    >>> @ti.kernel
    ... def demo() -> real:
    ...     return Interval(min=0.0, max=0.999).clamp(1.5)  # 0.999
"""

import math

import taichi as ti

from tiray.core.ray import real

INFINITY = math.inf

# (min, max) bounds of the canonical intervals, for Python-side use
EMPTY = (INFINITY, -INFINITY)
UNIVERSE = (-INFINITY, INFINITY)


@ti.dataclass
class Interval:
    """A closed numeric range [min, max].

    Attributes:
        min: Lower bound.
        max: Upper bound. An interval with max < min is empty.
    """

    min: real
    max: real

    @ti.func
    def size(self):
        return self.max - self.min

    @ti.func
    def contains(self, x):
        """True if min <= x <= max."""
        return self.min <= x and x <= self.max

    @ti.func
    def surrounds(self, x):
        """True if min < x < max. Boundary values are excluded."""
        return self.min < x and x < self.max

    @ti.func
    def clamp(self, x):
        """Return min if x < min, max if x > max, otherwise x."""
        result = x
        if x < self.min:
            result = self.min
        elif x > self.max:
            result = self.max
        return result


@ti.func
def make_interval(lo: real, hi: real) -> Interval:
    """Create an interval from its bounds."""
    return Interval(min=lo, max=hi)


@ti.func
def empty_interval() -> Interval:
    """The interval that contains nothing."""
    return Interval(min=INFINITY, max=-INFINITY)


@ti.func
def universe_interval() -> Interval:
    """The interval that contains every value."""
    return Interval(min=-INFINITY, max=INFINITY)
