"""Unit tests for Interval and its canonical instances."""

import math

import pytest
import taichi as ti


class TestIntervalMembership:
    """Tests for contains and surrounds."""

    @pytest.mark.parametrize(
        "x, contains, surrounds",
        [
            (0.5, 1, 1),
            (0.0, 1, 0),
            (1.0, 1, 0),
            (-0.1, 0, 0),
            (1.1, 0, 0),
        ],
    )
    def test_boundaries(self, x, contains, surrounds):
        """contains includes the bounds, surrounds excludes them."""
        from tiray.core.interval import Interval

        results = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel(value: ti.f64):
            interval = Interval(min=0.0, max=1.0)
            results[0] = ti.cast(interval.contains(value), ti.i32)
            results[1] = ti.cast(interval.surrounds(value), ti.i32)

        test_kernel(x)
        assert results[0] == contains
        assert results[1] == surrounds

    def test_empty_contains_nothing(self):
        from tiray.core.interval import empty_interval

        results = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            empty = empty_interval()
            results[0] = ti.cast(empty.contains(0.0), ti.i32)
            results[1] = ti.cast(empty.contains(1e30), ti.i32)
            results[2] = ti.cast(empty.size() < 0.0, ti.i32)

        test_kernel()
        assert results[0] == 0
        assert results[1] == 0
        assert results[2] == 1

    def test_universe_contains_everything(self):
        from tiray.core.interval import universe_interval

        results = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            universe = universe_interval()
            results[0] = ti.cast(universe.contains(0.0), ti.i32)
            results[1] = ti.cast(universe.surrounds(-1e30), ti.i32)
            results[2] = ti.cast(universe.surrounds(1e30), ti.i32)

        test_kernel()
        assert results[0] == 1
        assert results[1] == 1
        assert results[2] == 1

    def test_python_side_constants(self):
        from tiray.core.interval import EMPTY, UNIVERSE

        assert EMPTY == (math.inf, -math.inf)
        assert UNIVERSE == (-math.inf, math.inf)


class TestIntervalArithmetic:
    """Tests for size and clamp."""

    def test_size(self):
        from tiray.core.interval import make_interval

        result = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = make_interval(-1.5, 2.0).size()

        test_kernel()
        assert abs(result[None] - 3.5) < 1e-6

    @pytest.mark.parametrize(
        "x, expected",
        [
            (-0.25, 0.0),
            (0.0, 0.0),
            (0.5, 0.5),
            (0.999, 0.999),
            (1.0, 0.999),
            (7.0, 0.999),
        ],
    )
    def test_clamp_to_pixel_range(self, x, expected):
        """Clamping to [0, 0.999] keeps in-range values and pins the rest."""
        from tiray.core.interval import Interval

        result = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel(value: ti.f64):
            result[None] = Interval(min=0.0, max=0.999).clamp(value)

        test_kernel(x)
        assert abs(result[None] - expected) < 1e-6
