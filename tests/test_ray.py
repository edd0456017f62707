"""Unit tests for the Ray structure and vector utilities."""

import math

import taichi as ti


class TestRayBasics:
    """Tests for Ray construction and evaluation."""

    def test_ray_at_origin(self):
        """A ray evaluated at t=0 is its origin."""
        from tiray.core.ray import Ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        p = result[None]
        assert abs(p[0] - 1.0) < 1e-6
        assert abs(p[1] - 2.0) < 1e-6
        assert abs(p[2] - 3.0) < 1e-6

    def test_ray_at_positive_t(self):
        """ray_at moves t direction-lengths along an unnormalized direction."""
        from tiray.core.ray import make_ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 2.0, -2.0))
            result[None] = ray_at(ray, 2.5)

        test_kernel()
        p = result[None]
        assert abs(p[0] - 2.5) < 1e-5
        assert abs(p[1] - 5.0) < 1e-5
        assert abs(p[2] + 5.0) < 1e-5

    def test_ray_at_negative_t(self):
        """Negative t points behind the origin."""
        from tiray.core.ray import make_ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 1.0, 1.0), vec3(0.0, 1.0, 0.0))
            result[None] = ray_at(ray, -3.0)

        test_kernel()
        p = result[None]
        assert abs(p[1] + 2.0) < 1e-6


class TestVectorUtilities:
    """Tests for length, normalization, dot and cross."""

    def test_length(self):
        from tiray.core.ray import length, length_squared, vec3

        results = ti.field(dtype=ti.f64, shape=2)

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 12.0)
            results[0] = length(v)
            results[1] = length_squared(v)

        test_kernel()
        assert abs(results[0] - 13.0) < 1e-5
        assert abs(results[1] - 169.0) < 1e-4

    def test_unit_vector_has_unit_length(self):
        """unit_vector returns length 1 for a spread of non-zero inputs."""
        from tiray.core.ray import length, unit_vector, vec3

        inputs = [
            (1.0, 0.0, 0.0),
            (3.0, 4.0, 0.0),
            (-2.0, 7.5, 0.25),
            (1e-3, -2e-3, 5e-4),
            (250.0, -125.0, 1000.0),
        ]
        n = len(inputs)
        vectors = ti.Vector.field(3, dtype=ti.f64, shape=n)
        lengths = ti.field(dtype=ti.f64, shape=n)
        for i, v in enumerate(inputs):
            vectors[i] = v

        @ti.kernel
        def test_kernel():
            for i in range(n):
                lengths[i] = length(unit_vector(vectors[i]))

        test_kernel()
        for i in range(n):
            assert abs(lengths[i] - 1.0) < 1e-5

    def test_unit_vector_preserves_direction(self):
        from tiray.core.ray import unit_vector, vec3

        result = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = unit_vector(vec3(0.0, -5.0, 0.0))

        test_kernel()
        u = result[None]
        assert abs(u[0]) < 1e-6
        assert abs(u[1] + 1.0) < 1e-6
        assert abs(u[2]) < 1e-6

    def test_dot_product_is_symmetric(self):
        from tiray.core.ray import dot, vec3

        results = ti.field(dtype=ti.f64, shape=2)

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, -2.0, 3.0)
            b = vec3(4.0, 0.5, -6.0)
            results[0] = dot(a, b)
            results[1] = dot(b, a)

        test_kernel()
        assert abs(results[0] - (4.0 - 1.0 - 18.0)) < 1e-5
        assert results[0] == results[1]

    def test_dot_product_perpendicular(self):
        from tiray.core.ray import dot, vec3

        result = ti.field(dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = dot(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        assert abs(result[None]) < 1e-6

    def test_cross_product(self):
        """x cross y is z, and swapping the operands negates the result."""
        from tiray.core.ray import cross, vec3

        xy = ti.Vector.field(3, dtype=ti.f64, shape=())
        ab = ti.Vector.field(3, dtype=ti.f64, shape=())
        ba = ti.Vector.field(3, dtype=ti.f64, shape=())

        @ti.kernel
        def test_kernel():
            xy[None] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))
            a = vec3(1.5, -2.0, 0.5)
            b = vec3(-3.0, 1.0, 4.0)
            ab[None] = cross(a, b)
            ba[None] = cross(b, a)

        test_kernel()
        z = xy[None]
        assert abs(z[0]) < 1e-6
        assert abs(z[1]) < 1e-6
        assert abs(z[2] - 1.0) < 1e-6
        for i in range(3):
            assert math.isclose(ab[None][i], -ba[None][i], abs_tol=1e-5)

    def test_cross_product_is_perpendicular(self):
        from tiray.core.ray import cross, dot, vec3

        results = ti.field(dtype=ti.f64, shape=2)

        @ti.kernel
        def test_kernel():
            a = vec3(2.0, 3.0, -1.0)
            b = vec3(0.5, -4.0, 2.0)
            c = cross(a, b)
            results[0] = dot(c, a)
            results[1] = dot(c, b)

        test_kernel()
        assert abs(results[0]) < 1e-4
        assert abs(results[1]) < 1e-4
