"""Unit tests for scene-level intersection.

Tests cover:
- Object table storage and clearing
- Kind dispatch
- Closest hit selection independent of insertion order
- Acceptance window bounds
- Capacity limits
"""

import math

import pytest
import taichi as ti


def _intersect(origin, direction, t_min=0.0, t_max=math.inf):
    """Run intersect_scene for one ray and return (hit, t, normal)."""
    from tiray.core.interval import Interval
    from tiray.core.ray import make_ray, vec3
    from tiray.scene.intersection import intersect_scene

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f64, shape=())
    normal = ti.Vector.field(3, dtype=ti.f64, shape=())

    @ti.kernel
    def test_kernel(o: vec3, d: vec3, lo: ti.f64, hi: ti.f64):
        rec = intersect_scene(make_ray(o, d), Interval(min=lo, max=hi))
        hit[None] = rec.hit
        t_val[None] = rec.t
        normal[None] = rec.normal

    test_kernel(vec3(*origin), vec3(*direction), t_min, t_max)
    return int(hit[None]), float(t_val[None]), tuple(normal.to_numpy().tolist())


class TestScenePrimitiveStorage:
    """Tests for scene primitive storage and management."""

    def test_add_sphere(self):
        from tiray.scene.intersection import add_sphere, get_object_count, get_sphere_count

        idx = add_sphere((0.0, 0.0, -1.0), 0.5)
        assert idx == 0
        assert get_sphere_count() == 1
        assert get_object_count() == 1

    def test_add_sphere_records_kind(self):
        from tiray.geometry.hittable import HittableKind
        from tiray.scene.intersection import add_sphere, object_indices, object_kinds

        add_sphere((0.0, 0.0, -1.0), 0.5)
        add_sphere((0.0, 0.0, -2.0), 0.5)
        assert object_kinds[1] == int(HittableKind.SPHERE)
        assert object_indices[1] == 1

    def test_negative_radius_stored_as_zero(self):
        from tiray.scene.intersection import add_sphere, sphere_radii

        idx = add_sphere((0.0, 0.0, -1.0), -3.0)
        assert sphere_radii[idx] == 0.0

    def test_clear_scene(self):
        from tiray.scene.intersection import (
            add_sphere,
            clear_scene,
            get_object_count,
            get_sphere_count,
        )

        add_sphere((0.0, 0.0, -1.0), 0.5)
        add_sphere((1.0, 0.0, -1.0), 0.5)
        assert get_sphere_count() == 2

        clear_scene()
        assert get_sphere_count() == 0
        assert get_object_count() == 0

    def test_capacity_exceeded_raises(self):
        from tiray.scene.intersection import MAX_SPHERES, add_sphere

        for i in range(MAX_SPHERES):
            add_sphere((float(i), 0.0, -10.0), 0.1)
        with pytest.raises(RuntimeError, match="Maximum number"):
            add_sphere((0.0, 0.0, -1.0), 0.5)


class TestSceneIntersection:
    """Tests for closest-hit queries."""

    def test_intersect_empty_scene(self):
        hit, _, _ = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 0

    def test_hit_single_sphere(self):
        from tiray.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        hit, t, normal = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert abs(t - 0.5) < 1e-5
        assert normal == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)

    def test_miss_single_sphere(self):
        from tiray.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -1.0), 0.5)
        hit, _, _ = _intersect((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert hit == 0

    @pytest.mark.parametrize("reverse", [False, True])
    def test_closest_of_two_spheres(self, reverse):
        """The nearer sphere wins regardless of insertion order."""
        from tiray.scene.intersection import add_sphere

        spheres = [((0.0, 0.0, -3.0), 1.0), ((0.0, 0.0, -6.0), 1.0)]
        if reverse:
            spheres.reverse()
        for center, radius in spheres:
            add_sphere(center, radius)

        hit, t, _ = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert abs(t - 2.0) < 1e-5

    @pytest.mark.parametrize("reverse", [False, True])
    def test_closest_of_overlapping_spheres(self, reverse):
        """Overlapping spheres still resolve to the nearest surface."""
        from tiray.scene.intersection import add_sphere

        spheres = [((0.0, 0.0, -2.0), 1.0), ((0.0, 0.0, -2.5), 1.0)]
        if reverse:
            spheres.reverse()
        for center, radius in spheres:
            add_sphere(center, radius)

        hit, t, _ = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert hit == 1
        assert abs(t - 1.0) < 1e-5

    def test_hit_rejected_by_t_max(self):
        from tiray.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -3.0), 1.0)
        hit, _, _ = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), t_max=1.5)
        assert hit == 0

    def test_far_sphere_found_when_near_sphere_out_of_window(self):
        from tiray.scene.intersection import add_sphere

        add_sphere((0.0, 0.0, -3.0), 1.0)
        add_sphere((0.0, 0.0, -10.0), 1.0)
        hit, t, _ = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), t_min=5.0)
        assert hit == 1
        assert abs(t - 9.0) < 1e-5

