"""Sphere primitive with closed-form ray-sphere intersection.

The ray-sphere intersection is found by solving

    |origin + t * direction - center|^2 = radius^2

for t. With ``oc = center - origin`` this is the quadratic

    a*t^2 - 2*h*t + c = 0

where:
    a = dot(direction, direction)
    h = dot(direction, oc)
    c = dot(oc, oc) - radius^2

whose roots are ``(h -/+ sqrt(h^2 - a*c)) / a``. The nearer root is always
tried first and the farther root only if the nearer one falls outside the
acceptance window. Both tests use ``Interval.surrounds``, so a root lying
exactly on a window boundary is rejected.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tiray.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti

from tiray.core.interval import Interval
from tiray.core.ray import Ray, dot, length_squared, ray_at, real, vec3
from tiray.geometry.hittable import HitRecord, make_miss_record, set_face_normal


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (non-negative float).
    """

    center: vec3
    radius: real


@ti.func
def make_sphere(center: vec3, radius: real) -> Sphere:
    """Create a sphere from center and radius.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere. Negative values are clamped to zero.

    Returns:
        A new Sphere instance.
    """
    return Sphere(center=center, radius=ti.max(0.0, radius))


@ti.func
def hit_sphere(sphere: Sphere, ray: Ray, ray_t: Interval) -> HitRecord:
    """Test for ray-sphere intersection.

    Args:
        sphere: The sphere to test intersection against.
        ray: The ray being tested. Its direction need not be normalized.
        ray_t: Acceptance window for the ray parameter. A root is accepted
            only when it lies strictly inside this interval.

    Returns:
        A HitRecord for the nearest admissible root. Check the hit field to
        determine if an intersection occurred.
    """
    # Vector from ray origin to sphere center
    oc = sphere.center - ray.origin
    a = length_squared(ray.direction)
    h = dot(ray.direction, oc)
    c = length_squared(oc) - sphere.radius * sphere.radius
    discriminant = h * h - a * c

    result = make_miss_record()

    if discriminant >= 0.0:
        sqrtd = ti.sqrt(discriminant)

        # Nearest root that lies in the acceptable range
        root = (h - sqrtd) / a
        valid = ray_t.surrounds(root)
        if not valid:
            root = (h + sqrtd) / a
            valid = ray_t.surrounds(root)

        if valid:
            point = ray_at(ray, root)
            outward_normal = (1.0 / sphere.radius) * (point - sphere.center)
            front_face, normal = set_face_normal(ray.direction, outward_normal)
            result = HitRecord(
                hit=1,
                t=root,
                point=point,
                normal=normal,
                front_face=front_face,
            )

    return result
