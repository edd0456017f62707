"""Hit record structure and the shared ray-intersection contract.

Every intersectable object answers the same question: does a ray hit it with a
parameter ``t`` strictly inside a given Interval, and if so where? In Taichi
code the answer is returned as a HitRecord whose ``hit`` field is 1 on
success and 0 on a miss; the remaining fields are only meaningful when
``hit == 1``. A miss is an ordinary outcome, not an error.

The set of intersectable kinds is closed (see HittableKind). The scene stores
a kind tag per object and a single dispatch function in
``tiray.scene.intersection`` routes each test to the matching primitive.
Aggregates are flattened into their members when a scene is uploaded, so the
aggregate never needs a tag of its own.
"""

from enum import IntEnum

import taichi as ti

from tiray.core.ray import dot, real, vec3


class HittableKind(IntEnum):
    """Enumeration of primitive kinds stored in the scene object table."""

    SPHERE = 0


@ti.dataclass
class HitRecord:
    """Record of a ray-object intersection.

    Attributes:
        hit: Whether the ray intersected the object (1 if hit, 0 if miss).
        t: The parameter value along the ray where intersection occurred.
        point: The 3D point where the ray intersected the surface.
        normal: Unit surface normal, always oriented against the incoming ray.
        front_face: 1 if the ray arrived from outside the surface (the side the
            outward normal points to), 0 if it arrived from inside.
    """

    hit: ti.i32
    t: real
    point: vec3
    normal: vec3
    front_face: ti.i32


@ti.func
def set_face_normal(ray_direction: vec3, outward_normal: vec3):
    """Orient a surface normal against the incoming ray.

    Args:
        ray_direction: Direction of the intersecting ray.
        outward_normal: Unit normal pointing out of the surface.

    Returns:
        A tuple (front_face, normal) where front_face is 1 when
        dot(ray_direction, outward_normal) < 0, and normal is the outward
        normal on a front-face hit or its negation otherwise.
    """
    front_face = 0
    normal = -outward_normal
    if dot(ray_direction, outward_normal) < 0.0:
        front_face = 1
        normal = outward_normal
    return front_face, normal


@ti.func
def make_miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
    )
