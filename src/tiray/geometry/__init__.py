"""Geometry module for the intersection contract and shape primitives.

Components:
    hittable: HitRecord, face orientation and the HittableKind tag set
    sphere: Sphere primitive with ray-sphere intersection

All intersection routines are Taichi functions (@ti.func). They follow the
pattern:
    rec = hit_shape(shape, ray, ray_t)
where rec.hit is 1 if the ray meets the shape with t strictly inside ray_t.
"""

from .hittable import HitRecord, HittableKind, make_miss_record, set_face_normal
from .sphere import Sphere, hit_sphere, make_sphere

__all__ = [
    "HitRecord",
    "HittableKind",
    "make_miss_record",
    "set_face_normal",
    "Sphere",
    "hit_sphere",
    "make_sphere",
]
