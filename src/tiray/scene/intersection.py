"""Scene-level primitive storage and closest-hit intersection testing.

The scene stores primitives in preallocated Taichi fields for GPU-efficient
access. Each object gets one row in an object table holding its kind tag
(see HittableKind) and an index into the per-kind storage; rows are kept in
insertion order.

intersect_scene walks the object table and keeps a shrinking upper bound on
``t``: each object is tested against ``[ray_t.min, closest_so_far]`` and every
success lowers the bound to the new ``t``. When primitives overlap in depth
the nearest surface wins regardless of the order objects were added.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tiray.core.ray import vec3
    >>> from tiray.scene.intersection import add_sphere, clear_scene, intersect_scene
    >>> clear_scene()
    >>> add_sphere(vec3(0, 0, -1), 0.5)
    >>> add_sphere(vec3(0, -100.5, -1), 100.0)
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti

from tiray.core.interval import Interval
from tiray.core.ray import Ray, real
from tiray.geometry.hittable import HitRecord, HittableKind, make_miss_record
from tiray.geometry.sphere import Sphere, hit_sphere

# Maximum number of primitives supported in the scene
MAX_SPHERES = 1024
MAX_OBJECTS = 1024

# Object table: one entry per hittable, in insertion order
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
object_indices = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())

# Sphere storage: Structure of Arrays layout for GPU efficiency
sphere_centers = ti.Vector.field(3, dtype=real, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=real, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive counts to zero. The actual field data is not
    cleared but will be overwritten when new primitives are added.
    """
    num_objects[None] = 0
    num_spheres[None] = 0


def _append_object(kind: HittableKind, index: int) -> int:
    """Register a primitive in the object table and return its row."""
    row = num_objects[None]
    if row >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    object_kinds[row] = int(kind)
    object_indices[row] = index
    num_objects[None] = row + 1
    return row


def add_sphere(center, radius: float) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere (vec3 or 3-sequence).
        radius: The radius of the sphere. Negative values are clamped to zero.

    Returns:
        The index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of spheres or objects is exceeded.
    """
    idx = num_spheres[None]
    if idx >= MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    _append_object(HittableKind.SPHERE, idx)
    sphere_centers[idx] = [float(center[0]), float(center[1]), float(center[2])]
    sphere_radii[idx] = max(0.0, float(radius))
    num_spheres[None] = idx + 1
    return idx


def get_sphere_count() -> int:
    """Get the number of spheres in the scene."""
    return int(num_spheres[None])


def get_object_count() -> int:
    """Get the number of objects in the scene, across all kinds."""
    return int(num_objects[None])


@ti.func
def hit_object(kind: ti.i32, index: ti.i32, ray: Ray, ray_t: Interval) -> HitRecord:
    """Dispatch an intersection test to the primitive named by (kind, index).

    Args:
        kind: The HittableKind tag of the object.
        index: Index of the object in its kind's storage.
        ray: The ray being tested.
        ray_t: Acceptance window for the ray parameter.

    Returns:
        The primitive's HitRecord, or a miss record for an unknown kind.
    """
    rec = make_miss_record()
    if kind == int(HittableKind.SPHERE):
        sphere = Sphere(center=sphere_centers[index], radius=sphere_radii[index])
        rec = hit_sphere(sphere, ray, ray_t)
    return rec


@ti.func
def intersect_scene(ray: Ray, ray_t: Interval) -> HitRecord:
    """Test ray against all objects in the scene.

    Iterates the object table in insertion order, narrowing the upper bound of
    the acceptance window to the closest hit found so far.

    Args:
        ray: The ray being tested.
        ray_t: Acceptance window for the ray parameter.

    Returns:
        A HitRecord for the closest intersection, or a miss record if no
        object was hit.
    """
    closest_so_far = ray_t.max
    result = make_miss_record()

    n_objects = num_objects[None]
    for i in range(n_objects):
        window = Interval(min=ray_t.min, max=closest_so_far)
        rec = hit_object(object_kinds[i], object_indices[i], ray, window)
        if rec.hit == 1:
            closest_so_far = rec.t
            result = rec

    return result
