"""Scene module for primitive storage and ray-scene queries.

Components:
    intersection: Device-side object tables and closest-hit search
    world: HittableList, the host-side aggregate that uploads into those tables
    spheres: The two-sphere demo scene
"""

from .intersection import (
    MAX_OBJECTS,
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_object_count,
    get_sphere_count,
    hit_object,
    intersect_scene,
)
from .spheres import SceneParams, create_sphere_scene
from .world import HitInfo, HittableList, SphereInfo

__all__ = [
    # Intersection module
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "get_object_count",
    "hit_object",
    "intersect_scene",
    "MAX_SPHERES",
    "MAX_OBJECTS",
    # World module
    "HittableList",
    "SphereInfo",
    "HitInfo",
    # Demo scene
    "SceneParams",
    "create_sphere_scene",
]
