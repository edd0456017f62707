"""HittableList: the host-side aggregate of scene objects.

The HittableList owns an ordered list of members. Members are SphereInfo
descriptions or other HittableList instances; nested lists are flattened
depth-first when the world is uploaded, which keeps closest-hit results
identical to testing the nested aggregate directly.

Kernels never see a HittableList. ``upload()`` writes its members into the
scene tables in ``tiray.scene.intersection``, and rendering always uploads the
world it was given before the first kernel runs. Only one world is resident
on the device at a time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tiray.scene.world import HittableList, SphereInfo
    >>> world = HittableList(SphereInfo(center=(0, 0, -1), radius=0.5))
    >>> world.add(SphereInfo(center=(0, -100.5, -1), radius=100.0))
    >>> rec = world.hit(origin=(0, 0, 0), direction=(0, 0, -1))
    >>> rec.t
    0.5
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Union

import taichi as ti

from tiray.core.interval import Interval
from tiray.core.ray import make_ray, real, vec3
from tiray.scene.intersection import (
    add_sphere,
    clear_scene,
    get_object_count,
    intersect_scene,
)


@dataclass
class SphereInfo:
    """Description of a sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere. Negative input is clamped to zero.
    """

    center: tuple[float, float, float]
    radius: float

    def __post_init__(self) -> None:
        self.center = (float(self.center[0]), float(self.center[1]), float(self.center[2]))
        self.radius = max(0.0, float(self.radius))


@dataclass
class HitInfo:
    """Python-side result of a closest-hit query.

    Attributes:
        t: Ray parameter of the intersection.
        point: Intersection point.
        normal: Unit normal, oriented against the ray.
        front_face: True if the ray hit the outside of the surface.
    """

    t: float
    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    front_face: bool


Hittable = Union[SphereInfo, "HittableList"]


# Result fields for Python-side hit queries
_query_hit = ti.field(dtype=ti.i32, shape=())
_query_t = ti.field(dtype=real, shape=())
_query_point = ti.Vector.field(3, dtype=real, shape=())
_query_normal = ti.Vector.field(3, dtype=real, shape=())
_query_front_face = ti.field(dtype=ti.i32, shape=())


@ti.kernel
def _query_scene(origin: vec3, direction: vec3, t_min: real, t_max: real):
    """Run intersect_scene for one ray and store the record."""
    rec = intersect_scene(make_ray(origin, direction), Interval(min=t_min, max=t_max))
    _query_hit[None] = rec.hit
    _query_t[None] = rec.t
    _query_point[None] = rec.point
    _query_normal[None] = rec.normal
    _query_front_face[None] = rec.front_face


def _as_tuple(v: Any) -> tuple[float, float, float]:
    return (float(v[0]), float(v[1]), float(v[2]))


class HittableList:
    """An ordered aggregate of hittable objects.

    Attributes:
        objects: The members, in insertion order.

    Example:
        >>> world = HittableList()
        >>> world.add(SphereInfo((0, 0, -1), 0.5))
        >>> len(world)
        1
    """

    def __init__(self, obj: Hittable | None = None) -> None:
        """Create an aggregate, optionally seeded with one member.

        Args:
            obj: First member to add, if any.
        """
        self.objects: list[Hittable] = []
        if obj is not None:
            self.add(obj)

    def add(self, obj: Hittable) -> None:
        """Append a member.

        Args:
            obj: A SphereInfo or another HittableList.

        Raises:
            TypeError: If obj is not a supported hittable, or is this list.
        """
        if obj is self:
            raise TypeError("A HittableList cannot contain itself")
        if not isinstance(obj, (SphereInfo, HittableList)):
            raise TypeError(f"Unsupported hittable type: {type(obj).__name__}")
        self.objects.append(obj)

    def add_sphere(self, center: tuple[float, float, float], radius: float) -> SphereInfo:
        """Convenience wrapper that builds and adds a SphereInfo."""
        sphere = SphereInfo(center=center, radius=radius)
        self.add(sphere)
        return sphere

    def clear(self) -> None:
        """Remove every member."""
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def primitives(self) -> Iterator[SphereInfo]:
        """Iterate over leaf primitives, flattening nested lists depth-first."""
        for obj in self.objects:
            if isinstance(obj, HittableList):
                yield from obj.primitives()
            else:
                yield obj

    def upload(self) -> int:
        """Write this world into the scene tables, replacing their contents.

        Returns:
            The number of primitives uploaded.

        Raises:
            RuntimeError: If the scene capacity is exceeded.
        """
        clear_scene()
        for sphere in self.primitives():
            add_sphere(sphere.center, sphere.radius)
        return get_object_count()

    def hit(
        self,
        origin: tuple[float, float, float],
        direction: tuple[float, float, float],
        t_min: float = 0.0,
        t_max: float = math.inf,
    ) -> HitInfo | None:
        """Find the closest intersection of a ray with this world.

        Uploads the world, then runs the same closest-hit search the renderer
        uses.

        Args:
            origin: Ray origin.
            direction: Ray direction (not normalized).
            t_min: Lower bound of the acceptance window (exclusive).
            t_max: Upper bound of the acceptance window (exclusive).

        Returns:
            A HitInfo for the nearest hit, or None if the ray misses.
        """
        self.upload()
        _query_scene(vec3(*_as_tuple(origin)), vec3(*_as_tuple(direction)), t_min, t_max)
        if _query_hit[None] == 0:
            return None
        return HitInfo(
            t=float(_query_t[None]),
            point=_as_tuple(_query_point[None]),
            normal=_as_tuple(_query_normal[None]),
            front_face=bool(_query_front_face[None]),
        )

    def to_config(self) -> list[dict[str, Any]]:
        """Serialize the members to plain data.

        Returns:
            A list of dicts; spheres are ``{"type": "sphere", "center": ...,
            "radius": ...}`` and nested lists are ``{"type": "list",
            "objects": [...]}``.
        """
        config: list[dict[str, Any]] = []
        for obj in self.objects:
            if isinstance(obj, HittableList):
                config.append({"type": "list", "objects": obj.to_config()})
            else:
                config.append(
                    {"type": "sphere", "center": list(obj.center), "radius": obj.radius}
                )
        return config

    @classmethod
    def from_config(cls, config: list[dict[str, Any]]) -> "HittableList":
        """Build a HittableList from data produced by to_config().

        Raises:
            ValueError: If an entry has an unknown type.
        """
        world = cls()
        for entry in config:
            kind = entry.get("type")
            if kind == "sphere":
                world.add(SphereInfo(center=tuple(entry["center"]), radius=entry["radius"]))
            elif kind == "list":
                world.add(cls.from_config(entry["objects"]))
            else:
                raise ValueError(f"Unknown hittable type in config: {kind!r}")
        return world

    def __repr__(self) -> str:
        return f"HittableList(objects={len(self.objects)})"
