"""Ray data structure and vector utilities for GPU-accelerated ray tracing.

This module provides the fundamental Ray dataclass and the vector algebra the
rest of the renderer is built on. All operations are designed to work within
Taichi kernels.

Vectors are Taichi 3-vectors of ``real`` (f64). The same type is used for
displacements, spatial points (``point3``) and RGB colors (``color3``); the
aliases exist only to make signatures read better.

Division of a vector by a scalar is written as multiplication by the
reciprocal, and sums are accumulated x, y, z in order. Together with
``ti.init(default_fp=ti.f64, fast_math=False)``, which makes float literals
double and disables reassociation, this keeps results bit-identical to plain
IEEE double arithmetic.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu, default_fp=ti.f64, fast_math=False)
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti

# Scalar type for all geometry and color arithmetic
real = ti.f64

# Type alias for 3D vectors of real
vec3 = ti.types.vector(3, real)
point3 = vec3
color3 = vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). It is neither
            normalized nor validated; a zero direction is the caller's problem.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: real) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector. Kept as given.

    Returns:
        A new Ray instance.
    """
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> real:
    """Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def length_squared(v: vec3) -> real:
    """Squared Euclidean length of a vector (no square root)."""
    return v.x * v.x + v.y * v.y + v.z * v.z


@ti.func
def unit_vector(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Precondition: ``v`` must have non-zero length. The division is not
    guarded, so a zero vector yields NaN components.

    Args:
        v: The input vector.

    Returns:
        (1 / length(v)) * v.
    """
    return (1.0 / length(v)) * v


@ti.func
def dot(a: vec3, b: vec3) -> real:
    """Compute the dot product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The dot product a . b.
    """
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the cross product of two vectors.

    Args:
        a: First vector.
        b: Second vector.

    Returns:
        The cross product a x b. Swapping the arguments negates the result.
    """
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )
