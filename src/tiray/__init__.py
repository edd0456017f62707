"""Taichi-based minimal offline ray tracer.

This package renders scenes of spheres with a normal-visualization shader,
using Taichi kernels for all per-ray work:
- Closed-form ray-sphere intersection
- Closest-hit resolution across a scene of primitives
- Jittered multi-sample anti-aliasing with a reproducible seed
- PPM (P3) and PNG output

Subpackages:
    core: Rays, vector utilities, intervals, sampling, color encoding and the render loop
    geometry: The hit record contract and shape primitives
    scene: Scene storage, closest-hit queries and scene builders
    camera: Camera configuration and ray generation
    output: Image export
"""

__version__ = "0.1.0"
