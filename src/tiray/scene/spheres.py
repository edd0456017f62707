"""Two-sphere demo scene.

A small sphere floats in front of the camera above a very large sphere that
reads as the ground plane:

    - Small sphere: center (0, 0, -1), radius 0.5
    - Ground sphere: center (0, -100.5, -1), radius 100

The camera is the default axis-aligned camera at the origin with a 16:9
aspect ratio and a 400-pixel-wide image (225 rows).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tiray.scene.spheres import create_sphere_scene
    >>> world, camera = create_sphere_scene()
    >>> camera.image_height
    225
"""

from dataclasses import dataclass

from tiray.camera.camera import Camera
from tiray.scene.world import HittableList, SphereInfo


@dataclass
class SceneParams:
    """Parameters for the two-sphere scene.

    Attributes:
        sphere_center: Center of the small sphere.
        sphere_radius: Radius of the small sphere.
        ground_center: Center of the ground sphere.
        ground_radius: Radius of the ground sphere.
        aspect_ratio: Camera aspect ratio.
        image_width: Camera image width in pixels.
        samples_per_pixel: Samples averaged per pixel.
        antialias: Whether to jitter and average samples.
        seed: Sample jitter seed.
    """

    sphere_center: tuple[float, float, float] = (0.0, 0.0, -1.0)
    sphere_radius: float = 0.5
    ground_center: tuple[float, float, float] = (0.0, -100.5, -1.0)
    ground_radius: float = 100.0
    aspect_ratio: float = 16.0 / 9.0
    image_width: int = 400
    samples_per_pixel: int = 10
    antialias: bool = True
    seed: int = 0


def create_sphere_scene(params: SceneParams | None = None) -> tuple[HittableList, Camera]:
    """Create the two-sphere scene and its camera.

    Args:
        params: Scene parameters. Uses defaults if None.

    Returns:
        A tuple of (world, camera).
    """
    if params is None:
        params = SceneParams()

    world = HittableList()
    world.add(SphereInfo(center=params.sphere_center, radius=params.sphere_radius))
    world.add(SphereInfo(center=params.ground_center, radius=params.ground_radius))

    camera = Camera(
        aspect_ratio=params.aspect_ratio,
        image_width=params.image_width,
        samples_per_pixel=params.samples_per_pixel,
        antialias=params.antialias,
        seed=params.seed,
    )

    return world, camera
