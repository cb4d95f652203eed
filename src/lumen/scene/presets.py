"""Demo scene configuration.

Four spheres (two ivory, two red rubber) lit by three point lights, viewed
by a camera at the origin looking down -z. Rendered at 1024x768 with a
pixel-to-world scale of 0.008 this gives the classic sphere-and-light test
image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.scene.presets import create_demo_scene
    >>> scene, camera = create_demo_scene()
    >>> len(scene.objects), len(scene.lights)
    (4, 3)
"""

import math

from src.lumen.camera.camera import Camera
from src.lumen.core.rotation import Quaternion
from src.lumen.core.vector import X_AXIS, Vector
from src.lumen.geometry.sphere import Sphere
from src.lumen.materials.material import IVORY, RED_RUBBER
from src.lumen.scene.lights import PointLight
from src.lumen.scene.scene import Scene

# Distance from the camera to its screen plane
DEMO_SCREEN_DISTANCE = 5.0


def create_demo_camera() -> Camera:
    """Create the demo camera: at the origin, local forward (+y) turned to -z."""
    return Camera(
        position=Vector(0.0, 0.0, 0.0),
        rotation=Quaternion.from_axis_angle(X_AXIS, -math.pi / 2.0),
        screen_distance=DEMO_SCREEN_DISTANCE,
    )


def create_demo_scene(inverse_square: bool = False) -> tuple[Scene, Camera]:
    """Create the demo scene and its camera.

    Args:
        inverse_square: Give every light inverse-square falloff. The classic
            image uses no falloff.

    Returns:
        A tuple (scene, camera).
    """
    scene = Scene()
    scene.add_object(Sphere(Vector(-3.0, 0.0, -16.0), 2.0, IVORY))
    scene.add_object(Sphere(Vector(-1.0, -1.5, -12.0), 2.0, RED_RUBBER))
    scene.add_object(Sphere(Vector(1.5, -0.5, -18.0), 3.0, RED_RUBBER))
    scene.add_object(Sphere(Vector(7.0, 5.0, -18.0), 4.0, IVORY))

    scene.add_light(PointLight(Vector(-20.0, 20.0, 20.0), 1.5, inverse_square))
    scene.add_light(PointLight(Vector(30.0, -50.0, -25.0), 1.8, inverse_square))
    scene.add_light(PointLight(Vector(30.0, -20.0, 30.0), 1.7, inverse_square))

    return scene, create_demo_camera()
