"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear kernel-side scene storage before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the fields are created after Taichi is initialized
    from src.lumen.scene.scene import clear_scene_storage

    clear_scene_storage()
    yield
    clear_scene_storage()


@pytest.fixture
def unit_sphere_scene():
    """A unit sphere at the origin lit by one light, viewed from (0, 0, 5).

    Returns:
        A tuple (scene, camera, sphere).
    """
    import math

    from src.lumen.camera.camera import Camera
    from src.lumen.core.rotation import Quaternion
    from src.lumen.core.vector import X_AXIS, Vector
    from src.lumen.geometry.sphere import Sphere
    from src.lumen.materials.material import IVORY
    from src.lumen.scene.lights import PointLight
    from src.lumen.scene.scene import Scene

    sphere = Sphere.unit(IVORY)
    scene = Scene(objects=[sphere], lights=[PointLight(Vector(0.0, 0.0, 10.0), 1.0)])
    camera = Camera(
        position=Vector(0.0, 0.0, 5.0),
        rotation=Quaternion.from_axis_angle(X_AXIS, -math.pi / 2.0),
        screen_distance=1.0,
    )
    return scene, camera, sphere
