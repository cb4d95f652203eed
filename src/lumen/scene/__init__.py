"""Scene module for scene management and kernel-side scene storage.

This module handles scene representation and ray-scene queries:

Components:
    scene: Scene container (objects, lights, ambient), ray casting, config
    lights: Point lights with per-light falloff policy
    intersection: Kernel-side shape storage and nearest-hit query
    presets: Demo scene with four spheres and three lights

Scene data is organized for efficient kernel access:
    - Structure-of-Arrays layout for shape data
    - Material records shared between objects using the same Material
    - Light records with per-light inverse-square flags
"""

from .intersection import (
    MAX_OBJECTS,
    SceneHitRecord,
    add_shape_record,
    clear_shapes,
    get_shape_bounds,
    get_shape_count,
    get_shape_material_id,
    intersect_scene,
)
from .lights import (
    MAX_LIGHTS,
    PointLight,
    add_light_record,
    clear_lights,
    get_light_count,
    set_ambient,
)
from .presets import create_demo_camera, create_demo_scene
from .scene import Scene, SceneConfig, clear_scene_storage

__all__ = [
    # Scene container
    "Scene",
    "SceneConfig",
    "clear_scene_storage",
    # Lights
    "PointLight",
    "MAX_LIGHTS",
    "add_light_record",
    "clear_lights",
    "get_light_count",
    "set_ambient",
    # Shape storage
    "MAX_OBJECTS",
    "SceneHitRecord",
    "add_shape_record",
    "clear_shapes",
    "get_shape_count",
    "get_shape_bounds",
    "get_shape_material_id",
    "intersect_scene",
    # Presets
    "create_demo_scene",
    "create_demo_camera",
]
