"""Scene container coordinating objects, materials and lights.

The Scene is the Python-side source of truth for what is rendered: an
ordered collection of intersectable objects, a collection of point lights
and an ambient intensity. It answers ray queries directly for the reference
renderer and writes itself into the Taichi fields used by the render kernel
on upload().

Example:
    >>> from src.lumen.scene.scene import Scene
    >>> from src.lumen.scene.lights import PointLight
    >>> from src.lumen.geometry.sphere import Sphere
    >>> from src.lumen.materials.material import IVORY
    >>> from src.lumen.core.vector import Vector
    >>> scene = Scene()
    >>> scene.add_object(Sphere(Vector(0, 0, -3), 1.0, IVORY))
    >>> scene.add_light(PointLight(Vector(-5, 5, 5), 1.5))
    >>> from src.lumen.core.ray import Ray
    >>> scene.nearest(Ray(Vector(0, 0, 0), Vector(0, 0, -1))).distance
    2.0
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from src.lumen.core.config import read_mapping, read_number, read_numbers, read_string
from src.lumen.core.ray import Ray
from src.lumen.core.vector import Vector
from src.lumen.geometry.intersectable import Intersectable, Intersection, ShapeKind
from src.lumen.geometry.sphere import Sphere
from src.lumen.materials.material import Material, add_material_record, clear_materials
from src.lumen.scene.intersection import add_shape_record, clear_shapes
from src.lumen.scene.lights import PointLight, add_light_record, clear_lights, set_ambient

logger = logging.getLogger(__name__)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        objects: List of object configurations ({"type": "sphere", ...}).
        lights: List of point light configurations.
        ambient: Ambient intensity added to every hit's diffuse term.
    """

    objects: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    ambient: float = 0.0


def clear_scene_storage() -> None:
    """Clear every kernel-side registry (shapes, materials, lights)."""
    clear_shapes()
    clear_materials()
    clear_lights()


class Scene:
    """An ordered collection of intersectable objects and point lights.

    Attributes:
        objects: The intersectable objects, in insertion order.
        lights: The point lights.
        ambient: Ambient intensity added to the total diffuse intensity.
    """

    def __init__(
        self,
        objects: Optional[list[Intersectable]] = None,
        lights: Optional[list[PointLight]] = None,
        ambient: float = 0.0,
    ) -> None:
        """Initialize a scene.

        Args:
            objects: Initial objects (copied).
            lights: Initial lights (copied).
            ambient: Ambient intensity (default 0, no ambient term).
        """
        self.objects: list[Intersectable] = list(objects or [])
        self.lights: list[PointLight] = list(lights or [])
        self.ambient = ambient

    def add_object(self, obj: Intersectable) -> None:
        """Add an intersectable object to the scene."""
        self.objects.append(obj)

    def add_light(self, light: PointLight) -> None:
        """Add a point light to the scene."""
        self.lights.append(light)

    # -------------------------------------------------------------------------
    # Ray queries
    # -------------------------------------------------------------------------

    def cast(self, ray: Ray) -> list[Intersection]:
        """Collect the intersections of a ray with every object, nearest first."""
        intersections: list[Intersection] = []
        for obj in self.objects:
            intersections.extend(obj.intersections(ray))
        intersections.sort()
        return intersections

    def nearest(self, ray: Ray) -> Optional[Intersection]:
        """Return the nearest intersection of a ray, or None on a miss."""
        intersections = self.cast(ray)
        return intersections[0] if intersections else None

    # -------------------------------------------------------------------------
    # Kernel-side storage
    # -------------------------------------------------------------------------

    def upload(self) -> None:
        """Write the scene into the Taichi fields read by the render kernel.

        Clears any previously uploaded scene first. Objects sharing a
        Material instance share one material record.

        Raises:
            RuntimeError: If a registry capacity is exceeded.
        """
        clear_scene_storage()

        material_ids: dict[int, int] = {}
        for obj in self.objects:
            material = obj.material()
            material_id = material_ids.get(id(material))
            if material_id is None:
                material_id = add_material_record(material)
                material_ids[id(material)] = material_id
            add_shape_record(obj.kind, obj.centre().as_tuple(), obj.extent(), material_id)

        for light in self.lights:
            add_light_record(light)
        set_ambient(self.ambient)

        logger.debug(
            "Uploaded scene: %d objects, %d materials, %d lights",
            len(self.objects),
            len(material_ids),
            len(self.lights),
        )

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Returns:
            A SceneConfig holding only plain lists, dicts and numbers.

        Raises:
            ValueError: If the scene holds a shape kind with no config form.
        """
        config = SceneConfig(ambient=self.ambient)
        for obj in self.objects:
            if obj.kind == ShapeKind.SPHERE:
                config.objects.append(
                    {
                        "type": "sphere",
                        "centre": list(obj.centre().as_tuple()),
                        "radius": obj.extent() / 2.0,
                        "material": obj.material().to_config(),
                    }
                )
            else:
                raise ValueError(f"Cannot serialise shape kind: {obj.kind!r}")
        config.lights = [light.to_config() for light in self.lights]
        return config

    @classmethod
    def from_config(cls, config: SceneConfig) -> "Scene":
        """Load a scene from a configuration object.

        Args:
            config: The scene configuration to load.

        Returns:
            A new Scene.

        Raises:
            ValueError: If the configuration contains invalid data.
        """
        scene = cls(ambient=read_number(config.ambient, "ambient"))
        if not isinstance(config.objects, list):
            raise ValueError(f"objects must be a list, got {config.objects!r}")
        if not isinstance(config.lights, list):
            raise ValueError(f"lights must be a list, got {config.lights!r}")

        for obj_config in config.objects:
            obj_config = read_mapping(obj_config, "object")
            obj_type = read_string(obj_config.get("type", ""), "object type").lower()
            if obj_type != "sphere":
                raise ValueError(f"Unknown object type: {obj_type}")
            x, y, z = read_numbers(obj_config.get("centre", [0.0, 0.0, 0.0]), 3, "sphere centre")
            scene.add_object(
                Sphere(
                    Vector(x, y, z),
                    read_number(obj_config.get("radius", 1.0), "sphere radius"),
                    Material.from_config(obj_config.get("material", {})),
                )
            )
        for light_config in config.lights:
            scene.add_light(PointLight.from_config(light_config))
        return scene

    def __repr__(self) -> str:
        """Return a string representation of the scene contents."""
        return (
            f"Scene(objects={len(self.objects)}, lights={len(self.lights)}, "
            f"ambient={self.ambient})"
        )
