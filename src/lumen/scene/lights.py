"""Point light sources.

A point light has a position and a scalar intensity. Whether its
contribution falls off with the inverse square of the distance is a per-light
choice (`inverse_square`); the default is no falloff, so a light's diffuse
contribution depends only on the angle between the surface normal and the
light direction.

Light properties are mirrored into Taichi fields for the render kernel.
"""

from dataclasses import dataclass
from typing import Any

import taichi as ti

from src.lumen.core.config import read_mapping, read_number, read_numbers
from src.lumen.core.vector import Vector


@dataclass(frozen=True)
class PointLight:
    """An omnidirectional light at a point.

    Attributes:
        position: World-space position of the light.
        intensity: Scalar intensity multiplying both diffuse and specular terms.
        inverse_square: Divide the diffuse contribution by the squared
            distance from the light to the shaded point.
    """

    position: Vector
    intensity: float
    inverse_square: bool = False

    def to_config(self) -> dict[str, Any]:
        """Export the light as a plain dictionary."""
        return {
            "position": list(self.position.as_tuple()),
            "intensity": self.intensity,
            "inverse_square": self.inverse_square,
        }

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "PointLight":
        """Build a light from a dictionary produced by to_config().

        Raises:
            ValueError: If the entry is not an object, the position is not
                three numbers, or a scalar field has the wrong type.
        """
        config = read_mapping(config, "light")
        x, y, z = read_numbers(config.get("position", [0.0, 0.0, 0.0]), 3, "light position")
        inverse_square = config.get("inverse_square", False)
        if not isinstance(inverse_square, bool):
            raise ValueError(f"light inverse_square must be true or false, got {inverse_square!r}")
        return cls(
            position=Vector(x, y, z),
            intensity=read_number(config.get("intensity", 1.0), "light intensity"),
            inverse_square=inverse_square,
        )


# =============================================================================
# Light Field Storage (for kernel-side lookup)
# =============================================================================

# Maximum number of point lights in the scene
MAX_LIGHTS = 64

light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
light_inverse_square = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Ambient term added to the total diffuse intensity of every hit
ambient_intensity = ti.field(dtype=ti.f32, shape=())


def clear_lights() -> None:
    """Clear all lights and reset the ambient term to zero."""
    num_lights[None] = 0
    ambient_intensity[None] = 0.0


def set_ambient(ambient: float) -> None:
    """Set the ambient intensity used by the render kernel."""
    ambient_intensity[None] = ambient


def add_light_record(light: PointLight) -> int:
    """Add a point light to the light registry.

    Args:
        light: The light to store.

    Returns:
        The index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_positions[idx] = list(light.position.as_tuple())
    light_intensities[idx] = light.intensity
    light_inverse_square[idx] = 1 if light.inverse_square else 0
    num_lights[None] = idx + 1
    return idx


def get_light_count() -> int:
    """Get the number of lights in the registry."""
    return int(num_lights[None])
