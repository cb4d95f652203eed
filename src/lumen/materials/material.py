"""Surface material for local (diffuse + specular) shading.

A material describes how a surface responds to point lights:

    colour = diffuse_colour * diffuse_intensity * albedo.diffuse
           + white * specular_intensity * albedo.specular

where the specular intensity is a Phong lobe raised to `specular_exponent`.
The albedo pair splits the surface response between the specular highlight
and the diffuse body colour; the two weights need not sum to 1.

Material properties are mirrored into Taichi fields so the render kernel can
look them up by material id.

Example:
    >>> from src.lumen.materials.material import Albedo, Material
    >>> from src.lumen.core.colour import Colour
    >>> ivory = Material(Colour(0.4, 0.4, 0.3), specular_exponent=50.0,
    ...                  albedo=Albedo(specular=0.3, diffuse=0.6))
"""

from dataclasses import dataclass, field
from typing import Any

import taichi as ti

from src.lumen.core.colour import Colour
from src.lumen.core.config import read_mapping, read_number, read_numbers


@dataclass(frozen=True)
class Albedo:
    """Weights splitting surface response between specular and diffuse terms.

    Attributes:
        specular: Weight of the white specular highlight.
        diffuse: Weight of the diffuse body colour.
    """

    specular: float
    diffuse: float


@dataclass(frozen=True)
class Material:
    """Reflectance parameters of a surface.

    Attributes:
        diffuse_colour: Body colour lit by the diffuse term.
        specular_exponent: Shininess of the specular lobe (higher is tighter).
        albedo: Specular/diffuse weighting.
    """

    diffuse_colour: Colour = field(default_factory=lambda: Colour(0.0, 0.0, 0.0))
    specular_exponent: float = 0.0
    albedo: Albedo = field(default_factory=lambda: Albedo(specular=0.0, diffuse=1.0))

    def to_config(self) -> dict[str, Any]:
        """Export the material as a plain dictionary."""
        return {
            "diffuse_colour": list(self.diffuse_colour.as_rgb()),
            "specular_exponent": self.specular_exponent,
            "albedo": [self.albedo.specular, self.albedo.diffuse],
        }

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Material":
        """Build a material from a dictionary produced by to_config().

        Raises:
            ValueError: If the entry is not an object, the colour is not
                three numbers, the albedo is not a (specular, diffuse) pair,
                or the exponent is not a number.
        """
        config = read_mapping(config, "material")
        red, green, blue = read_numbers(
            config.get("diffuse_colour", [0.0, 0.0, 0.0]), 3, "material diffuse_colour"
        )
        specular, diffuse = read_numbers(config.get("albedo", [0.0, 1.0]), 2, "material albedo")
        return cls(
            diffuse_colour=Colour(red, green, blue),
            specular_exponent=read_number(
                config.get("specular_exponent", 0.0), "material specular_exponent"
            ),
            albedo=Albedo(specular=specular, diffuse=diffuse),
        )


# Presets from the classic demo scene
IVORY = Material(Colour(0.4, 0.4, 0.3), specular_exponent=50.0, albedo=Albedo(0.3, 0.6))
RED_RUBBER = Material(Colour(0.3, 0.1, 0.1), specular_exponent=10.0, albedo=Albedo(0.1, 0.9))


# =============================================================================
# Material Field Storage (for kernel-side lookup)
# =============================================================================

# Maximum number of materials in the scene
MAX_MATERIALS = 1024

material_diffuse_colours = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_specular_exponents = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
# (specular weight, diffuse weight)
material_albedos = ti.Vector.field(2, dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials from the registry.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material_record(material: Material) -> int:
    """Add a material to the registry.

    Args:
        material: The material to store.

    Returns:
        The material id (index into the material fields).

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
    """
    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")
    material_diffuse_colours[idx] = list(material.diffuse_colour.as_rgb())
    material_specular_exponents[idx] = material.specular_exponent
    material_albedos[idx] = [material.albedo.specular, material.albedo.diffuse]
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the registry."""
    return int(num_materials[None])


@ti.func
def get_material(material_id: ti.i32):
    """Look up a material by id inside a Taichi kernel.

    Args:
        material_id: Index returned by add_material_record().

    Returns:
        A tuple (diffuse_colour, specular_exponent, albedo) where albedo is
        a vec2 (specular weight, diffuse weight).
    """
    return (
        material_diffuse_colours[material_id],
        material_specular_exponents[material_id],
        material_albedos[material_id],
    )
