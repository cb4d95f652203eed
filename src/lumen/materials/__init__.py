"""Materials module for local shading parameters.

Components:
    material: Material (diffuse colour, specular exponent, albedo pair),
        classic presets and the kernel-side material registry

Every intersectable object carries exactly one Material; the shading
strategies in src.lumen.render.shading read it through the object's
material() query (Python) or by material id (Taichi kernels).
"""

from .material import (
    IVORY,
    MAX_MATERIALS,
    RED_RUBBER,
    Albedo,
    Material,
    add_material_record,
    clear_materials,
    get_material,
    get_material_count,
)

__all__ = [
    "Albedo",
    "Material",
    "IVORY",
    "RED_RUBBER",
    "MAX_MATERIALS",
    "add_material_record",
    "clear_materials",
    "get_material",
    "get_material_count",
]
