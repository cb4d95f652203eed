"""Scene-level shape storage and nearest-hit queries for Taichi kernels.

This module mirrors the scene's intersectable objects into Taichi fields and
provides the kernel-side query that tests a ray against every stored shape
and keeps the nearest hit.

Shapes are stored in a Structure-of-Arrays layout. Each record holds the
shape kind (see ShapeKind), its centre, its extent and the id of its
material. A sphere's radius is half its extent.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.scene.intersection import add_shape_record, clear_shapes
    >>> from src.lumen.geometry.intersectable import ShapeKind
    >>> clear_shapes()
    >>> add_shape_record(ShapeKind.SPHERE, (0.0, 0.0, -1.0), 1.0, material_id=0)
    0
    >>> # Use intersect_scene within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.lumen.geometry.intersectable import ShapeKind
from src.lumen.geometry.sphere import hit_sphere, make_miss_record

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum number of objects supported in the scene
MAX_OBJECTS = 1024

shape_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
shape_centres = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
shape_extents = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
shape_material_ids = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
num_shapes = ti.field(dtype=ti.i32, shape=())


def clear_shapes() -> None:
    """Clear all shapes from the scene storage.

    Resets the shape count to zero. The actual field data is not cleared
    but will be overwritten when new shapes are added.
    """
    num_shapes[None] = 0


def add_shape_record(
    kind: ShapeKind,
    centre: tuple[float, float, float],
    extent: float,
    material_id: int = 0,
) -> int:
    """Add a shape to the scene storage.

    Args:
        kind: The shape kind used for kernel dispatch.
        centre: The centre point of the shape.
        extent: The characteristic size of the shape (diameter for spheres).
        material_id: The material id to associate with this shape.

    Returns:
        The index of the added shape.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
    """
    idx = num_shapes[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")
    shape_kinds[idx] = int(kind)
    shape_centres[idx] = [centre[0], centre[1], centre[2]]
    shape_extents[idx] = extent
    shape_material_ids[idx] = material_id
    num_shapes[None] = idx + 1
    return idx


def get_shape_count() -> int:
    """Get the number of shapes in the scene storage."""
    return int(num_shapes[None])


@ti.func
def get_shape_material_id(shape_index: ti.i32) -> ti.i32:
    """Get the material id of a stored shape."""
    return shape_material_ids[shape_index]


@ti.func
def get_shape_bounds(shape_index: ti.i32):
    """Get the centre and extent of a stored shape.

    Returns:
        A tuple (centre, extent).
    """
    return shape_centres[shape_index], shape_extents[shape_index]


@ti.dataclass
class SceneHitRecord:
    """Nearest hit of a ray on the stored scene.

    Attributes:
        hit: 1 if any shape was hit, else 0.
        distance: Euclidean distance from the ray origin to the hit point.
        point: The hit point.
        normal: Outward unit normal at the hit point.
        shape_index: Index of the hit shape in the scene storage (-1 on a miss).
    """

    hit: ti.i32
    distance: ti.f32
    point: vec3
    normal: vec3
    shape_index: ti.i32


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Test a ray against every stored shape and keep the nearest hit.

    Equivalent to gathering every intersection from every object, sorting
    by distance and taking the first.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.

    Returns:
        A SceneHitRecord for the closest intersection, or a miss record
        (hit 0, shape_index -1) if nothing was hit.
    """
    result = SceneHitRecord(
        hit=0,
        distance=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        shape_index=-1,
    )

    for i in range(num_shapes[None]):
        rec = make_miss_record()
        if shape_kinds[i] == int(ShapeKind.SPHERE):
            rec = hit_sphere(ray_origin, ray_direction, shape_centres[i], 0.5 * shape_extents[i])

        if rec.hit == 1 and (result.hit == 0 or rec.distance < result.distance):
            result = SceneHitRecord(
                hit=1,
                distance=rec.distance,
                point=rec.point,
                normal=rec.normal,
                shape_index=i,
            )

    return result
