"""Shading strategies turning the nearest hit into a pixel colour.

Two strategies share one interface (Shader.shade):

LightingShader - local illumination from every point light:
    l_k = normalize(light_k - hit)
    diffuse  = ambient + sum_k max(0, n . l_k) * I_k        [/ |light_k - hit|^2]
    specular = sum_k min(max(0, reflect(l_k, n) . d)^exponent, S_max) * I_k
    colour   = diffuse_colour * diffuse * albedo.diffuse
             + white * specular * albedo.specular
    where d is the camera ray direction exactly as the camera generated it
    (not normalised, so its length grows with the screen distance and with
    the distance from the image centre). The bracketed falloff applies only
    to lights with inverse_square set. S_max is MAX_SPECULAR_TERM, which
    keeps the single-precision kernel finite. A light sitting exactly on the
    hit point has no direction and contributes nothing.

DistanceShader - depth visualisation ignoring lights:
    grey = map_range(distance, [d_c - e/2, d_c + e/2], [1, 0])
    where d_c is the camera-to-object-centre distance and e the object extent,
    so nearer surface points are brighter.

Each strategy has a Taichi twin (shade_lighting / shade_distance) reading the
uploaded scene fields; ShadingMode selects between them inside the kernel.
"""

import math
from abc import ABC, abstractmethod
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.lumen.camera.camera import Camera, get_camera_position
from src.lumen.core.colour import WHITE, Colour
from src.lumen.core.vector import reflect_vec3, vec3
from src.lumen.geometry.intersectable import Intersection
from src.lumen.materials.material import get_material
from src.lumen.scene.intersection import get_shape_bounds, get_shape_material_id
from src.lumen.scene.lights import (
    ambient_intensity,
    light_intensities,
    light_inverse_square,
    light_positions,
    num_lights,
)
from src.lumen.scene.scene import Scene


# Upper bound on one light's specular term (well inside f32 range)
MAX_SPECULAR_TERM = 1e30
_LOG_MAX_SPECULAR_TERM = math.log(MAX_SPECULAR_TERM)


class ShadingMode(IntEnum):
    """Enumeration of shading strategies.

    Used for shading dispatch in the render kernel.
    """

    LIGHTING = 0
    DISTANCE = 1


def specular_power(value: float, exponent: float) -> float:
    """Raise a specular dot product to its exponent, saturating at MAX_SPECULAR_TERM."""
    if value > 1.0 and exponent * math.log(value) >= _LOG_MAX_SPECULAR_TERM:
        return MAX_SPECULAR_TERM
    return value**exponent


def map_range(
    value: float, from_range: tuple[float, float], to_range: tuple[float, float]
) -> float:
    """Linearly remap value from one interval onto another (unclamped)."""
    from_start, from_end = from_range
    to_start, to_end = to_range
    return to_start + (value - from_start) * (to_end - to_start) / (from_end - from_start)


class Shader(ABC):
    """Interface for turning a ray hit into a colour."""

    mode: ShadingMode

    @abstractmethod
    def shade(self, hit: Intersection, scene: Scene, camera: Camera) -> Colour:
        """Compute the colour of the nearest hit.

        Args:
            hit: The nearest intersection along the camera ray.
            scene: The scene being rendered (lights, ambient term).
            camera: The camera that cast the ray.

        Returns:
            The unclamped pixel colour.
        """


class LightingShader(Shader):
    """Diffuse + specular response of the hit material to every point light."""

    mode = ShadingMode.LIGHTING

    def shade(self, hit: Intersection, scene: Scene, camera: Camera) -> Colour:
        material = hit.object.material()

        diffuse_intensity = scene.ambient
        specular_intensity = 0.0
        for light in scene.lights:
            to_light = light.position - hit.position
            distance_squared = to_light.length_squared()
            if distance_squared == 0.0:
                continue
            light_direction = to_light.normalise()

            diffuse = max(0.0, light_direction.dot(hit.normal)) * light.intensity
            if light.inverse_square:
                diffuse /= distance_squared
            diffuse_intensity += diffuse

            specular = max(0.0, light_direction.reflect(hit.normal).dot(hit.ray.direction))
            specular_intensity += (
                specular_power(specular, material.specular_exponent) * light.intensity
            )

        return (
            material.diffuse_colour * diffuse_intensity * material.albedo.diffuse
            + WHITE * specular_intensity * material.albedo.specular
        )


class DistanceShader(Shader):
    """Grey level from hit distance relative to the object's depth span."""

    mode = ShadingMode.DISTANCE

    def shade(self, hit: Intersection, scene: Scene, camera: Camera) -> Colour:
        centre_distance = (camera.position - hit.object.centre()).length()
        half_extent = hit.object.extent() / 2.0
        grey = map_range(
            hit.distance,
            (centre_distance - half_extent, centre_distance + half_extent),
            (1.0, 0.0),
        )
        return Colour.grey(grey)


def shader_for_mode(mode: ShadingMode) -> Shader:
    """Create the shader implementing a shading mode.

    Raises:
        ValueError: If the mode is unknown.
    """
    if mode == ShadingMode.LIGHTING:
        return LightingShader()
    if mode == ShadingMode.DISTANCE:
        return DistanceShader()
    raise ValueError(f"Unknown shading mode: {mode!r}")


# =============================================================================
# Taichi-side shading
# =============================================================================


@ti.func
def shade_lighting(point: vec3, normal: vec3, direction: vec3, shape_index: ti.i32) -> vec3:
    """Kernel twin of LightingShader.shade().

    Args:
        point: The hit point.
        normal: Outward unit normal at the hit point.
        direction: The camera ray direction, not normalised.
        shape_index: Index of the hit shape in the scene storage.

    Returns:
        The unclamped RGB colour.
    """
    diffuse_colour, specular_exponent, albedo = get_material(get_shape_material_id(shape_index))
    diffuse_intensity = ambient_intensity[None]
    specular_intensity = 0.0
    for k in range(num_lights[None]):
        to_light = light_positions[k] - point
        distance_squared = tm.dot(to_light, to_light)
        if distance_squared > 0.0:
            light_direction = to_light / ti.sqrt(distance_squared)

            diffuse = tm.max(0.0, tm.dot(light_direction, normal)) * light_intensities[k]
            if light_inverse_square[k] == 1:
                diffuse /= distance_squared
            diffuse_intensity += diffuse

            specular = tm.max(0.0, tm.dot(reflect_vec3(light_direction, normal), direction))
            specular_term = tm.min(specular**specular_exponent, MAX_SPECULAR_TERM)
            specular_intensity += specular_term * light_intensities[k]

    white = vec3(1.0, 1.0, 1.0)
    return diffuse_colour * diffuse_intensity * albedo[1] + white * specular_intensity * albedo[0]


@ti.func
def shade_distance(distance: ti.f32, shape_index: ti.i32) -> vec3:
    """Kernel twin of DistanceShader.shade().

    Args:
        distance: Distance from the camera to the hit point.
        shape_index: Index of the hit shape in the scene storage.

    Returns:
        A grey RGB colour.
    """
    centre, extent = get_shape_bounds(shape_index)
    centre_distance = tm.length(get_camera_position() - centre)
    near = centre_distance - 0.5 * extent
    far = centre_distance + 0.5 * extent
    grey = 1.0 + (distance - near) * (0.0 - 1.0) / (far - near)
    return vec3(grey, grey, grey)
