"""Render module turning a scene and camera into an image.

Components:
    shading: Lighting and distance shaders (Python and kernel forms)
    image: Row-major linear colour buffer with tone-mapped 8-bit export
    renderer: Per-pixel reference path and the parallel Taichi kernel
"""

from .image import Image
from .renderer import (
    DEFAULT_BACKGROUND,
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    Renderer,
    RenderSettings,
)
from .shading import (
    DistanceShader,
    LightingShader,
    Shader,
    ShadingMode,
    map_range,
    shader_for_mode,
)

__all__ = [
    "Image",
    # Renderer
    "Renderer",
    "RenderSettings",
    "DEFAULT_BACKGROUND",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
    # Shading
    "Shader",
    "ShadingMode",
    "LightingShader",
    "DistanceShader",
    "map_range",
    "shader_for_mode",
]
