"""Renderer for single-bounce primary-ray images.

For every pixel the renderer builds a camera ray, finds the nearest hit
among all scene objects and shades it with the selected strategy; pixels
with no hit keep the background colour. The render is a pure function of
(scene, camera, pixel), so pixels are independent.

Two paths implement the same pipeline:
    - render() runs a Taichi kernel whose outermost loop over
      ti.ndrange(height, width) is parallelised across threads (or the GPU).
      Each pixel reads only the uploaded scene fields and writes one slot
      of a preallocated colour buffer.
    - render_pixel() / render_reference() evaluate the pipeline in Python
      through the Intersectable and Shader interfaces. They accept any
      Intersectable implementation and serve as the reference the kernel
      is tested against.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lumen.render.renderer import Renderer, RenderSettings
    >>> from src.lumen.scene.presets import create_demo_scene
    >>> scene, camera = create_demo_scene()
    >>> renderer = Renderer(scene, camera, RenderSettings(width=320, height=240))
    >>> image = renderer.render()
    >>> image.to_uint8().shape
    (240, 320, 3)
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional

import taichi as ti

from src.lumen.camera.camera import Camera, get_ray, pixel_to_screen, setup_camera
from src.lumen.core.colour import Colour
from src.lumen.core.vector import vec3
from src.lumen.geometry.intersectable import Intersection
from src.lumen.render.image import Image
from src.lumen.render.shading import (
    Shader,
    ShadingMode,
    shade_distance,
    shade_lighting,
    shader_for_mode,
)
from src.lumen.scene.intersection import intersect_scene
from src.lumen.scene.scene import Scene

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 768

# World units per pixel on the camera's screen plane
DEFAULT_PIXEL_TO_WORLD = 0.008

DEFAULT_BACKGROUND = Colour(0.2, 0.7, 0.8)


@dataclass
class RenderSettings:
    """Output configuration for a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        background: Colour of pixels whose ray hits nothing.
        pixel_to_world: World units per pixel on the screen plane.
        shading: Shading strategy.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    background: Colour = field(default_factory=lambda: DEFAULT_BACKGROUND)
    pixel_to_world: float = DEFAULT_PIXEL_TO_WORLD
    shading: ShadingMode = ShadingMode.LIGHTING


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Colour buffer indexed [row, column]
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))
_background = ti.Vector.field(3, dtype=ti.f32, shape=())


def _check_dimensions(width: int, height: int) -> None:
    """Raise if dimensions are not positive or exceed the preallocated buffer."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.func
def shade_screen_position(x: ti.f32, y: ti.f32, mode: ti.i32) -> vec3:
    """Cast the camera ray through (x, y) and shade its nearest hit.

    Args:
        x: Horizontal screen-plane coordinate.
        y: Vertical screen-plane coordinate.
        mode: ShadingMode value.

    Returns:
        The unclamped colour, or the background colour on a miss.
    """
    origin, direction = get_ray(x, y)
    rec = intersect_scene(origin, direction)

    colour = _background[None]
    if rec.hit == 1:
        if mode == int(ShadingMode.DISTANCE):
            colour = shade_distance(rec.distance, rec.shape_index)
        else:
            colour = shade_lighting(rec.point, rec.normal, direction, rec.shape_index)
    return colour


@ti.func
def _screen_coordinate(index: ti.i32, size: ti.i32, pixel_to_world: ti.f32) -> ti.f32:
    """Kernel twin of pixel_to_screen() for one axis."""
    return ti.cast(index - size // 2, ti.f32) * pixel_to_world


@ti.kernel
def _render_kernel(width: ti.i32, height: ti.i32, pixel_to_world: ti.f32, mode: ti.i32):
    """Shade every pixel of a width x height image into the colour buffer."""
    for j, i in ti.ndrange(height, width):
        x = _screen_coordinate(i, width, pixel_to_world)
        y = _screen_coordinate(j, height, pixel_to_world)
        _color_buffer[j, i] = shade_screen_position(x, y, mode)


@ti.kernel
def _render_single_pixel(
    i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32, pixel_to_world: ti.f32, mode: ti.i32
) -> vec3:
    """Shade a single pixel. Used for testing and debugging."""
    x = _screen_coordinate(i, width, pixel_to_world)
    y = _screen_coordinate(j, height, pixel_to_world)
    return shade_screen_position(x, y, mode)


# =============================================================================
# Public Rendering API
# =============================================================================


class Renderer:
    """Renders a scene as seen by a camera.

    Attributes:
        scene: The scene to render.
        camera: The viewing camera.
        settings: Output dimensions, background, scale and shading mode.
    """

    def __init__(
        self,
        scene: Scene,
        camera: Camera,
        settings: Optional[RenderSettings] = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: The scene to render.
            camera: The viewing camera.
            settings: Render settings (defaults to RenderSettings()).

        Raises:
            ValueError: If the dimensions are invalid.
        """
        self.scene = scene
        self.camera = camera
        self.settings = settings if settings is not None else RenderSettings()
        _check_dimensions(self.settings.width, self.settings.height)

    @property
    def shader(self) -> Shader:
        """The Python shader for the configured shading mode."""
        return shader_for_mode(self.settings.shading)

    # -------------------------------------------------------------------------
    # Python reference path
    # -------------------------------------------------------------------------

    def cast_pixel(self, i: int, j: int) -> list[Intersection]:
        """Collect every intersection of pixel (i, j)'s ray, nearest first."""
        x, y = pixel_to_screen(
            i, j, self.settings.width, self.settings.height, self.settings.pixel_to_world
        )
        return self.scene.cast(self.camera.ray_from_position(x, y))

    def render_pixel(self, i: int, j: int) -> Colour:
        """Compute the unclamped colour of pixel (i, j) in Python.

        Args:
            i: Column index.
            j: Row index.

        Returns:
            The shaded colour of the nearest hit, or the background colour.
        """
        intersections = self.cast_pixel(i, j)
        if not intersections:
            return self.settings.background
        return self.shader.shade(intersections[0], self.scene, self.camera)

    def render_reference(self) -> Image:
        """Render the whole image in Python, one pixel at a time.

        Much slower than render(); intended for small images and for
        checking the kernel.
        """
        image = Image(self.settings.width, self.settings.height, self.settings.background)
        shader = self.shader
        for j in range(image.height):
            for i in range(image.width):
                intersections = self.cast_pixel(i, j)
                if intersections:
                    image.set_pixel(i, j, shader.shade(intersections[0], self.scene, self.camera))
        return image

    # -------------------------------------------------------------------------
    # Taichi path
    # -------------------------------------------------------------------------

    def prepare(self) -> None:
        """Upload scene, camera and background into the kernel-side fields."""
        self.scene.upload()
        setup_camera(self.camera)
        _background[None] = list(self.settings.background.as_rgb())

    def render(self) -> Image:
        """Render the whole image with the parallel Taichi kernel.

        Returns:
            A fully populated Image with unclamped linear colours.
        """
        width, height = self.settings.width, self.settings.height
        logger.info(
            "Rendering %dx%d image (%s shading, %d objects, %d lights)",
            width,
            height,
            self.settings.shading.name.lower(),
            len(self.scene.objects),
            len(self.scene.lights),
        )
        start = time.perf_counter()

        self.prepare()
        _render_kernel(width, height, self.settings.pixel_to_world, int(self.settings.shading))
        pixels = _color_buffer.to_numpy()[:height, :width, :]

        logger.debug("Rendered in %.3fs", time.perf_counter() - start)
        return Image.from_array(pixels)

    def render_pixel_kernel(self, i: int, j: int) -> Colour:
        """Compute the colour of pixel (i, j) with the kernel code path.

        Uploads the scene on every call; use render() for whole images.
        """
        self.prepare()
        colour = _render_single_pixel(
            i,
            j,
            self.settings.width,
            self.settings.height,
            self.settings.pixel_to_world,
            int(self.settings.shading),
        )
        return Colour(float(colour[0]), float(colour[1]), float(colour[2]))

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.settings.width}, height={self.settings.height}, "
            f"shading={self.settings.shading.name.lower()}, scene={self.scene!r})"
        )
