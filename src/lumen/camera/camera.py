"""Camera model mapping screen-plane coordinates to world-space rays.

The camera sits at `position` and is oriented by a unit quaternion. In the
camera's local frame the forward axis is +y and the screen plane is spanned
by local x and z, at `screen_distance` along the forward axis. A
screen-plane coordinate (x, y) therefore becomes the local direction
(x, screen_distance, y), which the rotation carries into world space:

    direction = rotation * (x, screen_distance, y)

The resulting direction is generally not unit length.

Pixel coordinates are turned into screen-plane coordinates by centring them
on the image and scaling by a pixel-to-world factor (see pixel_to_screen).

Example:
    >>> import math
    >>> from src.lumen.camera.camera import Camera
    >>> from src.lumen.core.rotation import Quaternion
    >>> from src.lumen.core.vector import Vector, X_AXIS
    >>> camera = Camera(
    ...     position=Vector(0.0, 0.0, 5.0),
    ...     rotation=Quaternion.from_axis_angle(X_AXIS, -math.pi / 2),
    ...     screen_distance=1.0,
    ... )
    >>> camera.ray_from_position(0.0, 0.0).direction == Vector(0.0, 0.0, -1.0)
    True
"""

from dataclasses import dataclass

import taichi as ti

from src.lumen.core.ray import Ray
from src.lumen.core.rotation import Quaternion, rotate_vec3
from src.lumen.core.vector import Vector, vec3

# Forward axis of the camera's local frame
LOCAL_FORWARD = Vector(0.0, 1.0, 0.0)


@dataclass(frozen=True)
class Camera:
    """A camera with a position, orientation and screen distance.

    Attributes:
        position: Camera position in world space (origin of every ray).
        rotation: Unit quaternion taking the local frame to world space.
        screen_distance: Offset of the screen plane along local forward.
    """

    position: Vector
    rotation: Quaternion
    screen_distance: float

    @classmethod
    def looking_at(
        cls,
        position: Vector,
        target: Vector,
        up: Vector,
        screen_distance: float,
    ) -> "Camera":
        """Create a camera at `position` whose forward axis points at `target`.

        Uses the minimal rotation from local forward onto the view direction,
        so roll about the view direction is whatever that rotation implies.

        Args:
            position: Camera position.
            target: Point to look at.
            up: Fallback rotation axis when looking straight down local -y.
            screen_distance: Offset of the screen plane along the view direction.

        Raises:
            DegenerateGeometryError: If target coincides with position.
        """
        rotation = Quaternion.rotate(LOCAL_FORWARD, target - position, up)
        return cls(position, rotation, screen_distance)

    def ray_from_position(self, x: float, y: float) -> Ray:
        """Generate the ray through screen-plane coordinate (x, y).

        Args:
            x: Horizontal offset on the screen plane (local x).
            y: Vertical offset on the screen plane (local z).

        Returns:
            A Ray starting at the camera position. Its direction is the
            rotated local vector (x, screen_distance, y) and is not normalized.
        """
        return Ray(self.position, self.rotation * Vector(x, self.screen_distance, y))


def pixel_to_screen(
    i: int, j: int, width: int, height: int, pixel_to_world: float
) -> tuple[float, float]:
    """Convert a pixel index to a screen-plane coordinate.

    Pixels are centred on the image (integer halving of the dimensions) and
    scaled by pixel_to_world. Row index j grows with local screen y.

    Args:
        i: Column index (0 = first column).
        j: Row index (0 = first row of the buffer).
        width: Image width in pixels.
        height: Image height in pixels.
        pixel_to_world: World units per pixel on the screen plane.

    Returns:
        The (x, y) screen-plane coordinate.
    """
    return (i - width // 2) * pixel_to_world, (j - height // 2) * pixel_to_world


# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

_camera_position = ti.Vector.field(3, dtype=ti.f32, shape=())
# Rotation packed as (w, x, y, z)
_camera_rotation = ti.Vector.field(4, dtype=ti.f32, shape=())
_camera_screen_distance = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Copy a camera into the Taichi fields read by get_ray().

    Note:
        This function writes to Taichi fields and should be called from
        Python (not from within a Taichi kernel).
    """
    _camera_position[None] = list(camera.position.as_tuple())
    _camera_rotation[None] = list(camera.rotation.as_tuple())
    _camera_screen_distance[None] = camera.screen_distance


@ti.func
def get_ray(x: ti.f32, y: ti.f32):
    """Generate the ray through screen-plane coordinate (x, y) in a kernel.

    Args:
        x: Horizontal offset on the screen plane.
        y: Vertical offset on the screen plane.

    Returns:
        A tuple (origin, direction) matching Camera.ray_from_position().
    """
    local = vec3(x, _camera_screen_distance[None], y)
    return _camera_position[None], rotate_vec3(_camera_rotation[None], local)


@ti.func
def get_camera_position() -> vec3:
    """Get the camera position in world space."""
    return _camera_position[None]


def get_camera_info() -> dict[str, tuple[float, ...]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with position, rotation (w, x, y, z) and screen_distance.
    """
    position = _camera_position[None]
    rotation = _camera_rotation[None]
    return {
        "position": tuple(float(position[k]) for k in range(3)),
        "rotation": tuple(float(rotation[k]) for k in range(4)),
        "screen_distance": (float(_camera_screen_distance[None]),),
    }
