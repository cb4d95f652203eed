"""Camera module for view and ray generation.

Components:
    camera: Position + unit quaternion + screen distance camera model

Camera responsibilities:
    - Transform screen-plane (x, y) coordinates to world-space rays
    - Map pixel indices onto the screen plane (centred, scaled)
    - Support look-at positioning through minimal-arc rotations

Screen coordinates are offsets on the camera's local image plane:
    x: local x axis
    y: local z axis
    the plane sits at screen_distance along local forward (+y)

Ray generation inside kernels reads the camera from Taichi fields written
by setup_camera().
"""

from .camera import (
    LOCAL_FORWARD,
    Camera,
    get_camera_info,
    get_camera_position,
    get_ray,
    pixel_to_screen,
    setup_camera,
)

__all__ = [
    "Camera",
    "LOCAL_FORWARD",
    "pixel_to_screen",
    "setup_camera",
    "get_ray",
    "get_camera_position",
    "get_camera_info",
]
