"""Preview module for image output.

Components:
    export: PPM/PNG writers and a platform viewer launcher

Images are tone mapped on export: pixels brighter than 1 in any channel
are rescaled so the brightest channel is exactly 1, then every channel is
clamped to [0, 1] and truncated to 8 bits.

Example:
    >>> from src.lumen.preview import save_ppm, open_image
    >>> save_ppm(image, "out.ppm")
    >>> open_image("out.ppm")
"""

from src.lumen.preview.export import (
    compute_rmse,
    open_image,
    save_image,
    save_png,
    save_ppm,
)

__all__ = [
    "save_ppm",
    "save_png",
    "save_image",
    "open_image",
    "compute_rmse",
]
