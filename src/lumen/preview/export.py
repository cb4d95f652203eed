"""Image export utilities for rendered images.

This module writes Image buffers to disk after the output tone map
(over-bright pixels rescaled by their brightest channel, clamped to [0, 1]
and truncated to 8 bits).

Supported formats:
    - PPM (binary P6, single-line header)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.lumen.preview.export import save_ppm
    >>> from src.lumen.render.renderer import Renderer
    >>>
    >>> image = Renderer(scene, camera).render()
    >>> save_ppm(image, "out.ppm")
"""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Union

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.lumen.render.image import Image

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _to_pil(image: Image) -> PILImage.Image:
    return PILImage.fromarray(image.to_uint8())


def save_ppm(image: Image, filepath: PathLike) -> None:
    """Save the image as a binary PPM (P6, maxval 255) file.

    The header is the single line "P6 <width> <height> 255". Pixels follow
    row by row, top row first, as R, G, B bytes.

    Args:
        image: The rendered image.
        filepath: Output file path.

    Raises:
        OSError: If the file cannot be written.
    """
    header = f"P6 {image.width} {image.height} 255\n".encode("ascii")
    with open(filepath, "wb") as f:
        f.write(header)
        f.write(image.to_uint8().tobytes())
    logger.info("Wrote %dx%d PPM to %s", image.width, image.height, filepath)


def save_png(image: Image, filepath: PathLike) -> None:
    """Save the image as an 8-bit RGB PNG file.

    Args:
        image: The rendered image.
        filepath: Output file path.

    Raises:
        OSError: If the file cannot be written.
    """
    _to_pil(image).save(filepath, format="PNG")
    logger.info("Wrote %dx%d PNG to %s", image.width, image.height, filepath)


def save_image(image: Image, filepath: PathLike) -> None:
    """Save the image, choosing PPM or PNG from the file extension.

    Raises:
        ValueError: If the extension is neither .ppm nor .png.
    """
    suffix = Path(filepath).suffix.lower()
    if suffix == ".ppm":
        save_ppm(image, filepath)
    elif suffix == ".png":
        save_png(image, filepath)
    else:
        raise ValueError(f"Unsupported image format: {suffix or '(none)'} (use .ppm or .png)")


def open_image(filepath: PathLike) -> None:
    """Open an image file with the platform's default viewer.

    Raises:
        OSError: If the viewer cannot be launched.
        subprocess.CalledProcessError: If the viewer command fails.
    """
    path = os.fspath(filepath)
    if sys.platform == "win32":
        os.startfile(path)  # type: ignore[attr-defined]
        return
    command = "open" if sys.platform == "darwin" else "xdg-open"
    logger.debug("Opening %s with %s", path, command)
    subprocess.run([command, path], check=True)


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
