"""Row-major colour image buffer.

An Image is created once per render, filled with a background colour,
written pixel by pixel, and handed to an encoder. Pixels are stored in a
NumPy array of shape (height, width, 3) so row y, column x is
`pixels[y, x]` and a flat view is row-major, top row first.

Stored colours are linear and unclamped; to_uint8() applies the output tone
map (proportional rescale of over-bright pixels, clamp, 8-bit truncation).
"""

from collections.abc import Iterator

import numpy as np
import numpy.typing as npt

from src.lumen.core.colour import Colour, quantise_array


class Image:
    """A width x height buffer of linear RGB colours.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Float32 array of shape (height, width, 3).
    """

    def __init__(self, width: int, height: int, background: Colour) -> None:
        """Create an image filled with a background colour.

        Args:
            width: Image width in pixels (> 0).
            height: Image height in pixels (> 0).
            background: Initial colour of every pixel.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: npt.NDArray[np.float32] = np.empty((height, width, 3), dtype=np.float32)
        self.pixels[:, :] = background.as_rgb()

    @classmethod
    def from_array(cls, pixels: npt.NDArray[np.floating]) -> "Image":
        """Wrap an existing (height, width, 3) array (copied as float32).

        Raises:
            ValueError: If the array does not have shape (height, width, 3).
        """
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (height, width, 3), got {pixels.shape}")
        height, width, _ = pixels.shape
        image = cls(width, height, Colour(0.0, 0.0, 0.0))
        image.pixels[...] = pixels
        return image

    def get_pixel(self, x: int, y: int) -> Colour:
        """Read the colour at column x, row y."""
        red, green, blue = self.pixels[y, x]
        return Colour(float(red), float(green), float(blue))

    def set_pixel(self, x: int, y: int, colour: Colour) -> None:
        """Write the colour at column x, row y."""
        self.pixels[y, x] = colour.as_rgb()

    def __iter__(self) -> Iterator[tuple[int, int, Colour]]:
        """Iterate (x, y, colour) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self.get_pixel(x, y)

    def to_uint8(self) -> npt.NDArray[np.uint8]:
        """Tone map and quantise to an 8-bit (height, width, 3) array."""
        return quantise_array(self.pixels)

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"
