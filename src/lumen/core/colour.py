"""RGB colour value type with hex codec and output tone mapping.

Colours hold linear red, green and blue channels that are nominally in
[0, 1] but are never clamped during arithmetic: lighting sums routinely push
channels above 1. Clamping happens only at output time, through
`tone_map()` and `quantise()`:

1. If any channel exceeds 1, the whole colour is scaled by 1 / max_channel
   so that the channel ratios (the hue) are preserved.
2. Every channel is clamped to [0, 1].
3. Each channel is truncated to an 8-bit value (int(255 * v)).

Example:
    >>> from src.lumen.core.colour import Colour
    >>> Colour.from_hex(0xFF8000).as_hex() == 0xFF8000
    True
    >>> Colour(2.0, 1.0, 0.5).tone_map()
    Colour(red=1.0, green=0.5, blue=0.25)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np
import numpy.typing as npt

from src.lumen.core.vector import approx_equal


def _channel_to_byte(value: float) -> int:
    """Truncate a [0, 1] channel value to the byte range [0, 255]."""
    return max(0, min(255, int(value * 255.0)))


@dataclass(frozen=True, eq=False)
class Colour:
    """A linear RGB colour.

    Attributes:
        red: Red channel (nominally [0, 1], unclamped).
        green: Green channel (nominally [0, 1], unclamped).
        blue: Blue channel (nominally [0, 1], unclamped).
    """

    red: float
    green: float
    blue: float

    @classmethod
    def from_hex(cls, value: int) -> Colour:
        """Decode a 0xRRGGBB integer into a colour."""
        return cls(
            ((value >> 16) & 0xFF) / 255.0,
            ((value >> 8) & 0xFF) / 255.0,
            (value & 0xFF) / 255.0,
        )

    @classmethod
    def grey(cls, value: float) -> Colour:
        """Create a colour with equal channels."""
        return cls(value, value, value)

    def as_hex(self) -> int:
        """Encode as a 0xRRGGBB integer, truncating each channel to a byte."""
        return (
            _channel_to_byte(self.red) << 16
            | _channel_to_byte(self.green) << 8
            | _channel_to_byte(self.blue)
        )

    def as_rgb(self) -> tuple[float, float, float]:
        """Return the channels as a (red, green, blue) tuple."""
        return (self.red, self.green, self.blue)

    def max_channel(self) -> float:
        """Return the largest channel value."""
        return max(self.red, self.green, self.blue)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Colour) -> Colour:
        return Colour(self.red + other.red, self.green + other.green, self.blue + other.blue)

    def __mul__(self, other: Union[Colour, float]) -> Colour:
        if isinstance(other, Colour):
            return Colour(self.red * other.red, self.green * other.green, self.blue * other.blue)
        return Colour(self.red * other, self.green * other, self.blue * other)

    def __rmul__(self, other: float) -> Colour:
        return self.__mul__(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Colour):
            return NotImplemented
        return (
            approx_equal(self.red, other.red)
            and approx_equal(self.green, other.green)
            and approx_equal(self.blue, other.blue)
        )

    __hash__ = None  # type: ignore[assignment]

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def tone_map(self) -> Colour:
        """Bring the colour into displayable range.

        Over-bright colours are rescaled proportionally so their largest
        channel becomes 1, then every channel is clamped to [0, 1]. This
        never fails.
        """
        colour = self
        peak = colour.max_channel()
        if peak > 1.0:
            colour = colour * (1.0 / peak)
        return Colour(
            max(0.0, min(1.0, colour.red)),
            max(0.0, min(1.0, colour.green)),
            max(0.0, min(1.0, colour.blue)),
        )

    def quantise(self) -> tuple[int, int, int]:
        """Tone map and truncate each channel to an 8-bit value."""
        mapped = self.tone_map()
        return (
            int(255.0 * mapped.red),
            int(255.0 * mapped.green),
            int(255.0 * mapped.blue),
        )


BLACK = Colour(0.0, 0.0, 0.0)
WHITE = Colour.from_hex(0xFFFFFF)


# =============================================================================
# Array tone mapping (whole images)
# =============================================================================


def tone_map_array(image: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Apply the per-pixel proportional tone map to an (..., 3) array.

    Args:
        image: Linear colour array whose last axis holds RGB channels.

    Returns:
        A new float32 array with every pixel in [0, 1].
    """
    peak = np.max(image, axis=-1, keepdims=True)
    scale = np.where(peak > 1.0, 1.0 / np.maximum(peak, 1.0), 1.0)
    return np.clip(image * scale, 0.0, 1.0).astype(np.float32)


def quantise_array(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Tone map an (..., 3) array and truncate it to 8-bit channels."""
    return (tone_map_array(image) * 255.0).astype(np.uint8)

