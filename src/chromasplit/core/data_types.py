"""
Core data types for chromasplit.

Provides PixelBuffer (flat 8-bit RGBA storage with shape checking),
the ColorModel enum, and the per-pixel RGB, YCbCr and HSV records.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import numpy as np
from numpy.typing import NDArray

RGBA_CHANNELS = 4


class ColorModel(str, Enum):
    """Color models the pipelines can decompose into."""

    YCBCR = "YCbCr"
    HSV = "HSV"

    @classmethod
    def parse(cls, value: ColorModel | str) -> ColorModel:
        """
        Resolve a model from an enum member or a case-insensitive name.

        Raises:
            ValueError: If the name matches no model
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if str(value).upper() == member.value.upper():
                return member
        raise ValueError(f"Unknown color model: {value}")


class RGB(NamedTuple):
    """One pixel in the device model, each channel an int in [0, 255]."""

    r: int
    g: int
    b: int


class YCbCr(NamedTuple):
    """Luma and chroma in [0, 1]; Cb/Cr of 0.5 means no chroma."""

    y: float
    cb: float
    cr: float


class HSV(NamedTuple):
    """Hue in degrees [0, 360), saturation and value in [0, 1]."""

    h: float
    s: float
    v: float


@dataclass(eq=False)
class PixelBuffer:
    """
    Row-major RGBA image with one byte per channel.

    This is the unit passed into and out of every pipeline. Pipelines
    read it and return new buffers; they never write to their input.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        data: Flat uint8 array of width * height * 4 bytes

    Shape Convention:
        - ``data`` is flat: pixel (x, y) starts at ``(y * width + x) * 4``
        - ``rgb_planes()`` is channel-first (3, H, W), like the conversions expect
        - ``to_rgba()`` is (H, W, 4) for PIL and display code
    """

    width: int
    height: int
    data: NDArray[np.uint8]

    def __post_init__(self) -> None:
        """Validate dimensions against the byte count."""
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"PixelBuffer dimensions must be non-negative, got {self.width}x{self.height}"
            )

        data = np.asarray(self.data)
        if data.dtype != np.uint8:
            if data.size and (data.min() < 0 or data.max() > 255):
                raise ValueError("PixelBuffer data must hold 8-bit values in [0, 255]")
            data = data.astype(np.uint8)
        data = data.reshape(-1)

        expected = self.width * self.height * RGBA_CHANNELS
        if data.size != expected:
            raise ValueError(
                f"PixelBuffer data length ({data.size}) must equal "
                f"width*height*4 ({expected})"
            )
        self.data = data

    @property
    def size(self) -> tuple[int, int]:
        """Size as (width, height)."""
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        """Number of pixels."""
        return self.width * self.height

    @property
    def alpha(self) -> NDArray[np.uint8]:
        """Alpha channel as a (H, W) copy."""
        return self.to_rgba()[:, :, 3].copy()

    def to_rgba(self) -> NDArray[np.uint8]:
        """Return a (H, W, 4) copy for PIL/display."""
        return self.data.reshape(self.height, self.width, RGBA_CHANNELS).copy()

    def rgb_planes(self) -> NDArray[np.uint8]:
        """Return the color channels as a channel-first (3, H, W) copy."""
        hwc = self.data.reshape(self.height, self.width, RGBA_CHANNELS)
        return np.ascontiguousarray(np.transpose(hwc[:, :, :3], (2, 0, 1)))

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """
        Get one RGBA pixel.

        Raises:
            IndexError: If (x, y) is outside the image
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} buffer")
        start = (y * self.width + x) * RGBA_CHANNELS
        r, g, b, a = self.data[start:start + RGBA_CHANNELS]
        return (int(r), int(g), int(b), int(a))

    def with_rgb(self, planes: NDArray) -> PixelBuffer:
        """
        Build a new buffer from (3, H, W) color planes and this buffer's alpha.

        Args:
            planes: Channel-first color data, already in [0, 255]

        Returns:
            Freshly allocated buffer of the same size
        """
        if planes.shape != (3, self.height, self.width):
            raise ValueError(
                f"Color planes shape {planes.shape} does not match "
                f"(3, {self.height}, {self.width})"
            )
        out = np.empty((self.height, self.width, RGBA_CHANNELS), dtype=np.uint8)
        out[:, :, :3] = np.transpose(planes, (1, 2, 0))
        out[:, :, 3] = self.data.reshape(self.height, self.width, RGBA_CHANNELS)[:, :, 3]
        return PixelBuffer(self.width, self.height, out.reshape(-1))

    def copy(self) -> PixelBuffer:
        """Create a deep copy of this buffer."""
        return PixelBuffer(self.width, self.height, self.data.copy())

    @classmethod
    def from_rgba(cls, data: NDArray) -> PixelBuffer:
        """Create from (H, W, 4) uint8 data."""
        if data.ndim != 3 or data.shape[2] != RGBA_CHANNELS:
            raise ValueError(f"Expected (H, W, 4) RGBA data, got shape {data.shape}")
        height, width = data.shape[:2]
        return cls(width, height, np.array(data, dtype=np.uint8).reshape(-1))

    @classmethod
    def from_rgb(cls, data: NDArray, alpha: int = 255) -> PixelBuffer:
        """Create from (H, W, 3) uint8 data with a constant alpha."""
        if data.ndim != 3 or data.shape[2] != 3:
            raise ValueError(f"Expected (H, W, 3) RGB data, got shape {data.shape}")
        height, width = data.shape[:2]
        rgba = np.empty((height, width, RGBA_CHANNELS), dtype=np.uint8)
        rgba[:, :, :3] = data
        rgba[:, :, 3] = alpha
        return cls(width, height, rgba.reshape(-1))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(size={self.width}x{self.height}, dtype={self.data.dtype})"
