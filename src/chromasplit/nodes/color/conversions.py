"""
Color model conversion functions.

RGB <-> YCbCr and RGB <-> HSV over channel-first arrays of shape (3, ...).
RGB input is 8-bit [0, 255]; RGB output is clamped, rounded half up and
returned as uint8. A single pixel is just shape (3,).
"""

from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray

from chromasplit.core.data_types import HSV, RGB, ColorModel, YCbCr

RGB_MAX = 255.0
HUE_MAX = 360.0
HUE_SECTOR = 60.0

# Forward YCbCr coefficients (RGB normalized to [0, 1])
KR, KG, KB = 0.299, 0.587, 0.114
CB_R, CB_G, CB_B = -0.169, -0.331, 0.5
CR_R, CR_G, CR_B = 0.5, -0.419, -0.081

# Inverse YCbCr coefficients
R_CR = 1.402
G_CB = 0.344136
G_CR = 0.714136
B_CB = 1.772

CHROMA_NEUTRAL = 0.5


def _to_unit(rgb: NDArray) -> tuple[NDArray, NDArray, NDArray]:
    """Split RGB into float64 channels normalized to [0, 1]."""
    rgb = np.asarray(rgb, dtype=np.float64) / RGB_MAX
    return rgb[0], rgb[1], rgb[2]


def _to_bytes(r: NDArray, g: NDArray, b: NDArray) -> NDArray[np.uint8]:
    """Scale [0, 1] channels to bytes: clamp to [0, 255], round half up."""
    scaled = np.stack([r, g, b], axis=0) * RGB_MAX
    return np.floor(np.clip(scaled, 0.0, RGB_MAX) + 0.5).astype(np.uint8)


# =============================================================================
# RGB <-> YCbCr
# =============================================================================

def rgb_to_ycbcr(rgb: NDArray) -> NDArray[np.float64]:
    """Convert RGB bytes to YCbCr in [0, 1] with chroma centered on 0.5."""
    r, g, b = _to_unit(rgb)

    y = KR * r + KG * g + KB * b
    cb = CB_R * r + CB_G * g + CB_B * b + CHROMA_NEUTRAL
    cr = CR_R * r + CR_G * g + CR_B * b + CHROMA_NEUTRAL

    return np.stack([y, cb, cr], axis=0)


def ycbcr_to_rgb(ycbcr: NDArray) -> NDArray[np.uint8]:
    """
    Convert YCbCr back to RGB bytes.

    Out-of-gamut results (common after adjustment) are clipped to
    [0, 255], not rejected.
    """
    ycbcr = np.asarray(ycbcr, dtype=np.float64)
    y = ycbcr[0]
    cb = ycbcr[1] - CHROMA_NEUTRAL
    cr = ycbcr[2] - CHROMA_NEUTRAL

    r = y + R_CR * cr
    g = y - G_CB * cb - G_CR * cr
    b = y + B_CB * cb

    return _to_bytes(r, g, b)


# =============================================================================
# RGB <-> HSV
# =============================================================================

def rgb_to_hsv(rgb: NDArray) -> NDArray[np.float64]:
    """
    Convert RGB bytes to HSV.

    Hue is in degrees [0, 360); achromatic pixels get hue 0. When two
    channels tie for the maximum, red wins over green and green over blue.
    """
    r, g, b = _to_unit(rgb)

    _max = np.maximum(np.maximum(r, g), b)
    _min = np.minimum(np.minimum(r, g), b)
    diff = _max - _min

    chromatic = diff > 0
    safe_diff = np.where(chromatic, diff, 1.0)

    hue = np.zeros_like(r)

    # Lowest precedence first so later assignments win ties
    b_max = chromatic & (b == _max)
    hue = np.where(b_max, HUE_SECTOR * ((r - g) / safe_diff + 4.0), hue)

    g_max = chromatic & (g == _max)
    hue = np.where(g_max, HUE_SECTOR * ((b - r) / safe_diff + 2.0), hue)

    r_max = chromatic & (r == _max)
    hue = np.where(r_max, HUE_SECTOR * np.fmod((g - b) / safe_diff, 6.0), hue)

    hue = np.where(hue < 0, hue + HUE_MAX, hue)

    saturation = np.where(_max > 0, diff / np.where(_max > 0, _max, 1.0), 0.0)

    return np.stack([hue, saturation, _max], axis=0)


def hsv_to_rgb(hsv: NDArray) -> NDArray[np.uint8]:
    """
    Convert HSV back to RGB bytes.

    Uses the chroma/x/m decomposition over six 60-degree sectors. Hues
    outside [0, 300) fall into the last sector.
    """
    hsv = np.asarray(hsv, dtype=np.float64)
    h, s, v = hsv[0], hsv[1], hsv[2]

    c = v * s
    x = c * (1.0 - np.abs(np.mod(h / HUE_SECTOR, 2.0) - 1.0))
    m = v - c
    zero = np.zeros_like(h)

    sector = np.where((h >= 0) & (h < HUE_MAX), np.floor(h / HUE_SECTOR), 5)
    sector = np.minimum(sector, 5).astype(np.int32)
    conditions = [sector == i for i in range(5)]

    r = np.select(conditions, [c, x, zero, zero, x], default=c)
    g = np.select(conditions, [x, c, c, x, zero], default=zero)
    b = np.select(conditions, [zero, zero, x, c, c], default=x)

    return _to_bytes(r + m, g + m, b + m)


# =============================================================================
# Single-pixel helpers
# =============================================================================

def color_to_ycbcr(color: RGB) -> YCbCr:
    """Convert one RGB pixel to YCbCr."""
    y, cb, cr = rgb_to_ycbcr(np.array(color, dtype=np.float64))
    return YCbCr(float(y), float(cb), float(cr))


def color_from_ycbcr(color: YCbCr) -> RGB:
    """Convert one YCbCr value to an RGB pixel."""
    r, g, b = ycbcr_to_rgb(np.array(color, dtype=np.float64))
    return RGB(int(r), int(g), int(b))


def color_to_hsv(color: RGB) -> HSV:
    """Convert one RGB pixel to HSV."""
    h, s, v = rgb_to_hsv(np.array(color, dtype=np.float64))
    return HSV(float(h), float(s), float(v))


def color_from_hsv(color: HSV) -> RGB:
    """Convert one HSV value to an RGB pixel."""
    r, g, b = hsv_to_rgb(np.array(color, dtype=np.float64))
    return RGB(int(r), int(g), int(b))


# =============================================================================
# Conversion dispatch
# =============================================================================

Converter = Callable[[NDArray], NDArray]

# All conversion functions: (to_rgb, from_rgb)
COLOR_MODEL_CONVERTERS: dict[ColorModel, tuple[Converter, Converter]] = {
    ColorModel.YCBCR: (ycbcr_to_rgb, rgb_to_ycbcr),
    ColorModel.HSV: (hsv_to_rgb, rgb_to_hsv),
}


def get_converters(model: ColorModel | str) -> tuple[Converter, Converter]:
    """
    Look up the (to_rgb, from_rgb) pair for a color model.

    Raises:
        ValueError: If the model is unknown
    """
    return COLOR_MODEL_CONVERTERS[ColorModel.parse(model)]


def list_color_models() -> list[str]:
    """Get the names of the supported color models."""
    return [model.value for model in COLOR_MODEL_CONVERTERS]
