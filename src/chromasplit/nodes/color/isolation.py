"""
Channel isolation: render each YCbCr and HSV channel on its own.

Every other channel is held at a fixed baseline, so each view shows
what one channel contributes to the image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Iterator

import numpy as np

from chromasplit.core.data_types import PixelBuffer
from chromasplit.nodes.color.conversions import (
    CHROMA_NEUTRAL,
    hsv_to_rgb,
    rgb_to_hsv,
    rgb_to_ycbcr,
    ycbcr_to_rgb,
)

logger = logging.getLogger(__name__)

CHANNEL_NAMES = ("y", "cb", "cr", "h", "s", "v")

CHANNEL_DESCRIPTIONS = {
    "y": "Luma: brightness as a grayscale image",
    "cb": "Blue-difference chroma on mid-gray luma",
    "cr": "Red-difference chroma on mid-gray luma",
    "h": "Hue at full saturation and value",
    "s": "Saturation as a red tint at full value",
    "v": "Value as a grayscale image",
}

# Baselines for the channels a view does not show
LUMA_BASELINE = 0.5
SATURATION_BASELINE = 1.0
VALUE_BASELINE = 1.0


@dataclass(frozen=True)
class ChannelViews:
    """The six single-channel renderings of one image."""

    y: PixelBuffer
    cb: PixelBuffer
    cr: PixelBuffer
    h: PixelBuffer
    s: PixelBuffer
    v: PixelBuffer

    def __getitem__(self, name: str) -> PixelBuffer:
        if name not in CHANNEL_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def __iter__(self) -> Iterator[tuple[str, PixelBuffer]]:
        for f in fields(self):
            yield f.name, getattr(self, f.name)

    def __len__(self) -> int:
        return len(CHANNEL_NAMES)

    def as_dict(self) -> dict[str, PixelBuffer]:
        """Views keyed by channel name."""
        return dict(self)


def isolate(buffer: PixelBuffer) -> ChannelViews:
    """
    Decompose a buffer into six single-channel views.

    Args:
        buffer: Source image, left unmodified

    Returns:
        ChannelViews with y, cb, cr, h, s and v buffers, alpha copied through
    """
    logger.debug("Isolating channels of %dx%d buffer", buffer.width, buffer.height)

    rgb = buffer.rgb_planes()
    y, cb, cr = rgb_to_ycbcr(rgb)
    h, s, v = rgb_to_hsv(rgb)

    chroma = np.full_like(y, CHROMA_NEUTRAL)
    luma = np.full_like(y, LUMA_BASELINE)
    zeros = np.zeros_like(y)
    ones = np.ones_like(y)

    return ChannelViews(
        y=buffer.with_rgb(ycbcr_to_rgb(np.stack([y, chroma, chroma]))),
        cb=buffer.with_rgb(ycbcr_to_rgb(np.stack([luma, cb, chroma]))),
        cr=buffer.with_rgb(ycbcr_to_rgb(np.stack([luma, chroma, cr]))),
        h=buffer.with_rgb(hsv_to_rgb(np.stack([h, ones * SATURATION_BASELINE, ones * VALUE_BASELINE]))),
        s=buffer.with_rgb(hsv_to_rgb(np.stack([zeros, s, ones * VALUE_BASELINE]))),
        v=buffer.with_rgb(hsv_to_rgb(np.stack([zeros, zeros, v]))),
    )
