"""
Pixel pipeline: convert, scale channels, convert back.

Every pixel is handled independently, so the whole image is processed
as a handful of array operations on (3, H, W) planes.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from chromasplit.core.adjustments import (
    PERCENT_MAX,
    Adjustment,
    ColorAdjustments,
    HSVAdjustment,
    YCbCrAdjustment,
)
from chromasplit.core.data_types import ColorModel, PixelBuffer
from chromasplit.nodes.color.conversions import CHROMA_NEUTRAL, get_converters

logger = logging.getLogger(__name__)

# Value each channel takes when its factor is 0
NEUTRAL_VALUES: dict[ColorModel, tuple[float, float, float]] = {
    ColorModel.YCBCR: (0.5, CHROMA_NEUTRAL, CHROMA_NEUTRAL),
    ColorModel.HSV: (0.0, 0.0, 1.0),
}

# Channels scaled around the neutral value instead of around zero
CENTERED_CHANNELS: dict[ColorModel, tuple[bool, bool, bool]] = {
    ColorModel.YCBCR: (False, True, True),
    ColorModel.HSV: (False, False, False),
}


def resolve_adjustment(
    model: ColorModel | str,
    adjustment: Adjustment | ColorAdjustments,
) -> Adjustment:
    """
    Pick the adjustment record that applies to a model.

    Raises:
        ValueError: If a single record for the other model is given
    """
    model = ColorModel.parse(model)
    if isinstance(adjustment, ColorAdjustments):
        return adjustment.for_model(model)
    if not isinstance(adjustment, (YCbCrAdjustment, HSVAdjustment)):
        raise ValueError(f"Unsupported adjustment type: {type(adjustment).__name__}")
    if adjustment.model is not model:
        raise ValueError(
            f"{type(adjustment).__name__} cannot adjust {model.value} data"
        )
    return adjustment


def apply_adjustment(
    values: NDArray,
    model: ColorModel | str,
    adjustment: Adjustment | ColorAdjustments,
) -> NDArray[np.float64]:
    """
    Scale each channel of model-space data by its percentage factor.

    A factor of 0 replaces the channel with its neutral value. Y, H, S
    and V scale toward zero; Cb and Cr scale toward 0.5.

    Args:
        values: Channel-first (3, ...) data already in ``model``
        model: Color model of ``values``
        adjustment: Factors in [0, 100]

    Returns:
        New adjusted array; ``values`` is left untouched
    """
    model = ColorModel.parse(model)
    record = resolve_adjustment(model, adjustment)
    values = np.asarray(values, dtype=np.float64)
    out = np.empty_like(values)

    channels = zip(
        record.as_tuple(), NEUTRAL_VALUES[model], CENTERED_CHANNELS[model]
    )
    for i, (factor, neutral, centered) in enumerate(channels):
        if factor > 0:
            scale = factor / PERCENT_MAX
            if centered:
                out[i] = neutral + (values[i] - neutral) * scale
            else:
                out[i] = values[i] * scale
        else:
            out[i] = neutral

    return out


def process(
    buffer: PixelBuffer,
    model: ColorModel | str,
    adjustment: Adjustment | ColorAdjustments,
) -> PixelBuffer:
    """
    Render a buffer through one color model with per-channel scaling.

    Args:
        buffer: Source image, left unmodified
        model: YCbCr or HSV
        adjustment: The model's record, or both records bundled

    Returns:
        New buffer of the same size with alpha copied through
    """
    model = ColorModel.parse(model)
    to_rgb, from_rgb = get_converters(model)

    logger.debug(
        "Processing %dx%d buffer in %s with %s",
        buffer.width, buffer.height, model.value, adjustment,
    )

    converted = from_rgb(buffer.rgb_planes())
    adjusted = apply_adjustment(converted, model, adjustment)
    return buffer.with_rgb(to_rgb(adjusted))


def process_all(
    buffer: PixelBuffer,
    adjustments: ColorAdjustments | None = None,
) -> dict[ColorModel, PixelBuffer]:
    """Render the buffer through every color model at once."""
    if adjustments is None:
        adjustments = ColorAdjustments()
    return {model: process(buffer, model, adjustments) for model in ColorModel}
