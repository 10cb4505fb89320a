"""
Per-channel adjustment values.

Each field is a percentage of the original channel: 100 leaves the
channel unchanged, 0 replaces it with the channel's neutral value.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

from chromasplit.core.data_types import ColorModel

PERCENT_MIN = 0
PERCENT_MAX = 100


@dataclass(frozen=True)
class YCbCrAdjustment:
    """Scale factors for luma (Y) and the two chroma channels."""

    y: float = PERCENT_MAX
    cb: float = PERCENT_MAX
    cr: float = PERCENT_MAX

    model = ColorModel.YCBCR

    def as_tuple(self) -> tuple[float, float, float]:
        """Factors in channel order."""
        return (self.y, self.cb, self.cr)

    def with_values(self, **changes: Any) -> YCbCrAdjustment:
        """Return a copy with some factors replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class HSVAdjustment:
    """Scale factors for hue, saturation and value."""

    h: float = PERCENT_MAX
    s: float = PERCENT_MAX
    v: float = PERCENT_MAX

    model = ColorModel.HSV

    def as_tuple(self) -> tuple[float, float, float]:
        """Factors in channel order."""
        return (self.h, self.s, self.v)

    def with_values(self, **changes: Any) -> HSVAdjustment:
        """Return a copy with some factors replaced."""
        return replace(self, **changes)


Adjustment = YCbCrAdjustment | HSVAdjustment


@dataclass(frozen=True)
class ColorAdjustments:
    """Both adjustment records, as held by the control surface."""

    ycbcr: YCbCrAdjustment = field(default_factory=YCbCrAdjustment)
    hsv: HSVAdjustment = field(default_factory=HSVAdjustment)

    def for_model(self, model: ColorModel | str) -> Adjustment:
        """Get the record that applies to one color model."""
        model = ColorModel.parse(model)
        if model is ColorModel.YCBCR:
            return self.ycbcr
        return self.hsv


def adjustment_for(model: ColorModel | str, *factors: float) -> Adjustment:
    """
    Build the adjustment record for a model from positional factors.

    Args:
        model: Target color model
        *factors: Up to three percentages in channel order; missing ones default to 100

    Returns:
        YCbCrAdjustment or HSVAdjustment
    """
    model = ColorModel.parse(model)
    record_class = YCbCrAdjustment if model is ColorModel.YCBCR else HSVAdjustment
    names = [f.name for f in fields(record_class)]
    if len(factors) > len(names):
        raise ValueError(f"{model.value} takes at most {len(names)} factors")
    return record_class(**dict(zip(names, factors)))
