"""
Tests for the adjustment records.
"""

import dataclasses

import pytest

from chromasplit.core.adjustments import (
    ColorAdjustments,
    HSVAdjustment,
    YCbCrAdjustment,
    adjustment_for,
)
from chromasplit.core.data_types import ColorModel


class TestAdjustmentRecords:
    """Tests for YCbCrAdjustment and HSVAdjustment."""

    def test_defaults_are_unchanged(self):
        assert YCbCrAdjustment().as_tuple() == (100, 100, 100)
        assert HSVAdjustment().as_tuple() == (100, 100, 100)

    def test_model_tag(self):
        assert YCbCrAdjustment.model is ColorModel.YCBCR
        assert HSVAdjustment.model is ColorModel.HSV

    def test_frozen(self):
        adj = YCbCrAdjustment()

        with pytest.raises(dataclasses.FrozenInstanceError):
            adj.y = 50

    def test_with_values(self):
        adj = HSVAdjustment()
        changed = adj.with_values(s=0)

        assert changed.as_tuple() == (100, 0, 100)
        assert adj.s == 100


class TestColorAdjustments:
    """Tests for the bundled adjustments."""

    def test_for_model(self):
        adjustments = ColorAdjustments(
            ycbcr=YCbCrAdjustment(y=50),
            hsv=HSVAdjustment(v=25),
        )

        assert adjustments.for_model("YCbCr").y == 50
        assert adjustments.for_model(ColorModel.HSV).v == 25

    def test_defaults(self):
        adjustments = ColorAdjustments()

        assert adjustments.ycbcr == YCbCrAdjustment()
        assert adjustments.hsv == HSVAdjustment()


class TestAdjustmentFor:
    """Tests for building records from positional factors."""

    def test_full(self):
        assert adjustment_for("hsv", 10, 20, 30) == HSVAdjustment(10, 20, 30)

    def test_partial_defaults_rest(self):
        assert adjustment_for(ColorModel.YCBCR, 40) == YCbCrAdjustment(y=40)

    def test_too_many_factors(self):
        with pytest.raises(ValueError):
            adjustment_for("YCbCr", 1, 2, 3, 4)
