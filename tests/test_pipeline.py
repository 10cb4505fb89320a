"""
Tests for the pixel pipeline.
"""

import numpy as np
import pytest

from chromasplit.core.adjustments import ColorAdjustments, HSVAdjustment, YCbCrAdjustment
from chromasplit.core.data_types import HSV, RGB, ColorModel, PixelBuffer, YCbCr
from chromasplit.nodes.color.conversions import (
    color_from_hsv,
    color_from_ycbcr,
    color_to_hsv,
    color_to_ycbcr,
)
from chromasplit.nodes.color.pipeline import (
    apply_adjustment,
    process,
    process_all,
    resolve_adjustment,
)


def single_pixel(r, g, b, a=255):
    return PixelBuffer(1, 1, np.array([r, g, b, a], dtype=np.uint8))


@pytest.fixture
def test_image():
    """Gradient image with varying alpha."""
    h, w = 32, 48
    rgba = np.zeros((h, w, 4), dtype=np.uint8)
    rgba[..., 0] = np.linspace(0, 255, w).astype(np.uint8)[np.newaxis, :]
    rgba[..., 1] = np.linspace(0, 255, h).astype(np.uint8)[:, np.newaxis]
    rgba[..., 2] = 128
    rgba[..., 3] = np.linspace(0, 255, w).astype(np.uint8)[::-1][np.newaxis, :]
    return PixelBuffer.from_rgba(rgba)


@pytest.fixture
def random_image():
    rgba = np.random.randint(0, 256, (24, 24, 4), dtype=np.uint8)
    return PixelBuffer.from_rgba(rgba)


class TestIdentityAdjustment:
    """All factors at 100 reproduce the input within rounding."""

    @pytest.mark.parametrize("model,adjustment", [
        (ColorModel.YCBCR, YCbCrAdjustment()),
        (ColorModel.HSV, HSVAdjustment()),
    ])
    def test_identity(self, random_image, model, adjustment):
        result = process(random_image, model, adjustment)

        assert result.size == random_image.size
        np.testing.assert_allclose(
            result.rgb_planes(), random_image.rgb_planes(), atol=1
        )

    def test_output_is_new_buffer(self, test_image):
        before = test_image.data.copy()

        result = process(test_image, "YCbCr", YCbCrAdjustment())

        assert result is not test_image
        assert not np.shares_memory(result.data, test_image.data)
        np.testing.assert_array_equal(test_image.data, before)


class TestZeroFactor:
    """A factor of 0 forces the channel to its neutral value."""

    def test_zero_y_uses_mid_luma(self):
        red = RGB(255, 0, 0)
        ycbcr = color_to_ycbcr(red)

        result = process(single_pixel(*red), "YCbCr", YCbCrAdjustment(y=0))

        expected = color_from_ycbcr(YCbCr(0.5, ycbcr.cb, ycbcr.cr))
        assert result.pixel(0, 0)[:3] == tuple(expected)
        assert tuple(expected) == (255, 51, 51)

    @pytest.mark.parametrize("channel", ["cb", "cr"])
    def test_zero_chroma_is_centered(self, channel):
        color = RGB(200, 50, 80)
        ycbcr = color_to_ycbcr(color)

        result = process(single_pixel(*color), "YCbCr", YCbCrAdjustment(**{channel: 0}))

        expected = color_from_ycbcr(ycbcr._replace(**{channel: 0.5}))
        assert result.pixel(0, 0)[:3] == tuple(expected)

    def test_zero_chroma_both_is_grey(self):
        result = process(single_pixel(200, 50, 80), "YCbCr", YCbCrAdjustment(cb=0, cr=0))

        r, g, b, _ = result.pixel(0, 0)
        assert r == g == b

    def test_zero_hue_is_red(self):
        result = process(single_pixel(0, 255, 0), "HSV", HSVAdjustment(h=0))

        assert result.pixel(0, 0)[:3] == (255, 0, 0)

    def test_zero_saturation_is_grey(self):
        color = RGB(200, 50, 80)
        hsv = color_to_hsv(color)

        result = process(single_pixel(*color), "HSV", HSVAdjustment(s=0))

        expected = color_from_hsv(HSV(hsv.h, 0.0, hsv.v))
        assert result.pixel(0, 0)[:3] == tuple(expected)
        assert expected.r == expected.g == expected.b == 200

    def test_zero_value_is_full_brightness(self):
        result = process(single_pixel(0, 0, 128), "HSV", HSVAdjustment(v=0))

        assert result.pixel(0, 0)[:3] == (0, 0, 255)


class TestScaling:
    """Partial factors scale channels toward zero or toward the center."""

    def test_apply_adjustment_ycbcr(self):
        values = np.array([0.8, 0.7, 0.2])

        out = apply_adjustment(values, "YCbCr", YCbCrAdjustment(50, 50, 50))

        np.testing.assert_allclose(out, [0.4, 0.6, 0.35])

    def test_apply_adjustment_hsv(self):
        values = np.array([200.0, 0.8, 0.6])

        out = apply_adjustment(values, "HSV", HSVAdjustment(50, 25, 100))

        np.testing.assert_allclose(out, [100.0, 0.2, 0.6])

    def test_apply_adjustment_does_not_mutate(self):
        values = np.array([[0.8], [0.7], [0.2]])
        before = values.copy()

        apply_adjustment(values, "YCbCr", YCbCrAdjustment(0, 0, 0))

        np.testing.assert_array_equal(values, before)

    def test_halving_value_darkens(self, test_image):
        result = process(test_image, "HSV", HSVAdjustment(v=50))

        assert result.rgb_planes().astype(int).sum() < test_image.rgb_planes().astype(int).sum()

    def test_end_to_end_example(self):
        """Halving Y gives a darker red with the same chroma."""
        color = RGB(200, 50, 80)
        original = color_to_ycbcr(color)

        result = process(single_pixel(*color), "YCbCr", YCbCrAdjustment(y=50))
        r, g, b, a = result.pixel(0, 0)

        assert a == 255
        assert r < color.r
        assert r > g and r > b
        adjusted = color_to_ycbcr(RGB(r, g, b))
        assert adjusted.y == pytest.approx(original.y / 2, abs=0.01)
        assert adjusted.cb == pytest.approx(original.cb, abs=0.01)
        assert adjusted.cr == pytest.approx(original.cr, abs=0.01)


class TestAlphaPassThrough:
    """Alpha is copied unchanged regardless of adjustment."""

    @pytest.mark.parametrize("model,adjustment", [
        ("YCbCr", YCbCrAdjustment(0, 0, 0)),
        ("YCbCr", YCbCrAdjustment(37, 100, 5)),
        ("HSV", HSVAdjustment(0, 0, 0)),
        ("HSV", HSVAdjustment(12, 80, 64)),
    ])
    def test_alpha_unchanged(self, random_image, model, adjustment):
        result = process(random_image, model, adjustment)

        np.testing.assert_array_equal(result.alpha, random_image.alpha)


class TestAdjustmentResolution:
    """Tests for choosing the right adjustment record."""

    def test_bundle_picks_model_record(self, test_image):
        adjustments = ColorAdjustments(hsv=HSVAdjustment(s=0))

        via_bundle = process(test_image, "HSV", adjustments)
        via_record = process(test_image, "HSV", HSVAdjustment(s=0))

        assert via_bundle == via_record

    def test_mismatched_record_rejected(self, test_image):
        with pytest.raises(ValueError):
            process(test_image, "HSV", YCbCrAdjustment())

    def test_unsupported_type_rejected(self):
        with pytest.raises(ValueError):
            resolve_adjustment("HSV", (100, 100, 100))

    def test_unknown_model_rejected(self, test_image):
        with pytest.raises(ValueError):
            process(test_image, "LAB", YCbCrAdjustment())


class TestProcessAll:
    """Tests for rendering both models at once."""

    def test_both_models(self, test_image):
        results = process_all(test_image)

        assert set(results) == {ColorModel.YCBCR, ColorModel.HSV}
        for buffer in results.values():
            assert buffer.size == test_image.size

    def test_repeatable(self, test_image):
        adjustments = ColorAdjustments(YCbCrAdjustment(30, 60, 90), HSVAdjustment(90, 60, 30))

        first = process_all(test_image, adjustments)
        second = process_all(test_image, adjustments)

        assert first == second
