"""
Tests for decoding image files into PixelBuffers.
"""

import numpy as np
import pytest
from PIL import Image

from chromasplit.nodes.io import ImageLoadNode, load_image


class TestLoadImage:
    """Tests for load_image()."""

    def test_rgba_png(self, tmp_path):
        rgba = np.random.randint(0, 256, (5, 7, 4), dtype=np.uint8)
        path = tmp_path / "rgba.png"
        Image.fromarray(rgba).save(path)

        buffer = load_image(path)

        assert buffer.size == (7, 5)
        np.testing.assert_array_equal(buffer.to_rgba(), rgba)

    def test_rgb_gets_opaque_alpha(self, tmp_path):
        path = tmp_path / "rgb.png"
        Image.new("RGB", (2, 3), (10, 20, 30)).save(path)

        buffer = load_image(path)

        assert buffer.pixel(1, 2) == (10, 20, 30, 255)
        assert np.all(buffer.alpha == 255)

    def test_greyscale_expanded(self, tmp_path):
        path = tmp_path / "grey.png"
        Image.new("L", (2, 2), 90).save(path)

        assert load_image(str(path)).pixel(0, 0) == (90, 90, 90, 255)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "nope.png")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "junk.png"
        path.write_bytes(b"not an image at all")

        with pytest.raises(ValueError, match="Cannot decode"):
            load_image(path)


class TestImageLoadNode:
    """Tests for ImageLoadNode."""

    def test_loads_path(self, tmp_path):
        path = tmp_path / "blue.png"
        Image.new("RGB", (4, 4), (0, 0, 255)).save(path)
        node = ImageLoadNode()
        node.set_parameter("path", path)

        assert node.execute()
        assert node.outputs["image"].get_value().pixel(0, 0) == (0, 0, 255, 255)

    def test_empty_path_fails(self):
        node = ImageLoadNode()

        assert not node.execute()
        assert node.last_error == "No image path set"
