"""
Image loading node.

Decodes an image file into an RGBA PixelBuffer with Pillow.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from chromasplit.core.data_types import PixelBuffer
from chromasplit.core.node import Node, ParameterType
from chromasplit.core.port import PortType
from chromasplit.core.registry import register_node

logger = logging.getLogger(__name__)


def load_image(path: str | Path) -> PixelBuffer:
    """
    Decode an image file to an RGBA PixelBuffer.

    Any mode Pillow can read is converted to 8-bit RGBA; images without
    transparency get alpha 255.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If Pillow cannot decode the file
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")

    try:
        with Image.open(path) as img:
            rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
    except UnidentifiedImageError as exc:
        raise ValueError(f"Cannot decode image: {path}") from exc

    buffer = PixelBuffer.from_rgba(rgba)
    logger.info("Loaded %s (%dx%d)", path.name, buffer.width, buffer.height)
    return buffer


@register_node
class ImageLoadNode(Node):
    """
    Load an image from disk.

    Changing the path marks every downstream node dirty, so both the
    adjusted and the isolated views are rebuilt for the new image.
    """

    name = "Image Load"
    category = "IO"
    description = "Decode an image file to RGBA"
    icon = "image"
    _abstract = False

    def define_ports(self) -> None:
        """Define ports."""
        self.add_output(
            "image",
            port_type=PortType.IMAGE,
            description="Decoded RGBA image",
        )

    def define_parameters(self) -> None:
        """Define the file path parameter."""
        self.add_parameter(
            "path",
            param_type=ParameterType.PATH,
            default="",
            description="Image file to load",
        )

    def process(self) -> None:
        """Decode the file at ``path``."""
        path = self.get_parameter("path")
        if not path:
            raise ValueError("No image path set")
        self.set_output_value("image", load_image(path))
