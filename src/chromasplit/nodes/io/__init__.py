"""Image input nodes."""

from chromasplit.nodes.io.image_load import ImageLoadNode, load_image

__all__ = ["ImageLoadNode", "load_image"]
