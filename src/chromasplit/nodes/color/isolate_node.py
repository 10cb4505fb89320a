"""
Channel isolation node.

Splits an image into its six YCbCr and HSV channel views.
"""

from chromasplit.core.data_types import PixelBuffer
from chromasplit.core.node import Node
from chromasplit.core.port import PortType
from chromasplit.core.registry import register_node
from chromasplit.nodes.color.isolation import CHANNEL_DESCRIPTIONS, CHANNEL_NAMES, isolate


@register_node
class ChannelIsolateNode(Node):
    """
    Render every YCbCr and HSV channel on its own.

    Has no parameters, so once executed it only runs again when its
    input image changes.
    """

    name = "Channel Isolate"
    category = "Color"
    description = "Split image into Y, Cb, Cr, H, S and V views"
    icon = "layers"
    _abstract = False

    def define_ports(self) -> None:
        """Define ports."""
        self.add_input(
            "image",
            port_type=PortType.IMAGE,
            description="Input image",
            required=True,
            validator=lambda value: isinstance(value, PixelBuffer),
        )
        self.add_output(
            "channels",
            port_type=PortType.CHANNELS,
            description="All six channel views",
        )
        for channel in CHANNEL_NAMES:
            self.add_output(
                channel,
                port_type=PortType.IMAGE,
                description=CHANNEL_DESCRIPTIONS[channel],
            )

    def process(self) -> None:
        """Isolate the input's channels."""
        buffer: PixelBuffer = self.get_input_value("image")

        views = isolate(buffer)
        self.set_output_value("channels", views)
        for channel, view in views:
            self.set_output_value(channel, view)
