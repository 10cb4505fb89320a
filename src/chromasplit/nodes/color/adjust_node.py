"""
Color adjustment node.

Wraps the pixel pipeline: pick a color model, set three channel sliders,
get the re-rendered image.
"""

from chromasplit.core.adjustments import PERCENT_MAX, PERCENT_MIN, adjustment_for
from chromasplit.core.data_types import ColorModel, PixelBuffer
from chromasplit.core.node import Node, ParameterType
from chromasplit.core.port import PortType
from chromasplit.core.registry import register_node
from chromasplit.nodes.color.pipeline import process

# Slider labels per model, in channel order
CHANNEL_LABELS = {
    ColorModel.YCBCR: ("Y", "Cb", "Cr"),
    ColorModel.HSV: ("H", "S", "V"),
}


@register_node
class ColorAdjustNode(Node):
    """
    Scale the channels of an image in YCbCr or HSV.

    Each slider is a percentage of the original channel. 100 leaves the
    channel alone; 0 replaces it with the channel's neutral value.
    """

    name = "Color Adjust"
    category = "Color"
    description = "Scale YCbCr or HSV channels by percentage"
    icon = "sliders"
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
            "image",
            port_type=PortType.IMAGE,
            description="Adjusted image",
        )

    def define_parameters(self) -> None:
        """Define model and slider parameters."""
        self.add_parameter(
            "model",
            param_type=ParameterType.ENUM,
            default=ColorModel.YCBCR.value,
            choices=[model.value for model in ColorModel],
            description="Color model to adjust in",
        )
        for i in range(3):
            self.add_parameter(
                f"channel_{i}",
                param_type=ParameterType.INT,
                default=PERCENT_MAX,
                min_value=PERCENT_MIN,
                max_value=PERCENT_MAX,
                step=1,
                description=f"Scale of channel {i} (Y/H, Cb/S, Cr/V) in percent",
            )

    @property
    def adjustment(self):
        """The current sliders as an adjustment record."""
        factors = [self.get_parameter(f"channel_{i}") for i in range(3)]
        return adjustment_for(self.get_parameter("model"), *factors)

    def channel_labels(self) -> tuple[str, str, str]:
        """Labels for the three sliders under the current model."""
        return CHANNEL_LABELS[ColorModel.parse(self.get_parameter("model"))]

    def process(self) -> None:
        """Run the pixel pipeline on the input."""
        buffer: PixelBuffer = self.get_input_value("image")
        model = self.get_parameter("model")
        self.set_output_value("image", process(buffer, model, self.adjustment))
