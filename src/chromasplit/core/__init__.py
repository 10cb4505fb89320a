"""Core data model and node system components."""

from chromasplit.core.adjustments import (
    ColorAdjustments,
    HSVAdjustment,
    YCbCrAdjustment,
    adjustment_for,
)
from chromasplit.core.data_types import HSV, RGB, ColorModel, PixelBuffer, YCbCr
from chromasplit.core.graph import Connection, NodeGraph
from chromasplit.core.node import Node, Parameter, ParameterType
from chromasplit.core.port import InputPort, OutputPort, Port, PortType
from chromasplit.core.registry import NodeRegistry, register_node

__all__ = [
    "ColorAdjustments",
    "HSVAdjustment",
    "YCbCrAdjustment",
    "adjustment_for",
    "HSV",
    "RGB",
    "ColorModel",
    "PixelBuffer",
    "YCbCr",
    "Connection",
    "NodeGraph",
    "Node",
    "Parameter",
    "ParameterType",
    "InputPort",
    "OutputPort",
    "Port",
    "PortType",
    "NodeRegistry",
    "register_node",
]
