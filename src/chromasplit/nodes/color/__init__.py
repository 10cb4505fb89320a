"""Color model conversion, adjustment and channel isolation."""

from chromasplit.nodes.color.adjust_node import ColorAdjustNode
from chromasplit.nodes.color.isolate_node import ChannelIsolateNode
from chromasplit.nodes.color.isolation import ChannelViews, isolate
from chromasplit.nodes.color.pipeline import apply_adjustment, process, process_all

__all__ = [
    "ColorAdjustNode",
    "ChannelIsolateNode",
    "ChannelViews",
    "isolate",
    "apply_adjustment",
    "process",
    "process_all",
]
