"""
Port system for node connections.

Typed input/output ports carry PixelBuffers and channel views
between nodes in the graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from chromasplit.core.node import Node


class PortType(Enum):
    """Data carried by a port."""

    IMAGE = auto()  # PixelBuffer
    CHANNELS = auto()  # ChannelViews

    NUMBER = auto()  # float or int
    INTEGER = auto()  # int only
    STRING = auto()  # str

    ANY = auto()  # Accepts any type


# Source type -> destination types it may feed
_TYPE_COMPATIBILITY: dict[PortType, set[PortType]] = {
    PortType.IMAGE: {PortType.IMAGE, PortType.ANY},
    PortType.CHANNELS: {PortType.CHANNELS, PortType.ANY},
    PortType.NUMBER: {PortType.NUMBER, PortType.ANY},
    PortType.INTEGER: {PortType.INTEGER, PortType.NUMBER, PortType.ANY},
    PortType.STRING: {PortType.STRING, PortType.ANY},
    PortType.ANY: {PortType.ANY},
}


def types_compatible(source_type: PortType, dest_type: PortType) -> bool:
    """Check if source port type can connect to destination port type."""
    if dest_type == PortType.ANY:
        return True
    return dest_type in _TYPE_COMPATIBILITY.get(source_type, set())


@dataclass(eq=False)
class Port:
    """
    Base class for node ports.

    Attributes:
        name: Unique identifier within the node
        port_type: Data type this port accepts/produces
        description: Human-readable description
        node: Owning node (set when added to a node)
        multi: Whether multiple connections are allowed
    """

    name: str
    port_type: PortType = PortType.ANY
    description: str = ""
    node: Node | None = field(default=None, repr=False)
    multi: bool = False

    @property
    def full_name(self) -> str:
        """Fully qualified name (node.port)."""
        if self.node:
            return f"{self.node.id}.{self.name}"
        return self.name


@dataclass(eq=False)
class InputPort(Port):
    """
    Input port that receives data from a connected output port.

    Attributes:
        default: Value used when not connected
        required: Whether a value is needed for execution
        connection: The connected output port (None if disconnected)
        validator: Optional check applied to incoming values
    """

    default: Any = None
    required: bool = True
    connection: OutputPort | None = field(default=None, repr=False)
    validator: Callable[[Any], bool] | None = field(default=None, repr=False)

    @property
    def is_connected(self) -> bool:
        """Check if this input has a connection."""
        return self.connection is not None

    def get_value(self) -> Any:
        """Value from the connection, or the default if not connected."""
        if self.connection is not None:
            return self.connection.get_value()
        return self.default

    def validate(self, value: Any) -> bool:
        """Run the validator, if any, on a value."""
        if self.validator is not None:
            return self.validator(value)
        return True

    def can_connect(self, output: OutputPort, allow_replace: bool = True) -> bool:
        """
        Check if an output port can connect to this input.

        Args:
            output: The output port to check
            allow_replace: If True, an existing connection may be replaced
        """
        if not types_compatible(output.port_type, self.port_type):
            return False

        if self.is_connected and not self.multi and not allow_replace:
            return False

        # No self-loops
        if output.node is not None and output.node is self.node:
            return False

        return True


@dataclass(eq=False)
class OutputPort(Port):
    """
    Output port that caches the last value its node produced.

    Attributes:
        connections: Connected input ports
        _cached_value: Value from the last execution
        _cache_valid: Whether the cache is valid
    """

    connections: list[InputPort] = field(default_factory=list, repr=False)
    _cached_value: Any = field(default=None, repr=False)
    _cache_valid: bool = field(default=False, repr=False)

    def __post_init__(self) -> None:
        self.multi = True

    @property
    def is_connected(self) -> bool:
        """Check if this output has any connections."""
        return len(self.connections) > 0

    def get_value(self) -> Any:
        """Cached value from the last execution, or None."""
        return self._cached_value if self._cache_valid else None

    def set_value(self, value: Any) -> None:
        """Cache a newly produced value."""
        self._cached_value = value
        self._cache_valid = True

    def invalidate_cache(self) -> None:
        """Mark the cache as stale."""
        self._cache_valid = False

    def can_connect(self, input_port: InputPort) -> bool:
        """Check if this output can connect to an input port."""
        return input_port.can_connect(self)


def connect(output: OutputPort, input_port: InputPort) -> bool:
    """
    Connect an output port to an input port.

    Replaces any existing connection on the input.

    Returns:
        True if connection was made, False if invalid
    """
    if not output.can_connect(input_port):
        return False

    if input_port.is_connected and not input_port.multi:
        disconnect(input_port.connection, input_port)

    output.connections.append(input_port)
    input_port.connection = output

    return True


def disconnect(output: OutputPort, input_port: InputPort) -> bool:
    """
    Disconnect an output port from an input port.

    Returns:
        True if disconnection was made, False if not connected
    """
    if input_port.connection is not output:
        return False

    if input_port not in output.connections:
        return False

    output.connections.remove(input_port)
    input_port.connection = None

    return True


def disconnect_all(port: Port) -> int:
    """
    Disconnect all connections from a port.

    Returns:
        Number of connections removed
    """
    count = 0

    if isinstance(port, InputPort):
        if port.connection is not None:
            disconnect(port.connection, port)
            count = 1

    elif isinstance(port, OutputPort):
        # Copy since disconnect mutates the list
        for input_port in list(port.connections):
            disconnect(port, input_port)
            count += 1

    return count
