"""
Node base class and parameters.

A node owns typed input/output ports and a set of parameters, and turns
inputs into outputs in ``process()``. Outputs are cached on the ports
until the node is marked dirty.
"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar

from chromasplit.core.port import InputPort, OutputPort, PortType, disconnect_all

logger = logging.getLogger(__name__)


class ParameterType(Enum):
    """Kinds of node parameters (each maps to a control in a UI)."""

    INT = auto()
    FLOAT = auto()
    BOOL = auto()
    STRING = auto()
    ENUM = auto()
    PATH = auto()


@dataclass
class Parameter:
    """
    A named, typed node setting.

    Numeric values are clamped to [min_value, max_value]; enum values
    must be one of ``choices``.

    Attributes:
        name: Identifier within the node
        param_type: Kind of value
        default: Initial value
        value: Current value
        min_value: Lower bound for numeric parameters
        max_value: Upper bound for numeric parameters
        step: Suggested increment for numeric controls
        choices: Allowed values for ENUM parameters
        description: Human-readable description
    """

    name: str
    param_type: ParameterType
    default: Any = None
    value: Any = None
    min_value: float | None = None
    max_value: float | None = None
    step: float | None = None
    choices: list[str] = field(default_factory=list)
    description: str = ""

    def __post_init__(self) -> None:
        self.value = self.coerce(self.default if self.value is None else self.value)

    def coerce(self, value: Any) -> Any:
        """
        Convert a value to this parameter's type and range.

        Raises:
            ValueError: If the value cannot represent this parameter
        """
        if value is None:
            return None

        if self.param_type in (ParameterType.INT, ParameterType.FLOAT):
            number = float(value)
            if self.min_value is not None:
                number = max(self.min_value, number)
            if self.max_value is not None:
                number = min(self.max_value, number)
            return int(round(number)) if self.param_type == ParameterType.INT else number

        if self.param_type == ParameterType.BOOL:
            return bool(value)

        if self.param_type == ParameterType.ENUM:
            value = str(value)
            if self.choices and value not in self.choices:
                raise ValueError(
                    f"Invalid value {value!r} for {self.name}; expected one of {self.choices}"
                )
            return value

        return str(value)

    def set(self, value: Any) -> bool:
        """
        Set a new value.

        Returns:
            True if the stored value changed
        """
        value = self.coerce(value)
        if value == self.value:
            return False
        self.value = value
        return True

    def reset(self) -> bool:
        """Restore the default value."""
        return self.set(self.default)


class Node(ABC):
    """
    Base class for all processing nodes.

    Subclasses set the class attributes and implement ``define_ports()``,
    ``define_parameters()`` and ``process()``.

    Example:
        @register_node
        class InvertNode(Node):
            name = "Invert"
            category = "Color"

            def define_ports(self) -> None:
                self.add_input("image", PortType.IMAGE, "Input image")
                self.add_output("image", PortType.IMAGE, "Inverted image")

            def process(self) -> None:
                ...
    """

    name: ClassVar[str] = "Node"
    category: ClassVar[str] = "Utility"
    description: ClassVar[str] = ""
    icon: ClassVar[str | None] = None
    _abstract: ClassVar[bool] = True

    def __init__(self) -> None:
        self.id: str = f"{type(self).__name__}_{uuid.uuid4().hex[:8]}"
        self.inputs: dict[str, InputPort] = {}
        self.outputs: dict[str, OutputPort] = {}
        self.parameters: dict[str, Parameter] = {}
        self.last_error: str | None = None
        self._dirty = True

        self.define_ports()
        self.define_parameters()

    # -------------------------------------------------------------------------
    # Definition
    # -------------------------------------------------------------------------

    @abstractmethod
    def define_ports(self) -> None:
        """Create the node's ports."""

    def define_parameters(self) -> None:
        """Create the node's parameters (none by default)."""

    @abstractmethod
    def process(self) -> None:
        """Read inputs and parameters, compute, and set outputs."""

    def add_input(
        self,
        name: str,
        port_type: PortType = PortType.ANY,
        description: str = "",
        default: Any = None,
        required: bool = True,
        validator=None,
    ) -> InputPort:
        """Add an input port."""
        port = InputPort(
            name=name,
            port_type=port_type,
            description=description,
            node=self,
            default=default,
            required=required,
            validator=validator,
        )
        self.inputs[name] = port
        return port

    def add_output(
        self,
        name: str,
        port_type: PortType = PortType.ANY,
        description: str = "",
    ) -> OutputPort:
        """Add an output port."""
        port = OutputPort(
            name=name,
            port_type=port_type,
            description=description,
            node=self,
        )
        self.outputs[name] = port
        return port

    def add_parameter(
        self,
        name: str,
        param_type: ParameterType,
        default: Any = None,
        **kwargs: Any,
    ) -> Parameter:
        """Add a parameter; extra keyword arguments go to ``Parameter``."""
        param = Parameter(name=name, param_type=param_type, default=default, **kwargs)
        self.parameters[name] = param
        return param

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def get_input_value(self, name: str) -> Any:
        """Get the value arriving at an input port."""
        return self.inputs[name].get_value()

    def set_input(self, name: str, value: Any) -> None:
        """Feed a value to an unconnected input and mark the node dirty."""
        self.inputs[name].default = value
        self.mark_dirty()

    def set_output_value(self, name: str, value: Any) -> None:
        """Publish a value on an output port."""
        self.outputs[name].set_value(value)

    def get_parameter(self, name: str) -> Any:
        """Get a parameter's current value."""
        return self.parameters[name].value

    def set_parameter(self, name: str, value: Any) -> None:
        """
        Set a parameter, marking the node dirty if the value changed.

        Raises:
            KeyError: If the node has no such parameter
        """
        if name not in self.parameters:
            raise KeyError(f"{type(self).__name__} has no parameter {name!r}")
        if self.parameters[name].set(value):
            self.mark_dirty()

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    @property
    def is_dirty(self) -> bool:
        """Whether cached outputs are stale."""
        return self._dirty

    def mark_dirty(self) -> None:
        """Invalidate this node's outputs and everything downstream."""
        self._dirty = True
        for output in self.outputs.values():
            output.invalidate_cache()
            for connected_input in output.connections:
                if connected_input.node is not None and connected_input.node is not self:
                    connected_input.node.mark_dirty()

    def validate_inputs(self) -> None:
        """
        Check required inputs are present and accepted by their validators.

        Raises:
            ValueError: On a missing or rejected input
        """
        for port in self.inputs.values():
            value = port.get_value()
            if value is None:
                if port.required:
                    raise ValueError(f"Missing required input: {port.name}")
                continue
            if not port.validate(value):
                raise ValueError(f"Invalid value on input: {port.name}")

    def execute(self) -> bool:
        """
        Run the node if it is dirty.

        Exceptions from ``process()`` are logged and stored in
        ``last_error``; the graph uses the return value to skip
        downstream nodes.

        Returns:
            True on success (or when nothing needed recomputing)
        """
        if not self._dirty:
            return True

        try:
            self.validate_inputs()
            self.process()
        except Exception as exc:
            self.last_error = str(exc)
            for output in self.outputs.values():
                output.invalidate_cache()
            logger.exception("Node %s failed", self.id)
            return False

        self.last_error = None
        self._dirty = False
        return True

    def disconnect_all(self) -> int:
        """Remove every connection to or from this node."""
        count = 0
        for port in list(self.inputs.values()) + list(self.outputs.values()):
            count += disconnect_all(port)
        return count

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
