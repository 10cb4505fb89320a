"""
Node graph and execution engine.

Holds nodes and their connections and runs them in topological order,
skipping nodes whose cached outputs are still valid.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from chromasplit.core.port import connect, disconnect

if TYPE_CHECKING:
    from chromasplit.core.node import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connection:
    """A link from one node's output port to another node's input port."""

    source_node_id: str
    source_port: str
    dest_node_id: str
    dest_port: str


class NodeGraph:
    """
    A graph of connected nodes with execution capability.

    Nodes execute in dependency order. A node that is not dirty keeps
    its cached outputs, so changing one node's parameters only re-runs
    that node and what lies downstream of it.

    Attributes:
        nodes: Nodes by ID
        name: Optional name for the graph
    """

    def __init__(self, name: str = "Untitled") -> None:
        self.nodes: dict[str, Node] = {}
        self.name: str = name
        self._execution_order: list[str] | None = None

    def add_node(self, node: Node) -> Node:
        """
        Add a node to the graph.

        Returns:
            The added node (for chaining)
        """
        if node.id in self.nodes:
            raise ValueError(f"Node with ID '{node.id}' already exists in graph")

        self.nodes[node.id] = node
        self._invalidate_order()
        return node

    def remove_node(self, node_or_id: Node | str) -> bool:
        """
        Remove a node, disconnecting all of its ports first.

        Returns:
            True if removed, False if not found
        """
        node_id = node_or_id if isinstance(node_or_id, str) else node_or_id.id

        if node_id not in self.nodes:
            return False

        node = self.nodes.pop(node_id)
        for output in node.outputs.values():
            for connected_input in output.connections:
                if connected_input.node is not None:
                    connected_input.node.mark_dirty()
        node.disconnect_all()
        self._invalidate_order()
        return True

    def get_node(self, node_id: str) -> Node | None:
        """Get a node by ID."""
        return self.nodes.get(node_id)

    def _resolve_ports(self, source_node, source_port, dest_node, dest_port):
        src_id = source_node if isinstance(source_node, str) else source_node.id
        dst_id = dest_node if isinstance(dest_node, str) else dest_node.id

        src_node = self.nodes.get(src_id)
        dst_node = self.nodes.get(dst_id)
        if src_node is None or dst_node is None:
            return None

        output = src_node.outputs.get(source_port)
        input_port = dst_node.inputs.get(dest_port)
        if output is None or input_port is None:
            return None

        return src_node, output, dst_node, input_port

    def connect(
        self,
        source_node: Node | str,
        source_port: str,
        dest_node: Node | str,
        dest_port: str,
    ) -> bool:
        """
        Connect an output port to an input port.

        Returns:
            True if connection was made, False if invalid or cyclic
        """
        resolved = self._resolve_ports(source_node, source_port, dest_node, dest_port)
        if resolved is None:
            return False
        src_node, output, dst_node, input_port = resolved

        if self._would_create_cycle(src_node, dst_node):
            return False

        if connect(output, input_port):
            dst_node.mark_dirty()
            self._invalidate_order()
            return True

        return False

    def disconnect(
        self,
        source_node: Node | str,
        source_port: str,
        dest_node: Node | str,
        dest_port: str,
    ) -> bool:
        """
        Disconnect an output port from an input port.

        Returns:
            True if disconnection was made, False if not connected
        """
        resolved = self._resolve_ports(source_node, source_port, dest_node, dest_port)
        if resolved is None:
            return False
        _, output, dst_node, input_port = resolved

        if disconnect(output, input_port):
            dst_node.mark_dirty()
            self._invalidate_order()
            return True

        return False

    def get_connections(self) -> list[Connection]:
        """All connections in the graph."""
        connections = []
        for node in self.nodes.values():
            for output_name, output_port in node.outputs.items():
                for input_port in output_port.connections:
                    if input_port.node is not None:
                        connections.append(
                            Connection(
                                source_node_id=node.id,
                                source_port=output_name,
                                dest_node_id=input_port.node.id,
                                dest_port=input_port.name,
                            )
                        )
        return connections

    def _would_create_cycle(self, source: Node, dest: Node) -> bool:
        """Check if connecting source->dest would create a cycle (BFS from dest)."""
        if source is dest:
            return True

        visited = set()
        queue = deque([dest])

        while queue:
            current = queue.popleft()
            if current.id in visited:
                continue
            visited.add(current.id)

            for output in current.outputs.values():
                for connected_input in output.connections:
                    if connected_input.node is not None:
                        if connected_input.node is source:
                            return True
                        queue.append(connected_input.node)

        return False

    def _invalidate_order(self) -> None:
        self._execution_order = None

    def _compute_execution_order(self) -> list[str]:
        """
        Topologically sort the nodes (Kahn's algorithm).

        Raises:
            ValueError: If graph contains a cycle
        """
        in_degree: dict[str, int] = {node_id: 0 for node_id in self.nodes}

        for node in self.nodes.values():
            for output in node.outputs.values():
                for connected_input in output.connections:
                    if connected_input.node is not None:
                        in_degree[connected_input.node.id] += 1

        queue = deque([nid for nid, degree in in_degree.items() if degree == 0])
        result = []

        while queue:
            node_id = queue.popleft()
            result.append(node_id)

            for output in self.nodes[node_id].outputs.values():
                for connected_input in output.connections:
                    if connected_input.node is not None:
                        target_id = connected_input.node.id
                        in_degree[target_id] -= 1
                        if in_degree[target_id] == 0:
                            queue.append(target_id)

        if len(result) != len(self.nodes):
            raise ValueError("Graph contains a cycle")

        return result

    def get_execution_order(self) -> list[str]:
        """Node IDs in topological order."""
        if self._execution_order is None:
            self._execution_order = self._compute_execution_order()
        return self._execution_order

    def execute(self, force: bool = False) -> dict[str, bool]:
        """
        Execute all nodes in the graph.

        Clean nodes are skipped unless ``force`` is set. When a node fails,
        everything downstream of it is reported as failed without running.

        Returns:
            Node ID -> success
        """
        results: dict[str, bool] = {}

        for node_id in self.get_execution_order():
            node = self.nodes[node_id]

            if node_id in results:
                continue

            if force:
                node.mark_dirty()

            success = node.execute()
            results[node_id] = success

            if not success:
                logger.warning("Node %s failed: %s", node_id, node.last_error)
                self._mark_downstream_failed(node, results)

        return results

    def _mark_downstream_failed(self, node: Node, results: dict[str, bool]) -> None:
        for output in node.outputs.values():
            for connected_input in output.connections:
                downstream = connected_input.node
                if downstream is not None and downstream.id not in results:
                    results[downstream.id] = False
                    self._mark_downstream_failed(downstream, results)

    def clear(self) -> None:
        """Remove all nodes from the graph."""
        for node in list(self.nodes.values()):
            node.disconnect_all()
        self.nodes.clear()
        self._invalidate_order()

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        """Iterate over nodes in execution order."""
        for node_id in self.get_execution_order():
            yield self.nodes[node_id]

    def __contains__(self, node_or_id: Node | str) -> bool:
        node_id = node_or_id if isinstance(node_or_id, str) else node_or_id.id
        return node_id in self.nodes

    def __repr__(self) -> str:
        return f"NodeGraph(name={self.name!r}, nodes={len(self.nodes)})"
