"""
Node registration system.

Global registry for discovering and instantiating nodes by class name,
plus a decorator for registration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Type

if TYPE_CHECKING:
    from chromasplit.core.node import Node


class NodeRegistry:
    """
    Global registry of available node types.

    Usage:
        @register_node
        class MyNode(Node):
            ...

        node_class = NodeRegistry.get("MyNode")
        node = NodeRegistry.create("MyNode")
    """

    _registry: dict[str, Type[Node]] = {}
    _categories: dict[str, list[str]] = {}

    @classmethod
    def register(cls, node_class: Type[Node]) -> Type[Node]:
        """
        Register a node class under its class name.

        Returns:
            The registered class (for decorator use)
        """
        name = node_class.__name__
        cls._registry[name] = node_class

        category = getattr(node_class, "category", "Utility")
        names = cls._categories.setdefault(category, [])
        if name not in names:
            names.append(name)

        return node_class

    @classmethod
    def unregister(cls, node_class_or_name: Type[Node] | str) -> bool:
        """
        Unregister a node class.

        Returns:
            True if unregistered, False if not found
        """
        name = (
            node_class_or_name
            if isinstance(node_class_or_name, str)
            else node_class_or_name.__name__
        )

        if name not in cls._registry:
            return False

        category = getattr(cls._registry.pop(name), "category", "Utility")
        if name in cls._categories.get(category, []):
            cls._categories[category].remove(name)

        return True

    @classmethod
    def get(cls, name: str) -> Type[Node] | None:
        """Get a node class by name."""
        return cls._registry.get(name)

    @classmethod
    def create(cls, name: str) -> Node | None:
        """Create a node instance by class name, or None if unknown."""
        node_class = cls._registry.get(name)
        if node_class is not None:
            return node_class()
        return None

    @classmethod
    def get_categories(cls) -> dict[str, list[str]]:
        """Node names grouped by category."""
        return {cat: list(nodes) for cat, nodes in cls._categories.items()}

    @classmethod
    def list_all(cls) -> list[str]:
        """All registered node names."""
        return list(cls._registry.keys())

    @classmethod
    def get_node_info(cls, name: str) -> dict | None:
        """Display metadata for a registered node, or None if unknown."""
        node_class = cls._registry.get(name)
        if node_class is None:
            return None

        return {
            "name": getattr(node_class, "name", name),
            "class_name": name,
            "category": getattr(node_class, "category", "Utility"),
            "description": getattr(node_class, "description", ""),
        }


def register_node(cls: Type[Node]) -> Type[Node]:
    """
    Decorator to register a node class.

    Usage:
        @register_node
        class MyNode(Node):
            name = "My Node"
            category = "Color"
    """
    return NodeRegistry.register(cls)
