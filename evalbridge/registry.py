# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Node Registry

Resolves named input and output terminals of a GraphModel. Every other
component goes through here so unknown and duplicate names fail the same
way everywhere.
"""

import logging

from .core import GraphModel, Node, NodeKind, ShapeDescriptor
from .errors import DuplicateNameError, InvalidArgumentError, NodeNotFoundError

logger = logging.getLogger("evalbridge.registry")


class NodeRegistry:
    """
    Name lookup over the terminals of one graph.

    Example:
        registry = NodeRegistry(graph)
        registry.nodes_of_kind(NodeKind.Input)   # {"in": ShapeDescriptor([2])}
        registry.resolve("out").shape
    """

    def __init__(self, graph: GraphModel):
        self.graph = graph

    def _terminals(self, kind: NodeKind) -> tuple[Node, ...]:
        if kind is NodeKind.Input:
            return self.graph.inputs
        if kind is NodeKind.Output:
            return self.graph.outputs
        raise InvalidArgumentError(
            "Node kind must be 'NodeKind.Input' or 'NodeKind.Output'",
            parameter="kind",
            received=repr(kind),
        )

    def _unique(self, kind: NodeKind) -> dict[str, Node]:
        nodes: dict[str, Node] = {}
        for node in self._terminals(kind):
            if node.name in nodes:
                raise DuplicateNameError(node.name, kind.name)
            nodes[node.name] = node
        return nodes

    def nodes_of_kind(self, kind: NodeKind) -> dict[str, ShapeDescriptor]:
        """
        Shapes of every terminal of one kind.

        Raises:
            DuplicateNameError: If two terminals of the kind share a name.
            InvalidArgumentError: If kind is not Input or Output.
        """
        return {name: node.shape for name, node in self._unique(kind).items()}

    def sizes_of_kind(self, kind: NodeKind) -> dict[str, int]:
        """Per-sample element counts of every terminal of one kind."""
        return {name: node.shape.total_size() for name, node in self._unique(kind).items()}

    def resolve(self, name: str) -> Node:
        """
        Find a node by name, searching inputs before outputs.

        Raises:
            NodeNotFoundError: If neither kind has the name.
        """
        for kind in (NodeKind.Input, NodeKind.Output):
            for node in self._terminals(kind):
                if node.name == name:
                    return node
        raise NodeNotFoundError(name, available=self._names(NodeKind.Input) + self._names(NodeKind.Output))

    def resolve_input(self, name: str) -> Node:
        return self._resolve_kind(name, NodeKind.Input)

    def resolve_output(self, name: str) -> Node:
        return self._resolve_kind(name, NodeKind.Output)

    def _resolve_kind(self, name: str, kind: NodeKind) -> Node:
        for node in self._terminals(kind):
            if node.name == name:
                return node
        logger.debug(f"Lookup of {kind.value} '{name}' failed")
        raise NodeNotFoundError(name, kind=kind.name, available=self._names(kind))

    def _names(self, kind: NodeKind) -> list[str]:
        return [node.name for node in self._terminals(kind)]

    def __repr__(self) -> str:
        return f"NodeRegistry(graph='{self.graph.name}')"
