# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Node

Named input or output terminal of a loaded graph, and the operations
that connect them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .types import DataType, ShapeDescriptor


class NodeKind(Enum):
    """Terminal kinds a graph exposes."""

    Input = "input"
    Output = "output"


@dataclass(frozen=True)
class Node:
    """
    A graph terminal with a fixed per-sample shape.

    Frozen and hashable so it can key the maps handed to execution
    backends.
    """

    name: str
    kind: NodeKind
    shape: ShapeDescriptor = field(default_factory=ShapeDescriptor)
    dtype: DataType = DataType.Float32

    def sample_size(self) -> int:
        """Number of elements in one sample."""
        return self.shape.total_size()

    def __repr__(self) -> str:
        return f"Node(name='{self.name}', kind={self.kind.value}, shape={list(self.shape)})"


@dataclass(frozen=True)
class Operation:
    """
    A single computation step inside the graph.

    ``inputs`` and ``outputs`` name tensors: graph inputs, constants or
    the outputs of earlier operations.
    """

    op_type: str
    name: str
    inputs: tuple[str, ...] = ()
    outputs: tuple[str, ...] = ()
    attrs: tuple[tuple[str, Any], ...] = ()

    def get_attr(self, key: str, default: Any = None) -> Any:
        """Get an attribute value."""
        return dict(self.attrs).get(key, default)

    def __repr__(self) -> str:
        return f"Operation(op='{self.op_type}', name='{self.name}')"
