# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
GraphModel

Read-only handle to a loaded computation graph.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional

import numpy as np

from .node import Node, NodeKind, Operation
from .types import DataType, ShapeDescriptor


@dataclass(frozen=True)
class GraphModel:
    """
    An immutable loaded computation graph.

    Owns its input and output terminals, the ordered operations and the
    constant tensors they reference. This layer never mutates or clones
    a GraphModel; one instance may be shared by any number of holders.

    Terminal names are not checked for uniqueness here. Duplicates are
    reported by NodeRegistry when the terminals are enumerated.
    """

    name: str = ""
    inputs: tuple[Node, ...] = ()
    outputs: tuple[Node, ...] = ()
    operations: tuple[Operation, ...] = ()
    constants: Mapping[str, np.ndarray] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "inputs", tuple(self.inputs))
        object.__setattr__(self, "outputs", tuple(self.outputs))
        object.__setattr__(self, "operations", tuple(self.operations))

        frozen = {}
        for key, value in dict(self.constants).items():
            arr = np.array(value, copy=True)
            arr.setflags(write=False)
            frozen[key] = arr
        object.__setattr__(self, "constants", MappingProxyType(frozen))

    def get_constant(self, name: str) -> Optional[np.ndarray]:
        """Get constant data."""
        return self.constants.get(name)

    def __repr__(self) -> str:
        return (
            f"GraphModel(name='{self.name}', inputs={len(self.inputs)}, "
            f"outputs={len(self.outputs)}, operations={len(self.operations)})"
        )


class GraphBuilder:
    """
    Convenience builder for GraphModel.

    Example:
        builder = GraphBuilder("identity")
        builder.add_input("in", [2])
        builder.add_output("out", [2])
        builder.add_operation("Identity", "copy", ["in"], ["out"])
        graph = builder.build()
    """

    def __init__(self, name: str = "", dtype: DataType = DataType.Float32):
        self.name = name
        self.dtype = dtype
        self._inputs: list[Node] = []
        self._outputs: list[Node] = []
        self._operations: list[Operation] = []
        self._constants: dict[str, np.ndarray] = {}

    def add_input(self, name: str, shape: Iterable[int]) -> Node:
        node = Node(name, NodeKind.Input, ShapeDescriptor(shape), self.dtype)
        self._inputs.append(node)
        return node

    def add_output(self, name: str, shape: Iterable[int]) -> Node:
        node = Node(name, NodeKind.Output, ShapeDescriptor(shape), self.dtype)
        self._outputs.append(node)
        return node

    def add_operation(
        self,
        op_type: str,
        name: str,
        inputs: Iterable[str],
        outputs: Iterable[str],
        attrs: Optional[dict[str, Any]] = None,
    ) -> Operation:
        op = Operation(
            op_type=op_type,
            name=name,
            inputs=tuple(inputs),
            outputs=tuple(outputs),
            attrs=tuple(sorted((attrs or {}).items())),
        )
        self._operations.append(op)
        return op

    def add_constant(self, name: str, data: Any) -> None:
        """Add constant tensor data (weights, biases, etc.)."""
        self._constants[name] = np.asarray(data, dtype=self.dtype.numpy_dtype)

    def build(self) -> GraphModel:
        return GraphModel(
            name=self.name,
            inputs=tuple(self._inputs),
            outputs=tuple(self._outputs),
            operations=tuple(self._operations),
            constants=dict(self._constants),
        )
