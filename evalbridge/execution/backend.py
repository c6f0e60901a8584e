# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Execution Backend Interface

The contract the evaluation layer uses to run a graph. Numeric execution
is entirely the backend's business; the evaluation layer only resolves
names and moves values in and out.
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from ..core import DeviceDescriptor, GraphModel, Node, TensorValue


class ExecutionBackend(ABC):
    """
    Abstract base class for graph execution backends.

    Contract:
    - run() receives every requested output node, with the caller's
      placeholder value (possibly None), and returns a value for each.
    - Returned values use the dense layout with rank = node rank + 2.
    - run() must not mutate the graph.

    Thread Safety: left to implementations. The evaluation layer adds
    no locking of its own.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique identifier for this backend."""
        pass

    @abstractmethod
    def run(
        self,
        graph: GraphModel,
        inputs: Mapping[Node, TensorValue],
        outputs: Mapping[Node, Optional[TensorValue]],
        device: DeviceDescriptor,
    ) -> dict[Node, TensorValue]:
        """
        Execute the graph.

        Args:
            graph: Loaded graph.
            inputs: Value for each input node.
            outputs: Requested output nodes.
            device: Placement for computed values.

        Returns:
            Computed value for every node in ``outputs``.
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}({self.name})>"
