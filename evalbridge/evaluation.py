# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Evaluation API

Single object wrapping model loading, node introspection, value
creation, evaluation and value extraction.

Example:
    import evalbridge

    ev = evalbridge.Evaluation.load("identity.json")
    value = ev.create_value("in", [[1.0, 2.0], [3.0, 4.0]])
    outputs = {"out": None}
    ev.evaluate({"in": value}, outputs)
    result = ev.copy_value_to("out", outputs["out"], [])
    # result == [[1.0, 2.0], [3.0, 4.0]]
"""

from pathlib import Path
from typing import Any, MutableMapping, Mapping, Optional, Sequence, Union

import numpy as np

from .config import EvalConfig
from .core import DeviceDescriptor, GraphModel, NodeKind, TensorValue
from .decoder import copy_value_to
from .encoder import create_value
from .errors import InvalidArgumentError, NotLoadedError
from .execution import ExecutionBackend, GraphInterpreter
from .executor import EvaluationExecutor
from .io import load_model
from .observability import get_logger
from .registry import NodeRegistry

DeviceLike = Union[str, DeviceDescriptor]


class Evaluation:
    """
    Evaluates one loaded model.

    The graph is a read-only handle fixed once loaded; there is no way to
    swap or clone it through this object. Evaluation adds no locking:
    calling evaluate() from several threads at once is safe only if the
    backend is, and serializing such calls is the caller's job. The
    default GraphInterpreter keeps no state between runs.
    """

    def __init__(
        self,
        graph: Optional[GraphModel] = None,
        config: Optional[EvalConfig] = None,
        backend: Optional[ExecutionBackend] = None,
    ):
        self.config = config if config is not None else EvalConfig.from_env()
        if backend is None:
            backend = GraphInterpreter(strict=self.config.strict)
        self._executor = EvaluationExecutor(backend)
        self._graph: Optional[GraphModel] = None
        self._registry: Optional[NodeRegistry] = None
        self._default_device = self.config.get_device()

        if self.config.verbose is not None:
            get_logger().set_verbosity(self.config.verbose)

        if graph is not None:
            self._attach(graph)

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        config: Optional[EvalConfig] = None,
        backend: Optional[ExecutionBackend] = None,
    ) -> "Evaluation":
        """Create an Evaluation for the model stored at ``path``."""
        evaluation = cls(config=config, backend=backend)
        evaluation.load_model(path)
        return evaluation

    def load_model(self, path: Union[str, Path], device: Optional[DeviceLike] = None) -> GraphModel:
        """
        Load the model at ``path``.

        Args:
            path: Model file.
            device: Default device for later calls on this Evaluation;
                keeps the configured one when omitted. The config itself
                is left untouched.

        Raises:
            ModelNotFoundError: If the file does not exist.
            InvalidArgumentError: If a model is already loaded.
        """
        if self._graph is not None:
            raise InvalidArgumentError(
                f"Model '{self._graph.name}' is already loaded; create a new Evaluation instead"
            )
        graph = load_model(path)
        if device is not None:
            self._default_device = DeviceDescriptor.parse(device)
        self._attach(graph)
        return graph

    def _attach(self, graph: GraphModel) -> None:
        self._graph = graph
        self._registry = NodeRegistry(graph)
        get_logger().info(
            "Model attached",
            component="evaluation",
            model_name=graph.name,
            inputs=len(graph.inputs),
            outputs=len(graph.outputs),
        )

    @property
    def graph(self) -> Optional[GraphModel]:
        return self._graph

    @property
    def device(self) -> DeviceDescriptor:
        """Device used when a call names none."""
        return self._default_device

    @property
    def is_loaded(self) -> bool:
        return self._graph is not None

    @property
    def registry(self) -> NodeRegistry:
        if self._registry is None:
            raise NotLoadedError(
                "No model is loaded. Please load the model first."
            )
        return self._registry

    def _device(self, device: Optional[DeviceLike]) -> DeviceDescriptor:
        if device is None:
            return self._default_device
        return DeviceDescriptor.parse(device)

    def get_nodes_shape(self, kind: NodeKind) -> dict[str, list[int]]:
        """Name -> dimension list for every node of ``kind``."""
        return {name: list(shape) for name, shape in self.registry.nodes_of_kind(kind).items()}

    def get_nodes_size(self, kind: NodeKind) -> dict[str, int]:
        """Name -> per-sample element count for every node of ``kind``."""
        return self.registry.sizes_of_kind(kind)

    def evaluate(
        self,
        arguments: Mapping[str, TensorValue],
        outputs: MutableMapping[str, Optional[TensorValue]],
        device: Optional[DeviceLike] = None,
    ) -> None:
        """Evaluate the model; see EvaluationExecutor.evaluate."""
        self._executor.evaluate(self._graph, arguments, outputs, self._device(device))

    def create_value(
        self,
        name: str,
        sequences: Sequence[Sequence[Any]],
        dtype: Any = np.float32,
        device: Optional[DeviceLike] = None,
    ) -> TensorValue:
        """Build a dense value for node ``name``; see encoder.create_value."""
        return create_value(self.registry, name, sequences, self._device(device), dtype)

    def copy_value_to(
        self,
        name: str,
        value: TensorValue,
        sequences: list,
        dtype: Any = np.float32,
    ) -> list:
        """Append the sequences in ``value`` to ``sequences``; see decoder.copy_value_to."""
        return copy_value_to(self.registry, name, value, sequences, dtype)

    def __repr__(self) -> str:
        name = self._graph.name if self._graph is not None else None
        return f"Evaluation(model={name!r}, device='{self._default_device}')"
