# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Evaluation Executor

Runs one evaluation: resolves argument and output names, hands the
resulting node maps to an execution backend and writes the computed
values back under their names.
"""

import time
from typing import MutableMapping, Mapping, Optional, Union

from .core import DeviceDescriptor, GraphModel, Node, TensorValue
from .errors import ExecutionError, NotLoadedError
from .execution import ExecutionBackend, GraphInterpreter
from .observability import get_logger
from .registry import NodeRegistry


class EvaluationExecutor:
    """
    Orchestrates evaluate calls against a graph.

    Within one call, name resolution happens before execution, which
    happens before any output is written back. Nothing is retried. If the
    backend fails, ``outputs`` is left as it was; if it succeeds, every
    key is overwritten and none is added or removed.

    The executor holds no per-call state and takes no locks. Whether
    concurrent calls against one graph are safe depends on the backend;
    coordinating them is the caller's responsibility.

    Example:
        executor = EvaluationExecutor()
        outputs = {"out": None}
        executor.evaluate(graph, {"in": value}, outputs, DeviceDescriptor.cpu())
    """

    def __init__(self, backend: Optional[ExecutionBackend] = None):
        self.backend = backend if backend is not None else GraphInterpreter()

    def evaluate(
        self,
        graph: Optional[GraphModel],
        arguments: Mapping[str, TensorValue],
        outputs: MutableMapping[str, Optional[TensorValue]],
        device: Union[str, DeviceDescriptor] = DeviceDescriptor.cpu(),
    ) -> None:
        """
        Evaluate ``graph`` and store results into ``outputs``.

        Args:
            graph: Loaded graph.
            arguments: Input node name -> value.
            outputs: Output node name -> placeholder; overwritten in place.
            device: Placement for execution and results.

        Raises:
            NotLoadedError: If graph is None.
            NodeNotFoundError: If a key names no input (arguments) or no
                output (outputs) node.
            ExecutionError: If the backend fails or omits an output.
        """
        if graph is None:
            raise NotLoadedError(
                "No model is loaded. Please load the model first before evaluation."
            )

        device = DeviceDescriptor.parse(device)
        registry = NodeRegistry(graph)
        log = get_logger()

        arg_map: dict[Node, TensorValue] = {}
        for name, value in arguments.items():
            arg_map[registry.resolve_input(name)] = value

        out_map: dict[Node, Optional[TensorValue]] = {}
        for name, value in outputs.items():
            out_map[registry.resolve_output(name)] = value

        start = time.perf_counter()
        results = self.backend.run(graph, arg_map, out_map, device)
        elapsed_ms = (time.perf_counter() - start) * 1000

        missing = [node.name for node in out_map if node not in results]
        if missing:
            raise ExecutionError(f"Backend '{self.backend.name}' returned no value for {missing}")

        for node in out_map:
            outputs[node.name] = results[node]

        log.debug(
            "Evaluation complete",
            component="executor",
            model_name=graph.name,
            duration_ms=elapsed_ms,
            backend=self.backend.name,
            device=str(device),
            num_inputs=len(arg_map),
            num_outputs=len(out_map),
        )

    def __repr__(self) -> str:
        return f"EvaluationExecutor(backend={self.backend.name})"
