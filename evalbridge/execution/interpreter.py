# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Graph Interpreter

Reference execution backend that walks a GraphModel and executes each
operation with numpy.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import Dict, List, Mapping, Optional

import numpy as np

from ..core import DataType, DeviceDescriptor, GraphModel, Node, Operation, StorageFormat, TensorValue
from ..errors import ExecutionError, UnsupportedStorageFormatError
from .backend import ExecutionBackend
from .context import ExecutionContext
from .registry import OperatorRegistry

logger = logging.getLogger("evalbridge.execution.interpreter")


class GraphInterpreter(ExecutionBackend):
    """
    Executes graphs operation by operation on the host.

    The interpreter follows the usual session layout:
    1. Load inputs and constants into a fresh context
    2. Topologically sort operations
    3. Execute each operation with its registered kernel
    4. Package the requested outputs as dense values

    All run state lives in the per-call context, so one interpreter can
    serve concurrent callers.

    Example:
        interpreter = GraphInterpreter()
        results = interpreter.run(graph, {in_node: value}, {out_node: None}, device)
    """

    def __init__(self, strict: bool = True):
        """
        Args:
            strict: If True, refuse graphs with unsupported operations
                before running anything. If False, skip them with a
                warning; outputs they would produce are then missing.
        """
        from . import operators  # noqa: F401

        self.strict = strict

    @property
    def name(self) -> str:
        return "numpy"

    def run(
        self,
        graph: GraphModel,
        inputs: Mapping[Node, TensorValue],
        outputs: Mapping[Node, Optional[TensorValue]],
        device: DeviceDescriptor,
    ) -> Dict[Node, TensorValue]:
        order = self.execution_order(graph)
        unsupported = self.unsupported_operators(graph)
        if unsupported and self.strict:
            raise ExecutionError(
                f"Unsupported operators: {unsupported}. "
                "Set strict=False to skip these operators."
            )

        data_type = self._common_data_type(inputs, graph)
        ctx = ExecutionContext(graph.constants, data_type.numpy_dtype)

        for node, value in inputs.items():
            self._load_input(ctx, node, value, data_type)

        for op in order:
            self._execute_operation(ctx, op)

        results: Dict[Node, TensorValue] = {}
        for node in outputs:
            results[node] = self._collect_output(ctx, node, data_type, device)

        logger.debug(
            f"Ran graph '{graph.name}': {len(order)} operations, "
            f"{len(inputs)} inputs, {len(results)} outputs"
        )
        return results

    def execution_order(self, graph: GraphModel) -> List[Operation]:
        """
        Topologically sort operations for correct execution order.

        Uses Kahn's algorithm over producer/consumer tensor names; ties
        keep declaration order.
        """
        ops = list(graph.operations)
        producer: Dict[str, int] = {}
        for index, op in enumerate(ops):
            for out in op.outputs:
                producer[out] = index

        in_degree = [0] * len(ops)
        dependents: Dict[int, List[int]] = defaultdict(list)
        for index, op in enumerate(ops):
            for inp in op.inputs:
                if inp in producer and producer[inp] != index:
                    dependents[producer[inp]].append(index)
                    in_degree[index] += 1

        queue = deque(i for i in range(len(ops)) if in_degree[i] == 0)
        ordered: List[Operation] = []
        while queue:
            index = queue.popleft()
            ordered.append(ops[index])
            for dep in dependents[index]:
                in_degree[dep] -= 1
                if in_degree[dep] == 0:
                    queue.append(dep)

        if len(ordered) != len(ops):
            raise ExecutionError(f"Graph '{graph.name}' contains a cycle")
        return ordered

    def unsupported_operators(self, graph: GraphModel) -> List[str]:
        """Operation types in the graph with no registered kernel."""
        return sorted({op.op_type for op in graph.operations if not OperatorRegistry.is_supported(op.op_type)})

    @staticmethod
    def _common_data_type(inputs: Mapping[Node, TensorValue], graph: GraphModel) -> DataType:
        types = {value.data_type for value in inputs.values()}
        if len(types) > 1:
            raise ExecutionError(
                f"Inputs mix element types: {sorted(t.value for t in types)}"
            )
        if types:
            return types.pop()
        if graph.inputs:
            return graph.inputs[0].dtype
        return DataType.Float32

    @staticmethod
    def _load_input(ctx: ExecutionContext, node: Node, value: TensorValue, data_type: DataType) -> None:
        if value is None:
            raise ExecutionError(f"No value supplied for input '{node.name}'")
        if value.storage_format is not StorageFormat.Dense:
            raise UnsupportedStorageFormatError(value.storage_format.name)
        if value.sample_shape != node.shape:
            raise ExecutionError(
                f"Value for input '{node.name}' has sample shape "
                f"{list(value.sample_shape)}, expected {list(node.shape)}"
            )
        batch = np.array(value.as_sequences(), dtype=data_type.numpy_dtype, copy=True)
        ctx.set_tensor(node.name, batch, value.mask)

    @staticmethod
    def _execute_operation(ctx: ExecutionContext, op: Operation) -> None:
        if not OperatorRegistry.is_supported(op.op_type):
            logger.warning(f"Skipping unsupported operator '{op.op_type}' ({op.name})")
            return

        kernel = OperatorRegistry.get_kernel(op.op_type)
        try:
            kernel(ctx, list(op.inputs), list(op.outputs), dict(op.attrs))
        except KeyError as e:
            raise ExecutionError(
                f"Missing tensor {e}",
                op_type=op.op_type,
                op_name=op.name,
            ) from e

    @staticmethod
    def _collect_output(
        ctx: ExecutionContext,
        node: Node,
        data_type: DataType,
        device: DeviceDescriptor,
    ) -> TensorValue:
        if not ctx.has_tensor(node.name) or ctx.is_constant(node.name):
            raise ExecutionError(f"Output '{node.name}' was not computed")

        result = np.asarray(ctx.get_tensor(node.name), dtype=data_type.numpy_dtype)
        sample_size = node.shape.total_size()
        if result.ndim != 3 or result.shape[-1] != sample_size:
            raise ExecutionError(
                f"Output '{node.name}' has shape {result.shape}, "
                f"expected (sequences, samples, {sample_size})"
            )

        num_sequences, samples, _ = result.shape
        return TensorValue(
            shape=node.shape.append_shape([samples, num_sequences]),
            data=result,
            data_type=data_type,
            device=device,
            mask=ctx.get_mask(node.name),
        )
