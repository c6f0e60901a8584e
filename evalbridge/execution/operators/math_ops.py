# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Mathematical Operators

Implements:
- Identity: Copy
- Add: Element-wise addition
- Sub: Element-wise subtraction
- Mul: Element-wise multiplication
- Times: Per-sample linear map with a weight matrix

Tensors are ``(sequences, samples, sample_size)`` arrays; constants
broadcast against the trailing sample axis.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, TYPE_CHECKING
import numpy as np

from ...errors import ExecutionError
from ..registry import OperatorRegistry

if TYPE_CHECKING:
    from ..context import ExecutionContext


def propagate_mask(ctx: "ExecutionContext", inputs: List[str]) -> Optional[Tuple[int, ...]]:
    """Mask of the first non-constant input."""
    for name in inputs:
        if not ctx.is_constant(name):
            return ctx.get_mask(name)
    return None


def _binary(ctx: "ExecutionContext", inputs: List[str], op_type: str):
    if len(inputs) != 2:
        raise ExecutionError(f"{op_type} takes 2 inputs, got {len(inputs)}", op_type=op_type)
    a = ctx.get_tensor(inputs[0])
    b = ctx.get_tensor(inputs[1])
    try:
        np.broadcast_shapes(a.shape, b.shape)
    except ValueError:
        raise ExecutionError(
            "Shapes not broadcastable",
            op_type=op_type,
            input_shapes=[a.shape, b.shape],
        ) from None
    return a, b


@OperatorRegistry.register("Identity")
def execute_identity(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """Y = X"""
    X = ctx.get_tensor(inputs[0])
    ctx.set_tensor(outputs[0], np.array(X, copy=True), propagate_mask(ctx, inputs))


@OperatorRegistry.register("Add", aliases=["Plus"])
def execute_add(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """C = A + B"""
    A, B = _binary(ctx, inputs, "Add")
    ctx.set_tensor(outputs[0], A + B, propagate_mask(ctx, inputs))


@OperatorRegistry.register("Sub", aliases=["Minus"])
def execute_sub(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """C = A - B"""
    A, B = _binary(ctx, inputs, "Sub")
    ctx.set_tensor(outputs[0], A - B, propagate_mask(ctx, inputs))


@OperatorRegistry.register("Mul", aliases=["ElementTimes"])
def execute_mul(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """C = A * B"""
    A, B = _binary(ctx, inputs, "Mul")
    ctx.set_tensor(outputs[0], A * B, propagate_mask(ctx, inputs))


@OperatorRegistry.register("Times")
def execute_times(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """
    Per-sample linear map.

    Y[n, t] = W @ X[n, t], with W of shape (out_size, in_size).
    """
    X = ctx.get_tensor(inputs[0])
    W = ctx.get_tensor(inputs[1])

    if W.ndim != 2 or W.shape[1] != X.shape[-1]:
        raise ExecutionError(
            "Weight must be (out_size, in_size) matching the sample size",
            op_type="Times",
            input_shapes=[X.shape, W.shape],
        )

    ctx.set_tensor(outputs[0], np.matmul(X, W.T), propagate_mask(ctx, inputs))
