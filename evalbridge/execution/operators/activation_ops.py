# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Activation Operators

Implements:
- Relu: Rectified Linear Unit
- Sigmoid: Sigmoid activation
- Tanh: Hyperbolic tangent
"""

from __future__ import annotations

from typing import Any, Dict, List, TYPE_CHECKING
import numpy as np

from ..registry import OperatorRegistry
from .math_ops import propagate_mask

if TYPE_CHECKING:
    from ..context import ExecutionContext


@OperatorRegistry.register("Relu", aliases=["ReLU"])
def execute_relu(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """Y = max(0, X)"""
    X = ctx.get_tensor(inputs[0])
    ctx.set_tensor(outputs[0], np.maximum(X, 0).astype(X.dtype), propagate_mask(ctx, inputs))


@OperatorRegistry.register("Sigmoid")
def execute_sigmoid(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """Y = 1 / (1 + exp(-X))"""
    X = ctx.get_tensor(inputs[0])
    result = 1.0 / (1.0 + np.exp(-X))
    ctx.set_tensor(outputs[0], result.astype(X.dtype), propagate_mask(ctx, inputs))


@OperatorRegistry.register("Tanh")
def execute_tanh(
    ctx: "ExecutionContext",
    inputs: List[str],
    outputs: List[str],
    attrs: Dict[str, Any],
) -> None:
    """Y = tanh(X)"""
    X = ctx.get_tensor(inputs[0])
    ctx.set_tensor(outputs[0], np.tanh(X), propagate_mask(ctx, inputs))
