# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Operator Registry

Maps operation types to their numpy implementations.
Uses a decorator-based registration pattern for extensibility.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import ExecutionContext


# Signature: (context: ExecutionContext, inputs: List[str],
#             outputs: List[str], attrs: Dict) -> None
OperatorFunc = Callable[["ExecutionContext", List[str], List[str], Dict], None]


class OperatorRegistry:
    """
    Registry for operator implementations.

    Example:
        @OperatorRegistry.register("Add")
        def execute_add(ctx, inputs, outputs, attrs):
            a = ctx.get_tensor(inputs[0])
            b = ctx.get_tensor(inputs[1])
            ctx.set_tensor(outputs[0], a + b)

        kernel = OperatorRegistry.get_kernel("Add")
        kernel(ctx, ["a", "b"], ["c"], {})
    """

    _registry: Dict[str, OperatorFunc] = {}

    @classmethod
    def register(
        cls,
        op_type: str,
        aliases: Optional[List[str]] = None,
    ) -> Callable[[OperatorFunc], OperatorFunc]:
        """
        Decorator to register an operator implementation.

        Args:
            op_type: Operation type (e.g., "Times", "Relu").
            aliases: Alternative names for the operator.
        """

        def decorator(func: OperatorFunc) -> OperatorFunc:
            cls._registry[op_type] = func
            for alias in aliases or []:
                cls._registry[alias] = func
            return func

        return decorator

    @classmethod
    def get_kernel(cls, op_type: str) -> OperatorFunc:
        """
        Get the kernel function for an operator.

        Raises:
            KeyError: If operator not registered.
        """
        if op_type not in cls._registry:
            raise KeyError(
                f"Operator '{op_type}' not registered. "
                f"Supported operators: {cls.list_operators()}"
            )
        return cls._registry[op_type]

    @classmethod
    def is_supported(cls, op_type: str) -> bool:
        """Check if an operator is supported."""
        return op_type in cls._registry

    @classmethod
    def list_operators(cls) -> List[str]:
        """List all registered operators."""
        return sorted(cls._registry.keys())
