# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Execution Context

Holds tensor buffers while the interpreter walks a graph. One context is
created per run, so no state is shared between concurrent runs.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np


class ExecutionContext:
    """
    Named tensor storage for a single graph run.

    Every tensor is an array of shape ``(sequences, samples, sample_size)``
    paired with an optional mask of valid samples per sequence. Constants
    come from the graph and are returned as stored.

    Example:
        ctx = ExecutionContext(constants=graph.constants, dtype=np.float32)
        ctx.set_tensor("in", batch, mask=(2, 1))
        x = ctx.get_tensor("in")
    """

    def __init__(self, constants=None, dtype: np.dtype = np.dtype(np.float32)):
        self.dtype = np.dtype(dtype)
        self._tensors: Dict[str, np.ndarray] = {}
        self._masks: Dict[str, Optional[Tuple[int, ...]]] = {}
        self._constants = dict(constants or {})

    def set_tensor(self, name: str, value: np.ndarray, mask: Optional[Tuple[int, ...]] = None) -> None:
        """Store a tensor value."""
        self._tensors[name] = value
        self._masks[name] = mask

    def get_tensor(self, name: str) -> np.ndarray:
        """
        Retrieve a tensor value or constant.

        Raises:
            KeyError: If tensor not found.
        """
        if name in self._tensors:
            return self._tensors[name]
        if name in self._constants:
            return np.asarray(self._constants[name], dtype=self.dtype)
        raise KeyError(f"Tensor '{name}' not found in execution context")

    def get_mask(self, name: str) -> Optional[Tuple[int, ...]]:
        """Mask of a computed tensor; constants have none."""
        return self._masks.get(name)

    def has_tensor(self, name: str) -> bool:
        """Check if tensor exists in context."""
        return name in self._tensors or name in self._constants

    def is_constant(self, name: str) -> bool:
        return name not in self._tensors and name in self._constants

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(tensors={len(self._tensors)}, "
            f"constants={len(self._constants)}, dtype={self.dtype})"
        )
