# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
evalbridge Execution Backends

Components:
- ExecutionBackend: Interface the evaluation layer calls into
- ExecutionContext: Per-run tensor storage
- OperatorRegistry: Maps operation types to kernel functions
- GraphInterpreter: numpy reference backend
"""

from .backend import ExecutionBackend
from .context import ExecutionContext
from .registry import OperatorRegistry
from .interpreter import GraphInterpreter

__all__ = [
    "ExecutionBackend",
    "ExecutionContext",
    "OperatorRegistry",
    "GraphInterpreter",
]
