# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
evalbridge: Sequence Tensor Exchange for Graph Evaluation

Evaluates a loaded computation graph against named inputs and converts
between host-side batches of variable-length sequences and dense tensor
values.

Example:
    import evalbridge

    ev = evalbridge.Evaluation.load("model.json")
    value = ev.create_value("in", [[1.0, 2.0], [3.0, 4.0]])
    outputs = {"out": None}
    ev.evaluate({"in": value}, outputs)
    result = ev.copy_value_to("out", outputs["out"], [])
"""

__version__ = "0.1.0"
__author__ = "Wahyu Ardiansyah"

from .core import (
    DataType,
    StorageFormat,
    DeviceKind,
    DeviceDescriptor,
    ShapeDescriptor,
    Node,
    NodeKind,
    Operation,
    GraphModel,
    GraphBuilder,
    TensorValue,
)
from .registry import NodeRegistry
from .encoder import create_value
from .decoder import copy_value_to
from .executor import EvaluationExecutor
from .evaluation import Evaluation
from .config import EvalConfig
from .io import load_model, save_model
from .execution import ExecutionBackend, GraphInterpreter, OperatorRegistry

# Observability
from .observability import set_verbosity, Verbosity

# Errors
from .errors import (
    EvalBridgeError,
    NotLoadedError,
    DuplicateNameError,
    NodeNotFoundError,
    DimensionMismatchError,
    UnsupportedDataTypeError,
    UnsupportedPlacementError,
    DataTypeMismatchError,
    UnsupportedStorageFormatError,
    InvalidArgumentError,
    ConfigurationError,
    ModelNotFoundError,
    ModelFormatError,
    ExecutionError,
    InternalConsistencyError,
)

__all__ = [
    # Core types
    "DataType",
    "StorageFormat",
    "DeviceKind",
    "DeviceDescriptor",
    "ShapeDescriptor",
    "Node",
    "NodeKind",
    "Operation",
    "GraphModel",
    "GraphBuilder",
    "TensorValue",
    # Exchange layer
    "NodeRegistry",
    "create_value",
    "copy_value_to",
    "EvaluationExecutor",
    "Evaluation",
    "EvalConfig",
    "load_model",
    "save_model",
    # Execution
    "ExecutionBackend",
    "GraphInterpreter",
    "OperatorRegistry",
    # Observability
    "set_verbosity",
    "Verbosity",
    # Errors
    "EvalBridgeError",
    "NotLoadedError",
    "DuplicateNameError",
    "NodeNotFoundError",
    "DimensionMismatchError",
    "UnsupportedDataTypeError",
    "UnsupportedPlacementError",
    "DataTypeMismatchError",
    "UnsupportedStorageFormatError",
    "InvalidArgumentError",
    "ConfigurationError",
    "ModelNotFoundError",
    "ModelFormatError",
    "ExecutionError",
    "InternalConsistencyError",
    # Version
    "__version__",
    "__author__",
]
