# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""evalbridge Core Module"""

from .types import (
    DataType,
    StorageFormat,
    DeviceKind,
    DeviceDescriptor,
    ShapeDescriptor,
)
from .node import Node, NodeKind, Operation
from .graph import GraphModel, GraphBuilder
from .value import TensorValue

__all__ = [
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
]
