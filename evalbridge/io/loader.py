# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Model Loader

Reads and writes GraphModel descriptions stored as JSON:

    {
        "name": "identity",
        "dtype": "float32",
        "inputs": [{"name": "in", "shape": [2]}],
        "outputs": [{"name": "out", "shape": [2]}],
        "operations": [
            {"op_type": "Identity", "name": "copy",
             "inputs": ["in"], "outputs": ["out"], "attrs": {}}
        ],
        "constants": {"W": [[1.0, 0.0], [0.0, 1.0]]}
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np

from ..core import DataType, GraphModel, Node, NodeKind, Operation, ShapeDescriptor
from ..errors import EvalBridgeError, ModelFormatError, ModelNotFoundError

logger = logging.getLogger("evalbridge.io.loader")


def load_model(path: Union[str, Path]) -> GraphModel:
    """
    Load a GraphModel from a JSON file.

    Raises:
        ModelNotFoundError: If the path does not exist.
        ModelFormatError: If the file is not a valid graph description.
    """
    path = Path(path)
    if not path.is_file():
        raise ModelNotFoundError(str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            description = json.load(f)
    except json.JSONDecodeError as e:
        raise ModelFormatError(f"not valid JSON ({e.msg} at line {e.lineno})", str(path)) from e
    except UnicodeDecodeError as e:
        raise ModelFormatError(f"not valid UTF-8 (byte {e.start})", str(path)) from e

    graph = graph_from_dict(description, source=str(path))
    logger.info(
        f"Loaded model '{graph.name}' from {path}: "
        f"{len(graph.inputs)} inputs, {len(graph.outputs)} outputs"
    )
    return graph


def graph_from_dict(description: Any, source: Optional[str] = None) -> GraphModel:
    """Build a GraphModel from a parsed description."""
    if not isinstance(description, dict):
        raise ModelFormatError("top level must be an object", source)

    try:
        dtype = DataType.resolve(description.get("dtype", "float32"))
        inputs = tuple(_terminal(t, NodeKind.Input, dtype) for t in description.get("inputs", []))
        outputs = tuple(_terminal(t, NodeKind.Output, dtype) for t in description.get("outputs", []))
        operations = tuple(_operation(op) for op in description.get("operations", []))
        constants = {
            name: np.asarray(data, dtype=dtype.numpy_dtype)
            for name, data in description.get("constants", {}).items()
        }
    except EvalBridgeError as e:
        raise ModelFormatError(e.message, source) from e
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ModelFormatError(f"malformed entry ({e})", source) from e

    return GraphModel(
        name=description.get("name", ""),
        inputs=inputs,
        outputs=outputs,
        operations=operations,
        constants=constants,
    )


def _terminal(entry: dict, kind: NodeKind, dtype: DataType) -> Node:
    return Node(
        name=str(entry["name"]),
        kind=kind,
        shape=ShapeDescriptor(entry.get("shape", [])),
        dtype=dtype,
    )


def _operation(entry: dict) -> Operation:
    attrs = entry.get("attrs", {})
    return Operation(
        op_type=str(entry["op_type"]),
        name=str(entry.get("name", entry["op_type"])),
        inputs=tuple(entry.get("inputs", [])),
        outputs=tuple(entry.get("outputs", [])),
        attrs=tuple(sorted(attrs.items())),
    )


def graph_to_dict(graph: GraphModel) -> dict:
    """Inverse of graph_from_dict."""
    dtype = graph.inputs[0].dtype if graph.inputs else DataType.Float32
    return {
        "name": graph.name,
        "dtype": dtype.value,
        "inputs": [{"name": n.name, "shape": list(n.shape)} for n in graph.inputs],
        "outputs": [{"name": n.name, "shape": list(n.shape)} for n in graph.outputs],
        "operations": [
            {
                "op_type": op.op_type,
                "name": op.name,
                "inputs": list(op.inputs),
                "outputs": list(op.outputs),
                "attrs": dict(op.attrs),
            }
            for op in graph.operations
        ],
        "constants": {name: arr.tolist() for name, arr in graph.constants.items()},
    }


def save_model(graph: GraphModel, path: Union[str, Path]) -> Path:
    """Write a GraphModel as JSON; returns the path written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(graph_to_dict(graph), f, indent=2)
    logger.debug(f"Saved model '{graph.name}' to {path}")
    return path
