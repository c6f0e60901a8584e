# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Dense Tensor Encoder

Builds a dense TensorValue from host-side sequences of samples.
"""

import logging
from typing import Any, Sequence, Union

import numpy as np

from .core import DataType, DeviceDescriptor, TensorValue
from .errors import DimensionMismatchError
from .registry import NodeRegistry

logger = logging.getLogger("evalbridge.encoder")


def create_value(
    registry: NodeRegistry,
    name: str,
    sequences: Sequence[Sequence[Any]],
    device: Union[str, DeviceDescriptor] = DeviceDescriptor.cpu(),
    dtype: Any = DataType.Float32,
) -> TensorValue:
    """
    Pack a batch of sequences into one dense value for a node.

    Each sequence is a flat list holding zero or more whole samples of
    the node's shape. Sequences shorter than the longest one are zero
    padded and their true lengths recorded in the value's mask.

    Args:
        registry: Registry of the graph the node belongs to.
        name: Input or output node name.
        sequences: The batch, one flat list per sequence.
        device: Placement of the returned value.
        dtype: Element type tag (float32 or float64).

    Returns:
        TensorValue with shape ``node.shape ++ [samples] ++ [sequences]``.

    Raises:
        NodeNotFoundError: Unknown node name.
        UnsupportedDataTypeError: dtype is not float32/float64.
        DimensionMismatchError: A sequence is not a whole number of samples.
    """
    node = registry.resolve(name)
    data_type = DataType.resolve(dtype)
    device = DeviceDescriptor.parse(device)
    dim = node.shape.total_size()

    flat: list[np.ndarray] = []
    for index, seq in enumerate(sequences):
        arr = np.asarray(seq, dtype=data_type.numpy_dtype).reshape(-1)
        if (dim == 0 and arr.size != 0) or (dim != 0 and arr.size % dim != 0):
            raise DimensionMismatchError(name, dim, int(arr.size), index)
        flat.append(arr)

    lengths = [arr.size // dim if dim else 0 for arr in flat]
    samples = max(lengths, default=0)

    buffer = np.zeros((len(flat), samples * dim), dtype=data_type.numpy_dtype)
    for row, arr in zip(buffer, flat):
        row[: arr.size] = arr

    shape = node.shape.append_shape([samples, len(flat)])
    logger.debug(
        f"Encoded {len(flat)} sequences for '{name}' into {list(shape)} ({data_type.value})"
    )

    return TensorValue(
        shape=shape,
        data=buffer,
        data_type=data_type,
        device=device,
        mask=lengths,
    )
