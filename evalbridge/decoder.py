# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Dense Tensor Decoder

Copies a dense TensorValue back into host-side sequences.

The checks run in a fixed order and each has its own failure type, so
callers can tell placement, element type and storage problems apart from
a backend that broke the layout contract.
"""

import logging
from typing import Any

import numpy as np

from .core import DataType, StorageFormat, TensorValue
from .errors import (
    DataTypeMismatchError,
    InternalConsistencyError,
    UnsupportedDataTypeError,
    UnsupportedPlacementError,
    UnsupportedStorageFormatError,
)
from .registry import NodeRegistry

logger = logging.getLogger("evalbridge.decoder")


def copy_value_to(
    registry: NodeRegistry,
    name: str,
    value: TensorValue,
    sequences: list,
    dtype: Any = DataType.Float32,
) -> list:
    """
    Append the sequences held by ``value`` to ``sequences``.

    Each appended sequence is a flat list of Python floats, samples laid
    out back to back. Padding recorded in the value's mask is dropped.

    Args:
        registry: Registry of the graph the node belongs to.
        name: Node the value was produced for.
        value: Source value; only read.
        sequences: Output batch, appended to in place.
        dtype: Element type the caller expects.

    Returns:
        The ``sequences`` list, for chaining.

    Raises:
        UnsupportedPlacementError: Value is not in host memory.
        DataTypeMismatchError: dtype differs from the value's element type,
            including dtypes other than float32/float64.
        UnsupportedStorageFormatError: Value is not dense.
        NodeNotFoundError: Unknown node name.
        InternalConsistencyError: Value shape does not fit the node.
    """
    if not value.device.is_host:
        raise UnsupportedPlacementError(str(value.device))

    try:
        data_type = DataType.resolve(dtype)
    except UnsupportedDataTypeError as e:
        raise DataTypeMismatchError(e.dtype, value.data_type.value) from e
    if data_type is not value.data_type:
        raise DataTypeMismatchError(data_type.value, value.data_type.value)

    if value.storage_format is not StorageFormat.Dense:
        raise UnsupportedStorageFormatError(value.storage_format.name)

    node = registry.resolve(name)
    node_rank = node.shape.rank()
    value_shape = value.shape

    if value_shape.rank() != node_rank + 2:
        raise InternalConsistencyError(
            "value rank must be node rank + 2",
            context={
                "node": name,
                "node_shape": list(node.shape),
                "value_shape": list(value_shape),
            },
        )

    elements_per_sample = node.shape.total_size()
    samples_per_sequence = value_shape.dimension_at(node_rank)
    num_sequences = value_shape.dimension_at(node_rank + 1)
    num_elements = value_shape.total_size()

    if elements_per_sample * samples_per_sequence * num_sequences != num_elements:
        raise InternalConsistencyError(
            "value size does not match node sample size",
            context={
                "node": name,
                "elements_per_sample": elements_per_sample,
                "samples_per_sequence": samples_per_sequence,
                "num_sequences": num_sequences,
                "value_elements": num_elements,
            },
        )

    host_data = np.array(value.data(), dtype=data_type.numpy_dtype, copy=True)

    chunk = elements_per_sample * samples_per_sequence
    lengths = value.sequence_lengths()
    for seq_index in range(num_sequences):
        start = seq_index * chunk
        valid = lengths[seq_index] * elements_per_sample
        sequences.append(host_data[start : start + valid].tolist())

    logger.debug(f"Decoded {num_sequences} sequences for '{name}' from {list(value_shape)}")
    return sequences
