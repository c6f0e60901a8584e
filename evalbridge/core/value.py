# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
TensorValue

A typed buffer tagged with element type, storage format and placement.

Dense values use a column-major logical shape
``[sample dims..., samples per sequence, sequence count]``: element ``e``
of sample ``t`` in sequence ``n`` sits at flat index
``e + sample_size * (t + samples * n)``. Reshaping the flat buffer in C
order to ``(sequences, samples, sample_size)`` therefore gives one row per
sequence.
"""

from typing import Any, Optional, Sequence

import numpy as np

from ..errors import InvalidArgumentError
from .types import DataType, DeviceDescriptor, ShapeDescriptor, StorageFormat


class TensorValue:
    """
    A batch of sequences stored in one buffer.

    Attributes:
        shape: Logical shape; the last two axes are samples per sequence
            and sequence count.
        data_type: Element type of the buffer.
        storage_format: Dense for everything this layer produces.
        device: Placement of the buffer.
        mask: Valid sample count per sequence, or None when every
            sequence fills all sample slots.
    """

    def __init__(
        self,
        shape: ShapeDescriptor,
        data: Any,
        data_type: DataType,
        device: DeviceDescriptor = DeviceDescriptor.cpu(),
        storage_format: StorageFormat = StorageFormat.Dense,
        mask: Optional[Sequence[int]] = None,
    ):
        if shape.rank() < 2:
            raise InvalidArgumentError(
                "A value needs at least the sample and sequence axes",
                parameter="shape",
                received=repr(shape),
            )

        self.shape = shape
        self.data_type = data_type
        self.device = device
        self.storage_format = storage_format
        self._data = np.array(data, dtype=data_type.numpy_dtype).reshape(-1)
        self._data.setflags(write=False)
        if self._data.size != shape.total_size():
            raise InvalidArgumentError(
                "Buffer length does not match the value shape",
                parameter="data",
                expected=f"{shape.total_size()} elements for {list(shape)}",
                received=f"{self._data.size} elements",
            )

        samples = shape[-2]
        sequences = shape[-1]
        if mask is not None:
            mask = tuple(int(m) for m in mask)
            if len(mask) != sequences or any(m < 0 or m > samples for m in mask):
                raise InvalidArgumentError(
                    "Mask must hold one count in [0, samples] per sequence",
                    parameter="mask",
                    expected=f"{sequences} counts <= {samples}",
                    received=str(list(mask)),
                )
            if all(m == samples for m in mask):
                mask = None
        self.mask = mask

    @property
    def samples_per_sequence(self) -> int:
        return self.shape[-2]

    @property
    def num_sequences(self) -> int:
        return self.shape[-1]

    @property
    def sample_shape(self) -> ShapeDescriptor:
        return ShapeDescriptor(self.shape.dims[:-2])

    def sequence_lengths(self) -> list[int]:
        """Valid sample count of each sequence."""
        if self.mask is None:
            return [self.samples_per_sequence] * self.num_sequences
        return list(self.mask)

    def data(self) -> np.ndarray:
        """Read-only view of the flat buffer in its native order."""
        return self._data

    def as_sequences(self) -> np.ndarray:
        """Read-only ``(sequences, samples, sample_size)`` view of the buffer."""
        sample_size = self.sample_shape.total_size()
        return self._data.reshape(self.num_sequences, self.samples_per_sequence, sample_size)

    def deep_clone(self, device: Optional[DeviceDescriptor] = None) -> "TensorValue":
        """
        Copy the value, optionally onto another device.

        This is the explicit transfer path; the decoder never moves data
        between placements on its own.
        """
        return TensorValue(
            shape=self.shape,
            data=self._data,
            data_type=self.data_type,
            device=device if device is not None else self.device,
            storage_format=self.storage_format,
            mask=self.mask,
        )

    def __repr__(self) -> str:
        return (
            f"TensorValue(shape={list(self.shape)}, dtype={self.data_type.value}, "
            f"format={self.storage_format.name}, device={self.device})"
        )
