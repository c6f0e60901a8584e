# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Core Types

Element types, storage formats, device placement and shapes shared by
every layer of evalbridge.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Iterable, Iterator, Union

import numpy as np

from ..errors import InvalidArgumentError, UnsupportedDataTypeError


class DataType(Enum):
    """Element types a TensorValue can hold."""

    Float32 = "float32"
    Float64 = "float64"

    @property
    def numpy_dtype(self) -> np.dtype:
        """Numpy dtype backing this element type."""
        return np.dtype(self.value)

    @classmethod
    def resolve(cls, dtype: Any) -> "DataType":
        """
        Map a caller supplied type tag to a DataType.

        Accepts a DataType, a numpy dtype or scalar type, the Python
        ``float`` builtin (double precision) or a dtype string.

        Raises:
            UnsupportedDataTypeError: For anything but float32/float64.
        """
        if isinstance(dtype, DataType):
            return dtype
        if dtype is float:
            return cls.Float64
        if dtype is None:
            raise UnsupportedDataTypeError("None")
        try:
            np_dtype = np.dtype(dtype)
        except (TypeError, ValueError):
            raise UnsupportedDataTypeError(_type_name(dtype)) from None
        for member in cls:
            if member.numpy_dtype == np_dtype:
                return member
        raise UnsupportedDataTypeError(_type_name(dtype))


def _type_name(dtype: Any) -> str:
    if isinstance(dtype, type):
        return dtype.__name__
    return str(dtype)


class StorageFormat(Enum):
    """Buffer storage formats."""

    Dense = auto()
    SparseCSC = auto()
    SparseBlockCol = auto()


class DeviceKind(Enum):
    """Where a buffer lives."""

    CPU = "cpu"
    GPU = "gpu"


@dataclass(frozen=True)
class DeviceDescriptor:
    """
    Placement token for tensor buffers.

    CPU is host-addressable memory; GPU(index) is an accelerator.
    """

    kind: DeviceKind = DeviceKind.CPU
    device_id: int = 0

    @classmethod
    def cpu(cls) -> "DeviceDescriptor":
        return cls(DeviceKind.CPU, 0)

    @classmethod
    def gpu(cls, device_id: int = 0) -> "DeviceDescriptor":
        return cls(DeviceKind.GPU, device_id)

    @classmethod
    def parse(cls, device: Union[str, "DeviceDescriptor"]) -> "DeviceDescriptor":
        """
        Parse device string into a descriptor.

        Args:
            device: Device string (e.g., "cpu", "gpu:1", "cuda:0").

        Returns:
            DeviceDescriptor for the string.
        """
        if isinstance(device, DeviceDescriptor):
            return device
        if not isinstance(device, str):
            raise InvalidArgumentError(
                f"Cannot interpret {device!r} as a device",
                parameter="device",
            )

        if ":" in device:
            name, index = device.split(":", 1)
            try:
                device_id = int(index)
            except ValueError:
                raise InvalidArgumentError(
                    f"Invalid device index in '{device}'",
                    parameter="device",
                    expected="<kind>:<int>",
                    received=device,
                ) from None
        else:
            name, device_id = device, 0

        name = name.strip().lower()
        if name == "cpu":
            return cls.cpu()
        if name in ("gpu", "cuda"):
            return cls.gpu(device_id)
        raise InvalidArgumentError(
            f"Unknown device kind '{name}'",
            parameter="device",
            expected="cpu, gpu or cuda",
            received=device,
        )

    @property
    def is_host(self) -> bool:
        return self.kind is DeviceKind.CPU

    def __str__(self) -> str:
        if self.is_host:
            return "cpu"
        return f"gpu:{self.device_id}"


@dataclass(frozen=True)
class ShapeDescriptor:
    """Represents tensor dimensions. Immutable."""

    dims: tuple[int, ...] = ()

    def __init__(self, dims: Iterable[int] = ()):
        dims = tuple(int(d) for d in dims)
        for d in dims:
            if d < 0:
                raise InvalidArgumentError(
                    f"Shape dimensions must be non-negative, got {list(dims)}",
                    parameter="dims",
                )
        object.__setattr__(self, "dims", dims)

    def rank(self) -> int:
        """Get number of dimensions."""
        return len(self.dims)

    def total_size(self) -> int:
        """Get total number of elements (1 for a scalar shape)."""
        result = 1
        for d in self.dims:
            result *= d
        return result

    def dimension_at(self, axis: int) -> int:
        """Get the extent of one axis."""
        if not 0 <= axis < len(self.dims):
            raise InvalidArgumentError(
                f"Axis {axis} out of range for rank {len(self.dims)}",
                parameter="axis",
            )
        return self.dims[axis]

    def append_shape(self, other: Union["ShapeDescriptor", Iterable[int]]) -> "ShapeDescriptor":
        """Return a new shape with other's dimensions appended."""
        extra = other.dims if isinstance(other, ShapeDescriptor) else tuple(other)
        return ShapeDescriptor(self.dims + tuple(extra))

    def __getitem__(self, idx: int) -> int:
        return self.dims[idx]

    def __iter__(self) -> Iterator[int]:
        return iter(self.dims)

    def __len__(self) -> int:
        return len(self.dims)

    def __repr__(self) -> str:
        return f"ShapeDescriptor({list(self.dims)})"
