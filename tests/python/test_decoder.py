# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Tests for the dense decoder (copy_value_to).

Validates:
- Check order and error types
- Append semantics
- Mask trimming
- Fatal layout violations
"""

import numpy as np
import pytest

from evalbridge.core import (
    DataType,
    DeviceDescriptor,
    GraphBuilder,
    ShapeDescriptor,
    StorageFormat,
    TensorValue,
)
from evalbridge.decoder import copy_value_to
from evalbridge.encoder import create_value
from evalbridge.errors import (
    DataTypeMismatchError,
    EvalBridgeError,
    InternalConsistencyError,
    NodeNotFoundError,
    UnsupportedPlacementError,
    UnsupportedStorageFormatError,
)
from evalbridge.registry import NodeRegistry


@pytest.fixture
def registry():
    builder = GraphBuilder("decode")
    builder.add_input("in", [2])
    builder.add_output("out", [2])
    return NodeRegistry(builder.build())


def _dense(shape, data, data_type=DataType.Float32, **kwargs):
    return TensorValue(ShapeDescriptor(shape), data, data_type, **kwargs)


class TestDecode:
    """Successful decoding."""

    def test_fixed_length(self, registry):
        value = _dense([2, 2, 2], [1, 2, 3, 4, 5, 6, 7, 8])
        result = copy_value_to(registry, "out", value, [])
        assert result == [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]]

    def test_appends_to_existing(self, registry):
        existing = [[9.0]]
        value = _dense([2, 1, 1], [1, 2])
        result = copy_value_to(registry, "out", value, existing)
        assert result is existing
        assert existing == [[9.0], [1.0, 2.0]]

    def test_elements_are_python_floats(self, registry):
        value = _dense([2, 1, 1], [1, 2], DataType.Float64)
        result = copy_value_to(registry, "out", value, [], dtype=np.float64)
        assert all(type(x) is float for x in result[0])

    def test_mask_trims_padding(self, registry):
        value = _dense([2, 2, 2], [1, 2, 3, 4, 5, 6, 0, 0], mask=[2, 1])
        assert copy_value_to(registry, "out", value, []) == [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0]]

    def test_zero_sequences(self, registry):
        value = _dense([2, 0, 0], [])
        assert copy_value_to(registry, "out", value, []) == []

    def test_value_unchanged(self, registry):
        value = create_value(registry, "in", [[1.0, 2.0]])
        before = value.data().copy()
        copy_value_to(registry, "in", value, [])
        np.testing.assert_array_equal(value.data(), before)

    def test_round_trip_variable_length(self, registry):
        batch = [[1.0, 2.0, 3.0, 4.0], [], [5.0, 6.0]]
        value = create_value(registry, "in", batch, dtype=np.float64)
        assert copy_value_to(registry, "in", value, [], dtype=np.float64) == batch


class TestRecoverableErrors:
    """Checks that report caller misuse."""

    def test_placement_checked_first(self, registry):
        value = _dense([2, 1, 1], [1, 2], DataType.Float64, device=DeviceDescriptor.gpu(0))
        with pytest.raises(UnsupportedPlacementError):
            copy_value_to(registry, "unknown", value, [], dtype=np.int32)

    @pytest.mark.parametrize("dtype", [np.int32, np.float16, "int64"])
    def test_other_requested_type_is_mismatch(self, registry, dtype):
        value = _dense([2, 1, 1], [1, 2])
        with pytest.raises(DataTypeMismatchError) as exc_info:
            copy_value_to(registry, "out", value, [], dtype=dtype)
        assert exc_info.value.actual == "float32"
        assert exc_info.value.expected in ("int32", "float16", "int64")

    def test_dtype_mismatch(self, registry):
        value = _dense([2, 1, 1], [1, 2], DataType.Float64)
        with pytest.raises(DataTypeMismatchError) as exc_info:
            copy_value_to(registry, "out", value, [], dtype=np.float32)
        assert exc_info.value.expected == "float32"
        assert exc_info.value.actual == "float64"

    @pytest.mark.parametrize("data_type", [DataType.Float32, DataType.Float64])
    @pytest.mark.parametrize("storage_format", [StorageFormat.SparseCSC, StorageFormat.SparseBlockCol])
    def test_non_dense(self, registry, data_type, storage_format):
        value = _dense([2, 1, 1], [1, 2], data_type, storage_format=storage_format)
        with pytest.raises(UnsupportedStorageFormatError):
            copy_value_to(registry, "out", value, [], dtype=data_type)

    def test_unknown_node(self, registry):
        value = _dense([2, 1, 1], [1, 2])
        with pytest.raises(NodeNotFoundError):
            copy_value_to(registry, "missing", value, [])

    def test_failed_call_leaves_sequences(self, registry):
        existing = [[1.0]]
        value = _dense([2, 1, 1], [1, 2], DataType.Float64)
        with pytest.raises(DataTypeMismatchError):
            copy_value_to(registry, "out", value, existing)
        assert existing == [[1.0]]


class TestInternalConsistency:
    """Layout violations are fatal and bypass the recoverable hierarchy."""

    def test_rank_mismatch(self, registry):
        value = _dense([2, 1, 1, 1], [1, 2])
        with pytest.raises(InternalConsistencyError):
            copy_value_to(registry, "out", value, [])

    def test_size_mismatch(self, registry):
        value = _dense([3, 1, 1], [1, 2, 3])
        with pytest.raises(InternalConsistencyError):
            copy_value_to(registry, "out", value, [])

    def test_not_caught_as_recoverable(self, registry):
        value = _dense([2, 1, 1, 1], [1, 2])
        with pytest.raises(InternalConsistencyError):
            try:
                copy_value_to(registry, "out", value, [])
            except EvalBridgeError:
                pytest.fail("layout violation reported as a recoverable error")
