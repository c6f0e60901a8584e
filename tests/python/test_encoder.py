# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Tests for the dense encoder (create_value).
"""

import numpy as np
import pytest

from evalbridge.core import (
    DataType,
    DeviceDescriptor,
    GraphBuilder,
    ShapeDescriptor,
    StorageFormat,
)
from evalbridge.encoder import create_value
from evalbridge.errors import (
    DimensionMismatchError,
    NodeNotFoundError,
    UnsupportedDataTypeError,
)
from evalbridge.registry import NodeRegistry


@pytest.fixture
def registry():
    builder = GraphBuilder("encode")
    builder.add_input("vec", [3])
    builder.add_input("pair", [2])
    builder.add_input("grid", [2, 2])
    builder.add_output("out", [2])
    return NodeRegistry(builder.build())


class TestShape:
    """Value shape is node shape ++ [samples, sequences]."""

    def test_equal_lengths(self, registry):
        value = create_value(registry, "pair", [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]])
        assert value.shape == ShapeDescriptor([2, 2, 2])
        assert value.data_type is DataType.Float32
        assert value.storage_format is StorageFormat.Dense
        assert value.device.is_host
        assert value.mask is None

    def test_buffer_order(self, registry):
        value = create_value(registry, "pair", [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]])
        np.testing.assert_array_equal(value.data(), [1, 2, 3, 4, 5, 6, 7, 8])

    def test_multi_dimensional_sample(self, registry):
        value = create_value(registry, "grid", [[1.0, 2.0, 3.0, 4.0]])
        assert value.shape == ShapeDescriptor([2, 2, 1, 1])

    def test_output_node_accepted(self, registry):
        value = create_value(registry, "out", [[0.5, 1.5]])
        assert value.shape == ShapeDescriptor([2, 1, 1])

    def test_empty_batch(self, registry):
        value = create_value(registry, "vec", [])
        assert value.shape == ShapeDescriptor([3, 0, 0])
        assert value.data().size == 0

    def test_empty_sequence(self, registry):
        value = create_value(registry, "vec", [[]])
        assert value.shape == ShapeDescriptor([3, 0, 1])
        assert value.sequence_lengths() == [0]


class TestVariableLength:
    """Shorter sequences are padded and masked."""

    def test_padding_and_mask(self, registry):
        value = create_value(registry, "pair", [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0]])
        assert value.shape == ShapeDescriptor([2, 2, 2])
        assert value.mask == (2, 1)
        np.testing.assert_array_equal(value.data(), [1, 2, 3, 4, 5, 6, 0, 0])

    def test_mask_counts_samples(self, registry):
        value = create_value(registry, "vec", [[1.0, 2.0, 3.0], [], [1.0] * 9])
        assert value.samples_per_sequence == 3
        assert value.sequence_lengths() == [1, 0, 3]


class TestErrors:
    """Failure modes of create_value."""

    def test_length_not_multiple_of_sample_size(self, registry):
        with pytest.raises(DimensionMismatchError) as exc_info:
            create_value(registry, "vec", [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0, 5.0]])
        assert exc_info.value.sample_size == 3
        assert exc_info.value.sequence_length == 5

    def test_unknown_node(self, registry):
        with pytest.raises(NodeNotFoundError):
            create_value(registry, "nope", [[1.0]])

    @pytest.mark.parametrize("dtype", [np.int32, np.float16, "int64"])
    def test_unsupported_dtype(self, registry, dtype):
        with pytest.raises(UnsupportedDataTypeError):
            create_value(registry, "pair", [[1.0, 2.0]], dtype=dtype)

    def test_node_checked_before_dtype(self, registry):
        with pytest.raises(NodeNotFoundError):
            create_value(registry, "nope", [[1.0]], dtype=np.int32)

    def test_node_checked_before_device(self, registry):
        with pytest.raises(NodeNotFoundError):
            create_value(registry, "nope", [[1.0]], device="tpu")


class TestTypesAndPlacement:
    """Element type and device tags."""

    def test_float64(self, registry):
        value = create_value(registry, "pair", [[1.0, 2.0]], dtype=np.float64)
        assert value.data_type is DataType.Float64
        assert value.data().dtype == np.float64

    def test_python_float_means_float64(self, registry):
        value = create_value(registry, "pair", [[1.0, 2.0]], dtype=float)
        assert value.data_type is DataType.Float64

    def test_device_tag(self, registry):
        value = create_value(registry, "pair", [[1.0, 2.0]], device="gpu:1")
        assert value.device == DeviceDescriptor.gpu(1)

    def test_input_not_aliased(self, registry):
        source = np.array([1.0, 2.0], dtype=np.float32)
        value = create_value(registry, "pair", [source])
        source[0] = 9.0
        assert value.data()[0] == 1.0
