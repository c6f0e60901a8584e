# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
evalbridge Error Hierarchy

Provides error types for the tensor exchange layer with:
- Clear error categorization
- Helpful error messages with suggestions
- Context information for debugging

Recoverable errors (caller misuse) derive from EvalBridgeError:
- NotLoadedError: No model loaded
- DuplicateNameError: Two nodes of one kind share a name
- NodeNotFoundError: Name matches no node of the required kind
- DimensionMismatchError: Sequence length is not a whole number of samples
- UnsupportedDataTypeError: Element type other than float32/float64
- UnsupportedPlacementError: Decoding a value that is not on the host
- DataTypeMismatchError: Requested element type differs from the value's
- UnsupportedStorageFormatError: Value is not dense
- InvalidArgumentError, ConfigurationError, ModelNotFoundError, ExecutionError

InternalConsistencyError is fatal and sits outside that hierarchy:
it signals that an execution backend broke the shape contract.
"""

from typing import Optional


def _format(message: str, suggestions: list[str], context: dict) -> str:
    lines = [message]

    if suggestions:
        lines.append("")
        lines.append("Suggestions:")
        for i, suggestion in enumerate(suggestions, 1):
            lines.append(f"  {i}. {suggestion}")

    if context:
        lines.append("")
        lines.append("Context:")
        for key, value in context.items():
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)


class EvalBridgeError(Exception):
    """
    Base class for all recoverable evalbridge errors.

    Attributes:
        message: Human-readable error message
        suggestions: List of suggestions to fix the error
        context: Optional context dictionary for debugging
    """

    def __init__(
        self,
        message: str,
        suggestions: Optional[list[str]] = None,
        context: Optional[dict] = None,
    ):
        self.message = message
        self.suggestions = suggestions or []
        self.context = context or {}

        super().__init__(_format(self.message, self.suggestions, self.context))


class NotLoadedError(EvalBridgeError):
    """Raised when evaluation is requested before a model is loaded."""

    def __init__(self, message: str = "No model is loaded"):
        super().__init__(
            message=message,
            suggestions=["Load the model before evaluation"],
        )


class DuplicateNameError(EvalBridgeError):
    """Two nodes of the same kind share a name."""

    def __init__(self, name: str, kind: str):
        self.name = name
        self.kind = kind
        super().__init__(
            message=f"Duplicated {kind.lower()} node name '{name}'",
            suggestions=["Give every input and every output node a unique name"],
            context={"name": name, "kind": kind},
        )


class NodeNotFoundError(EvalBridgeError):
    """A name matched no node of the required kind."""

    def __init__(
        self,
        name: str,
        kind: Optional[str] = None,
        available: Optional[list[str]] = None,
    ):
        self.name = name
        self.kind = kind
        self.available = available or []

        what = f"{kind.lower()} node" if kind else "node"
        context = {"name": name}
        if kind:
            context["kind"] = kind
        if self.available:
            context["available"] = ", ".join(self.available)

        super().__init__(
            message=f"No {what} '{name}' found",
            suggestions=["Check the node names reported by get_nodes_shape()"],
            context=context,
        )


class DimensionMismatchError(EvalBridgeError):
    """Sequence length is not a multiple of the node's sample size."""

    def __init__(
        self,
        node_name: str,
        sample_size: int,
        sequence_length: int,
        sequence_index: Optional[int] = None,
    ):
        self.node_name = node_name
        self.sample_size = sample_size
        self.sequence_length = sequence_length

        context = {
            "node": node_name,
            "sample_size": sample_size,
            "sequence_length": sequence_length,
        }
        if sequence_index is not None:
            context["sequence_index"] = sequence_index

        super().__init__(
            message=(
                "The number of data in the sequence does not match "
                "the node dimension"
            ),
            suggestions=[
                f"Sequence lengths must be multiples of {sample_size}",
            ],
            context=context,
        )


class UnsupportedDataTypeError(EvalBridgeError):
    """Element type is neither float32 nor float64."""

    def __init__(self, dtype: str):
        self.dtype = dtype
        super().__init__(
            message=(
                f"The data type {dtype} is not supported. "
                "Only float32 or float64 is supported"
            ),
            suggestions=["Convert the data to float32 or float64"],
            context={"dtype": dtype},
        )


class UnsupportedPlacementError(EvalBridgeError):
    """Value must be in host memory to be copied out."""

    def __init__(self, device: str):
        self.device = device
        super().__init__(
            message="Currently only CPU device is supported",
            suggestions=["Transfer the value with value.deep_clone(DeviceDescriptor.cpu())"],
            context={"device": device},
        )


class DataTypeMismatchError(EvalBridgeError):
    """Requested element type differs from the value's element type."""

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message="The value type does not match the list type",
            context={"requested": expected, "value": actual},
        )


class UnsupportedStorageFormatError(EvalBridgeError):
    """Value is not stored densely."""

    def __init__(self, storage_format: str):
        self.storage_format = storage_format
        super().__init__(
            message="The value is not in dense format",
            context={"storage_format": storage_format},
        )


class InvalidArgumentError(EvalBridgeError, ValueError):
    """Programming error in the arguments of a call."""

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
    ):
        context = {}
        if parameter:
            context["parameter"] = parameter
        if expected:
            context["expected"] = expected
        if received:
            context["received"] = received

        super().__init__(message=message, context=context)


class ConfigurationError(EvalBridgeError):
    """
    Configuration or setup error.

    Raised when an environment variable or config field holds an
    unusable value.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
    ):
        context = {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = str(config_value)

        super().__init__(
            message=f"Configuration error: {message}",
            suggestions=["Check configuration parameters"],
            context=context,
        )


class ModelNotFoundError(EvalBridgeError, FileNotFoundError):
    """Model file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            message=f"File '{path}' not found",
            context={"path": path},
        )


class ModelFormatError(EvalBridgeError):
    """Model file exists but cannot be understood."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            message=f"Invalid model file: {message}",
            context={"path": path} if path else None,
        )


class ExecutionError(EvalBridgeError):
    """
    Error during graph execution.

    Raised by execution backends when an operation cannot be run.
    """

    def __init__(
        self,
        message: str,
        op_type: Optional[str] = None,
        op_name: Optional[str] = None,
        input_shapes: Optional[list] = None,
    ):
        context = {}
        if op_type:
            context["operation"] = op_type
        if op_name:
            context["op_name"] = op_name
        if input_shapes:
            context["input_shapes"] = str(input_shapes)

        super().__init__(
            message=f"Execution failed: {message}",
            context=context,
        )


class InternalConsistencyError(AssertionError):
    """
    A value violates the dense layout contract.

    Fatal: indicates the producer of the value returned an incompatible
    shape, not that the caller misused the API.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(_format(f"Internal consistency violated: {message}", [], self.context))
