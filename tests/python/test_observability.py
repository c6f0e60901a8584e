# Copyright 2025 Wahyu Ardiansyah
# Licensed under the Apache License, Version 2.0

"""
Tests for evalbridge Observability Module

Validates:
- Verbosity enum
- LogEntry serialization
- EvalLogger singleton
- Verbosity control functions
- Log records emitted by evaluation
"""

import io
import json

import pytest

from evalbridge.core import GraphBuilder
from evalbridge.encoder import create_value
from evalbridge.executor import EvaluationExecutor
from evalbridge.observability import (
    Verbosity,
    LogEntry,
    EvalLogger,
    get_logger,
    set_verbosity,
)
from evalbridge.registry import NodeRegistry


class TestVerbosity:
    """Tests for Verbosity enum."""

    def test_verbosity_values(self):
        assert Verbosity.SILENT == 0
        assert Verbosity.ERROR == 1
        assert Verbosity.WARNING == 2
        assert Verbosity.INFO == 3
        assert Verbosity.DEBUG == 4

    def test_verbosity_comparison(self):
        assert Verbosity.DEBUG > Verbosity.INFO > Verbosity.WARNING > Verbosity.ERROR > Verbosity.SILENT


class TestLogEntry:
    """Tests for LogEntry dataclass."""

    def test_log_entry_to_json(self):
        entry = LogEntry(
            level="DEBUG",
            message="Evaluation complete",
            timestamp="2025-01-01T00:00:00",
            component="executor",
            duration_ms=10.5,
        )
        data = json.loads(entry.to_json())

        assert data["level"] == "DEBUG"
        assert data["component"] == "executor"
        assert data["duration_ms"] == 10.5
        assert "model_name" not in data
        assert "extra" not in data

    def test_log_entry_to_text(self):
        entry = LogEntry(
            level="INFO",
            message="Model attached",
            timestamp="2025-01-01T00:00:00",
            component="evaluation",
            duration_ms=5.25,
        )
        assert entry.to_text() == "[INFO] [evaluation] Model attached (5.25ms)"


class TestEvalLogger:
    """Tests for EvalLogger singleton."""

    def _capture(self, level):
        logger = EvalLogger.get()
        logger.set_verbosity(level)
        output = io.StringIO()
        logger.set_output(output)
        return logger, output

    def test_singleton_pattern(self):
        assert EvalLogger.get() is EvalLogger.get()

    def test_default_verbosity(self):
        assert EvalLogger.get().get_verbosity() == Verbosity.WARNING

    def test_env_verbosity(self, monkeypatch):
        monkeypatch.setenv("EVALBRIDGE_VERBOSITY", "4")
        EvalLogger.reset()
        assert EvalLogger.get().get_verbosity() == Verbosity.DEBUG

    def test_invalid_env_verbosity_ignored(self, monkeypatch):
        monkeypatch.setenv("EVALBRIDGE_VERBOSITY", "loud")
        EvalLogger.reset()
        assert EvalLogger.get().get_verbosity() == Verbosity.WARNING

    def test_set_verbosity_clamped(self):
        logger = EvalLogger.get()
        logger.set_verbosity(9)
        assert logger.get_verbosity() == Verbosity.DEBUG
        logger.set_verbosity(-3)
        assert logger.get_verbosity() == Verbosity.SILENT

    def test_info_logging(self):
        logger, output = self._capture(Verbosity.INFO)
        logger.info("Model attached", component="evaluation")
        assert "[INFO] [evaluation] Model attached" in output.getvalue()

    def test_debug_suppressed(self):
        logger, output = self._capture(Verbosity.INFO)
        logger.debug("hidden")
        assert output.getvalue() == ""

    def test_json_format(self):
        logger, output = self._capture(Verbosity.INFO)
        logger.set_json_format(True)
        logger.info("Model attached", model_name="linear", inputs=1)
        data = json.loads(output.getvalue().strip())
        assert data["model_name"] == "linear"
        assert data["extra"] == {"inputs": 1}

    def test_handler(self):
        logger, _ = self._capture(Verbosity.ERROR)
        entries = []
        logger.add_handler(entries.append)
        logger.error("failed", node="out")
        assert entries[0].node == "out"
        assert entries[0].level == "ERROR"


class TestModuleFunctions:
    """Tests for get_logger and set_verbosity."""

    def test_get_logger(self):
        assert get_logger() is EvalLogger.get()

    def test_set_verbosity_function(self):
        set_verbosity(Verbosity.DEBUG)
        assert get_logger().get_verbosity() == Verbosity.DEBUG


class TestEvaluationLogging:
    """Records emitted while evaluating."""

    def test_executor_emits_debug_record(self):
        builder = GraphBuilder("identity")
        builder.add_input("in", [1])
        builder.add_output("out", [1])
        builder.add_operation("Identity", "copy", ["in"], ["out"])
        graph = builder.build()
        registry = NodeRegistry(graph)

        logger = get_logger()
        logger.set_verbosity(Verbosity.DEBUG)
        logger.set_output(io.StringIO())
        entries = []
        logger.add_handler(entries.append)

        EvaluationExecutor().evaluate(graph, {"in": create_value(registry, "in", [[1.0]])}, {"out": None})

        records = [e for e in entries if e.component == "executor"]
        assert len(records) == 1
        assert records[0].model_name == "identity"
        assert records[0].duration_ms is not None
        assert records[0].extra["backend"] == "numpy"

    @pytest.mark.parametrize("level", [Verbosity.SILENT, Verbosity.WARNING])
    def test_quiet_levels_emit_nothing(self, level):
        logger = get_logger()
        logger.set_verbosity(level)
        output = io.StringIO()
        logger.set_output(output)
        logger.info("not shown")
        logger.debug("not shown")
        assert output.getvalue() == ""
